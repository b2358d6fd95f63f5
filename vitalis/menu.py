# vitalis/menu.py
from __future__ import annotations

import logging
from datetime import date

import click

from vitalis.errors import StorageError, ValidationError
from vitalis.forms import ClinicalHistoryForm, PatientForm, bind_form
from vitalis.models import ClinicalHistory, Patient
from vitalis.services import ClinicalHistoryService, PatientService

logger = logging.getLogger(__name__)

MENU_OPTIONS = [
    ("1", "Alta de paciente (con historia clínica)"),
    ("2", "Listar pacientes"),
    ("3", "Buscar paciente por DNI"),
    ("4", "Actualizar paciente"),
    ("5", "Actualizar historia clínica"),
    ("6", "Listar historias clínicas"),
    ("7", "Eliminar paciente"),
    ("0", "Salir"),
]

PATIENT_ROW = "| {:<4} | {:<10} | {:<15} | {:<15} | {:<12} | {:<5} |"
PATIENT_LINE = "+------+------------+-----------------+-----------------+--------------+-------+"

HISTORY_ROW = "| {:<4} | {:<12} | {:<5} | {:<10} | {:<8} |"
HISTORY_LINE = "+------+--------------+-------+------------+----------+"


def _fmt_date(d: date | None) -> str:
    return d.isoformat() if d else ""


def _or(value, fallback: str) -> str:
    return str(value) if value not in (None, "") else fallback


class MenuHandler:
    """Eine Methode pro Menüpunkt. Fehler werden von run_menu() angezeigt."""

    def __init__(self, patients: PatientService, histories: ClinicalHistoryService):
        self.patients = patients
        self.histories = histories

    # ---------- Eingabe ----------

    @staticmethod
    def read_input(label: str, current=None) -> str:
        """Freitext lesen; bei vorhandenem Wert wird er angezeigt und Enter behält ihn."""
        if current not in (None, ""):
            text = click.prompt(f"{label} [{current}]", default="", show_default=False)
            return text.strip() or str(current)
        return click.prompt(label, default="", show_default=False).strip()

    def _find_patient_by_prompt(self) -> Patient | None:
        dni = self.read_input("DNI del paciente")
        patient = self.patients.find_by_dni(dni)
        if patient is None:
            click.echo(f"⚠ No se encontró ningún paciente con DNI: {dni}")
        return patient

    # ---------- Aktionen ----------

    def create_patient(self) -> Patient:
        click.echo("== ALTA DE NUEVO PACIENTE ==")
        patient_data = {
            "first_name": self.read_input("Nombre"),
            "last_name": self.read_input("Apellido"),
            "national_id": self.read_input("DNI"),
            "birth_date": self.read_input("Fecha de nacimiento (YYYY-MM-DD, opcional)"),
        }
        patient_form = bind_form(PatientForm, patient_data)

        click.echo("== HISTORIA CLÍNICA (obligatoria) ==")
        history_data = {
            "history_number": self.read_input("Número de historia clínica"),
            "blood_type": self.read_input("Grupo sanguíneo (A+,A-,B+,B-,AB+,AB-,O+,O- o vacío)"),
            "medical_history": self.read_input("Antecedentes (opcional)"),
            "current_medication": self.read_input("Medicación actual (opcional)"),
            "notes": self.read_input("Observaciones (opcional)"),
        }
        history_form = bind_form(ClinicalHistoryForm, history_data)

        patient = Patient()
        patient_form.populate_obj(patient)
        history = ClinicalHistory(opened_date=date.today())
        history_form.populate_obj(history)

        self.patients.create_with_history(patient, history)
        click.echo(f"✅ Paciente {patient.full_name} guardado con ID: {patient.id}")
        return patient

    def list_patients(self) -> None:
        patients = self.patients.get_all()
        if not patients:
            click.echo("⚠ No hay pacientes registrados.")
            return

        click.echo("\n=== LISTADO DE PACIENTES ===")
        click.echo(PATIENT_LINE)
        click.echo(PATIENT_ROW.format("ID", "DNI", "NOMBRE", "APELLIDO", "NRO HC", "GRUPO"))
        click.echo(PATIENT_LINE)
        for p in patients:
            hc = p.clinical_history
            click.echo(PATIENT_ROW.format(
                p.id,
                p.national_id,
                p.first_name,
                p.last_name,
                hc.history_number if hc else "S/D",
                _or(hc.blood_type if hc else None, "-"),
            ))
        click.echo(PATIENT_LINE)

    def find_patient_by_dni(self) -> None:
        patient = self._find_patient_by_prompt()
        if patient is not None:
            self.print_patient_details(patient)

    def update_patient(self) -> None:
        patient = self._find_patient_by_prompt()
        if patient is None:
            return

        click.echo("Enter mantiene el valor actual.")
        data = {
            "national_id": self.read_input("DNI", patient.national_id),
            "first_name": self.read_input("Nombre", patient.first_name),
            "last_name": self.read_input("Apellido", patient.last_name),
            "birth_date": self.read_input("Fecha de nacimiento (YYYY-MM-DD)", _fmt_date(patient.birth_date)),
        }
        form = bind_form(PatientForm, data)
        form.populate_obj(patient)

        self.patients.update(patient)
        click.echo(f"✅ Paciente #{patient.id} actualizado.")

    def update_clinical_history(self) -> None:
        patient = self._find_patient_by_prompt()
        if patient is None:
            return
        history = patient.clinical_history
        if history is None:
            click.echo("⚠ El paciente no tiene Historia Clínica asociada.")
            return

        click.echo("Enter mantiene el valor actual.")
        data = {
            "history_number": self.read_input("Número de historia clínica", history.history_number),
            "blood_type": self.read_input("Grupo sanguíneo", _or(history.blood_type, "")),
            "medical_history": self.read_input("Antecedentes", history.medical_history),
            "current_medication": self.read_input("Medicación actual", history.current_medication),
            "notes": self.read_input("Observaciones", history.notes),
        }
        form = bind_form(ClinicalHistoryForm, data)
        form.populate_obj(history)

        self.histories.update(history)
        click.echo(f"✅ Historia clínica {history.history_number} actualizada.")

    def list_clinical_histories(self) -> None:
        histories = self.histories.get_all()
        if not histories:
            click.echo("⚠ No hay historias clínicas registradas.")
            return

        click.echo("\n=== LISTADO DE HISTORIAS CLÍNICAS ===")
        click.echo(HISTORY_LINE)
        click.echo(HISTORY_ROW.format("ID", "NRO HC", "GRUPO", "APERTURA", "PACIENTE"))
        click.echo(HISTORY_LINE)
        for h in histories:
            click.echo(HISTORY_ROW.format(
                h.id,
                h.history_number,
                _or(h.blood_type, "-"),
                _or(_fmt_date(h.opened_date), "-"),
                h.patient_id,
            ))
        click.echo(HISTORY_LINE)

    def delete_patient(self) -> None:
        patient = self._find_patient_by_prompt()
        if patient is None:
            return
        if not click.confirm(
            f"¿Eliminar a {patient.full_name} (DNI {patient.national_id}) y su historia clínica?",
            default=False,
        ):
            click.echo("Operación cancelada.")
            return
        self.patients.delete(patient.id)
        click.echo(f"✅ Paciente #{patient.id} eliminado.")

    # ---------- Ausgabe ----------

    @staticmethod
    def print_patient_details(p: Patient) -> None:
        h = p.clinical_history
        click.echo("\n" + "═" * 12 + " FICHA DEL PACIENTE " + "═" * 12)
        click.echo(f" {'Nombre completo':<20}: {p.full_name}")
        click.echo(f" {'DNI':<20}: {p.national_id}")
        click.echo(f" {'Fecha nacimiento':<20}: {_fmt_date(p.birth_date) or 'No registrada'}")
        click.echo("─" * 14 + " DATOS CLÍNICOS " + "─" * 14)
        if h is not None:
            click.echo(f" {'Nro. historia':<20}: {_or(h.history_number, 'S/D')}")
            click.echo(f" {'Grupo sanguíneo':<20}: {_or(h.blood_type, '-')}")
            click.echo(f" {'Antecedentes':<20}: {_or(h.medical_history, '-')}")
            click.echo(f" {'Medicación actual':<20}: {_or(h.current_medication, '-')}")
            click.echo(f" {'Observaciones':<20}: {_or(h.notes, '-')}")
        else:
            click.echo(" ⚠ El paciente no tiene Historia Clínica asociada.")
        click.echo("═" * 44)


def _actions(handler: MenuHandler) -> dict:
    return {
        "1": handler.create_patient,
        "2": handler.list_patients,
        "3": handler.find_patient_by_dni,
        "4": handler.update_patient,
        "5": handler.update_clinical_history,
        "6": handler.list_clinical_histories,
        "7": handler.delete_patient,
    }


def run_menu(handler: MenuHandler, clinic_name: str = "Vitalis") -> None:
    """
    Hauptschleife. Läuft bis "0".
    Fehler einer Aktion werden angezeigt und geloggt, das Menü läuft weiter.
    """
    actions = _actions(handler)
    while True:
        click.echo(f"\n===== {clinic_name.upper()} – MENÚ PRINCIPAL =====")
        for key, label in MENU_OPTIONS:
            click.echo(f" {key}. {label}")
        choice = click.prompt("Opción", default="", show_default=False).strip()

        if choice == "0":
            click.echo("Saliendo...")
            return
        if not choice.isdigit():
            click.echo("❌ Debe ingresar un número válido.")
            continue
        action = actions.get(choice)
        if action is None:
            click.echo("⚠ Opción inválida, intente de nuevo.")
            continue

        try:
            action()
        except ValidationError as e:
            click.echo(f"❌ Dato inválido: {e}")
        except StorageError as e:
            logger.error("Menüaktion %s fehlgeschlagen: %s", choice, e)
            click.echo(f"❌ Error de base de datos: {e}")
        except Exception as e:
            logger.exception("Unerwarteter Fehler in Menüaktion %s", choice)
            click.echo(f"❌ Ocurrió un error inesperado: {e}")
