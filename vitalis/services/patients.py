# vitalis/services/patients.py
from __future__ import annotations

import logging

from vitalis.errors import StorageError, ValidationError
from vitalis.models import ClinicalHistory, Patient
from vitalis.services.clinical_histories import ClinicalHistoryService, is_blank
from vitalis.stores import ClinicalHistoryStore, PatientStore, unit_of_work

logger = logging.getLogger(__name__)


class PatientService:
    def __init__(self, patients: PatientStore, histories: ClinicalHistoryStore):
        self.patients = patients
        self.histories = histories

    @property
    def session(self):
        return self.patients.session

    # ---------- Validierung ----------

    def _validate(self, patient: Patient) -> None:
        # wie der Formular-Filter: gespeichert und gesucht wird die DNI ohne Leerzeichen
        if isinstance(patient.national_id, str):
            patient.national_id = patient.national_id.strip()

        errors = {}
        for field, label in (
            ("national_id", "DNI"),
            ("first_name", "Nombre"),
            ("last_name", "Apellido"),
        ):
            if is_blank(getattr(patient, field)):
                errors[field] = [f"{label} es obligatorio."]
        if errors:
            raise ValidationError(
                "Faltan datos obligatorios: " + ", ".join(errors), errors=errors
            )

    def _ensure_unique_dni(self, patient: Patient) -> None:
        other = self.patients.find_by_dni(patient.national_id)
        if other is not None and other.id != patient.id:
            raise ValidationError(
                f"Ya existe un paciente activo con DNI {patient.national_id} (id={other.id}).",
                errors={"national_id": ["DNI duplicado."]},
            )

    # ---------- Schreiben ----------

    def create(self, patient: Patient) -> Patient:
        self._validate(patient)
        self._ensure_unique_dni(patient)
        self.patients.create(patient)
        logger.info("Patient #%s angelegt (DNI %s).", patient.id, patient.national_id)
        return patient

    def create_with_history(self, patient: Patient, history: ClinicalHistory) -> Patient:
        """
        Patient + Historia als eine Einheit anlegen.

        Reihenfolge: Patient speichern -> id holen -> ``history.patient_id`` setzen ->
        Historia speichern. Beides läuft in einer Transaktion; scheitert der zweite
        Schritt, wird zurückgerollt und der StorageError an den Aufrufer weitergereicht.
        """
        self._validate(patient)
        ClinicalHistoryService.validate(history)
        self._ensure_unique_dni(patient)

        try:
            with unit_of_work(self.session):
                self.patients.create(patient, commit=False)
                history.patient_id = patient.id
                self.histories.create(history, commit=False)
        except StorageError:
            # Rollback: nichts wurde persistiert, ids wieder zurücksetzen
            patient.id = None
            history.id = None
            history.patient_id = None
            raise

        patient.clinical_history = history
        logger.info(
            "Patient #%s mit Historia #%s (%s) angelegt.",
            patient.id, history.id, history.history_number,
        )
        return patient

    def update(self, patient: Patient) -> None:
        self._validate(patient)
        if self.patients.find_by_id(patient.id) is None:
            raise ValidationError(f"No existe un paciente activo con id={patient.id}.")
        self._ensure_unique_dni(patient)
        self.patients.update(patient)
        logger.info("Patient #%s aktualisiert.", patient.id)

    def delete(self, patient_id: int) -> None:
        """Logisches Löschen, die Historia des Patienten wird mitgelöscht."""
        with unit_of_work(self.session):
            self.histories.delete_by_patient_id(patient_id, commit=False)
            self.patients.delete(patient_id, commit=False)
        logger.info("Patient #%s inkl. Historia gelöscht.", patient_id)

    # ---------- Lesen ----------

    def get_all(self) -> list[Patient]:
        return self.patients.get_all()

    def find_by_id(self, patient_id: int) -> Patient | None:
        return self.patients.find_by_id(patient_id)

    def find_by_dni(self, dni: str) -> Patient | None:
        dni = (dni or "").strip()
        if not dni:
            raise ValidationError("Debe ingresar un DNI.", errors={"national_id": ["DNI es obligatorio."]})
        return self.patients.find_by_dni(dni)
