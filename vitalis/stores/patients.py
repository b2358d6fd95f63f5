# vitalis/stores/patients.py
from __future__ import annotations

import logging

from sqlalchemy import and_, select, update
from sqlalchemy.orm import contains_eager
from sqlalchemy.orm.attributes import set_committed_value

from vitalis.errors import ValidationError
from vitalis.models import ClinicalHistory, Patient
from vitalis.stores.base import BaseStore

logger = logging.getLogger(__name__)

# Felder, die update() überschreibt; id und deleted nie (Löschen nur über delete())
MUTABLE_FIELDS = ("national_id", "first_name", "last_name", "birth_date")


class PatientStore(BaseStore):
    """
    Datenzugriff für Patienten.

    Lesende Methoden laden die aktive Historia per LEFT OUTER JOIN in derselben
    Abfrage mit. Gibt es keine passende Zeile, sind alle Historia-Spalten NULL und
    SQLAlchemy setzt ``clinical_history`` auf None.
    Löschen ist immer logisch (``deleted = True``).
    """

    def _select_with_history(self):
        return (
            select(Patient)
            .outerjoin(
                ClinicalHistory,
                and_(
                    ClinicalHistory.patient_id == Patient.id,
                    ClinicalHistory.deleted.is_(False),
                ),
            )
            .options(contains_eager(Patient.clinical_history))
            .where(Patient.deleted.is_(False))
            .execution_options(populate_existing=True)
        )

    def _fetch_one(self, stmt, what: str) -> Patient | None:
        with self._reading(what):
            patient = self.session.execute(stmt).unique().scalars().first()
        if patient is not None:
            self._detach(patient, patient.clinical_history)
        return patient

    def create(self, patient: Patient, *, commit: bool = True) -> Patient:
        if patient.id is not None:
            raise ValidationError(f"El paciente ya fue persistido (id={patient.id}).")
        with self._writing("paciente", commit):
            self.session.add(patient)
            self.session.flush()  # id vergeben
        # neu angelegt -> noch keine Historia, Attribut gilt damit als geladen
        set_committed_value(patient, "clinical_history", None)
        self._detach(patient)
        logger.debug("Patient angelegt: %r", patient)
        return patient

    def find_by_id(self, patient_id: int) -> Patient | None:
        stmt = self._select_with_history().where(Patient.id == patient_id)
        return self._fetch_one(stmt, f"paciente #{patient_id}")

    def find_by_dni(self, dni: str) -> Patient | None:
        stmt = self._select_with_history().where(Patient.national_id == dni)
        return self._fetch_one(stmt, f"paciente con DNI {dni}")

    def get_all(self) -> list[Patient]:
        stmt = self._select_with_history().order_by(Patient.id)
        with self._reading("pacientes"):
            patients = list(self.session.execute(stmt).unique().scalars().all())
        for p in patients:
            self._detach(p, p.clinical_history)
        return patients

    def update(self, patient: Patient, *, commit: bool = True) -> None:
        if patient.id is None:
            raise ValidationError("No se puede actualizar un paciente sin id.")
        values = {f: getattr(patient, f) for f in MUTABLE_FIELDS}
        stmt = (
            update(Patient)
            .where(Patient.id == patient.id, Patient.deleted.is_(False))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        with self._writing(f"paciente #{patient.id}", commit):
            self.session.execute(stmt)

    def delete(self, patient_id: int, *, commit: bool = True) -> None:
        stmt = (
            update(Patient)
            .where(Patient.id == patient_id)
            .values(deleted=True)
            .execution_options(synchronize_session=False)
        )
        with self._writing(f"paciente #{patient_id}", commit):
            self.session.execute(stmt)
