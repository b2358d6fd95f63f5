# vitalis/services/clinical_histories.py
from __future__ import annotations

import logging

from vitalis.errors import ValidationError
from vitalis.models import ClinicalHistory
from vitalis.stores import ClinicalHistoryStore, PatientStore

logger = logging.getLogger(__name__)


def is_blank(v) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())


class ClinicalHistoryService:
    def __init__(self, histories: ClinicalHistoryStore, patients: PatientStore):
        self.histories = histories
        self.patients = patients

    @staticmethod
    def validate(history: ClinicalHistory) -> None:
        if is_blank(history.history_number):
            raise ValidationError(
                "El número de historia clínica es obligatorio.",
                errors={"history_number": ["Nro. de historia es obligatorio."]},
            )

    def create(self, history: ClinicalHistory) -> ClinicalHistory:
        self.validate(history)
        if history.patient_id is None or self.patients.find_by_id(history.patient_id) is None:
            raise ValidationError(f"No existe un paciente activo con id={history.patient_id}.")
        if self.histories.find_by_patient_id(history.patient_id) is not None:
            raise ValidationError(
                f"El paciente #{history.patient_id} ya tiene una historia clínica activa."
            )
        self.histories.create(history)
        logger.info("Historia #%s für Patient #%s angelegt.", history.id, history.patient_id)
        return history

    def update(self, history: ClinicalHistory) -> None:
        self.validate(history)
        if self.histories.find_by_id(history.id) is None:
            raise ValidationError(f"No existe una historia clínica activa con id={history.id}.")
        self.histories.update(history)
        logger.info("Historia #%s aktualisiert.", history.id)

    def delete(self, history_id: int) -> None:
        self.histories.delete(history_id)
        logger.info("Historia #%s gelöscht.", history_id)

    def get_all(self) -> list[ClinicalHistory]:
        return self.histories.get_all()

    def find_by_id(self, history_id: int) -> ClinicalHistory | None:
        return self.histories.find_by_id(history_id)

    def find_by_patient_id(self, patient_id: int) -> ClinicalHistory | None:
        return self.histories.find_by_patient_id(patient_id)
