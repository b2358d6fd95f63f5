# vitalis/stores/clinical_histories.py
from __future__ import annotations

import logging

from sqlalchemy import select, update

from vitalis.errors import ValidationError
from vitalis.models import ClinicalHistory
from vitalis.stores.base import BaseStore

logger = logging.getLogger(__name__)

# patient_id und deleted fehlen: Zuordnung ist fix, Löschen nur über delete()
MUTABLE_FIELDS = (
    "history_number",
    "blood_type",
    "medical_history",
    "current_medication",
    "notes",
    "opened_date",
)


class ClinicalHistoryStore(BaseStore):
    """Datenzugriff für Historias clínicas. Kaskaden beim Löschen macht der Service."""

    def _active(self):
        return select(ClinicalHistory).where(ClinicalHistory.deleted.is_(False))

    def _fetch_one(self, stmt, what: str) -> ClinicalHistory | None:
        with self._reading(what):
            history = self.session.execute(stmt).scalars().first()
        self._detach(history)
        return history

    def create(self, history: ClinicalHistory, *, commit: bool = True) -> ClinicalHistory:
        if history.id is not None:
            raise ValidationError(f"La historia clínica ya fue persistida (id={history.id}).")
        if history.patient_id is None:
            raise ValidationError("La historia clínica requiere un paciente (patient_id).")
        with self._writing("historia clínica", commit):
            self.session.add(history)
            self.session.flush()
        self._detach(history)
        logger.debug("Historia angelegt: %r", history)
        return history

    def find_by_id(self, history_id: int) -> ClinicalHistory | None:
        stmt = self._active().where(ClinicalHistory.id == history_id)
        return self._fetch_one(stmt, f"historia clínica #{history_id}")

    def find_by_patient_id(self, patient_id: int) -> ClinicalHistory | None:
        stmt = self._active().where(ClinicalHistory.patient_id == patient_id)
        return self._fetch_one(stmt, f"historia clínica del paciente #{patient_id}")

    def get_all(self) -> list[ClinicalHistory]:
        stmt = self._active().order_by(ClinicalHistory.id)
        with self._reading("historias clínicas"):
            histories = list(self.session.execute(stmt).scalars().all())
        self._detach(*histories)
        return histories

    def update(self, history: ClinicalHistory, *, commit: bool = True) -> None:
        if history.id is None:
            raise ValidationError("No se puede actualizar una historia clínica sin id.")
        values = {f: getattr(history, f) for f in MUTABLE_FIELDS}
        stmt = (
            update(ClinicalHistory)
            .where(ClinicalHistory.id == history.id, ClinicalHistory.deleted.is_(False))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        with self._writing(f"historia clínica #{history.id}", commit):
            self.session.execute(stmt)

    def delete(self, history_id: int, *, commit: bool = True) -> None:
        stmt = (
            update(ClinicalHistory)
            .where(ClinicalHistory.id == history_id)
            .values(deleted=True)
            .execution_options(synchronize_session=False)
        )
        with self._writing(f"historia clínica #{history_id}", commit):
            self.session.execute(stmt)

    def delete_by_patient_id(self, patient_id: int, *, commit: bool = True) -> None:
        stmt = (
            update(ClinicalHistory)
            .where(ClinicalHistory.patient_id == patient_id)
            .values(deleted=True)
            .execution_options(synchronize_session=False)
        )
        with self._writing(f"historia clínica del paciente #{patient_id}", commit):
            self.session.execute(stmt)
