# vitalis/models/clinical_history.py
from datetime import date

from sqlalchemy import Enum as SAEnum, Index, text
from vitalis.extensions import db
from vitalis.models.base import IDMixin, SoftDeleteMixin
from vitalis.models.enums import BloodType

class ClinicalHistory(IDMixin, SoftDeleteMixin, db.Model):
    __tablename__ = "clinical_history"

    history_number     = db.Column(db.String(50), nullable=False)
    blood_type         = db.Column(
        SAEnum(
            BloodType,
            native_enum=False,
            validate_strings=True,
            # gespeichert wird der Code ("O+"), nicht der Member-Name
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=True,
    )
    medical_history    = db.Column(db.Text, nullable=True)
    current_medication = db.Column(db.Text, nullable=True)
    notes              = db.Column(db.Text, nullable=True)
    opened_date        = db.Column(db.Date, nullable=True, default=date.today)

    # n:1 Patient, nach dem Anlegen unveränderlich
    patient_id = db.Column(
        db.Integer,
        db.ForeignKey("patient.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        # höchstens eine aktive Historia pro Patient
        Index(
            "ux_clinical_history_patient_active",
            "patient_id",
            unique=True,
            sqlite_where=text("deleted = 0"),
            postgresql_where=text("NOT deleted"),
        ),
    )

    def __repr__(self) -> str:
        return f"<ClinicalHistory #{self.id} {self.history_number} Patient={self.patient_id}>"
