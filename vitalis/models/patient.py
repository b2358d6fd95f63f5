# vitalis/models/patient.py
from sqlalchemy import Index, text
from vitalis.extensions import db
from vitalis.models.base import IDMixin, SoftDeleteMixin

class Patient(IDMixin, SoftDeleteMixin, db.Model):
    __tablename__ = "patient"

    national_id = db.Column(db.String(20), nullable=False)
    first_name  = db.Column(db.String(120), nullable=False)
    last_name   = db.Column(db.String(120), nullable=False)
    birth_date  = db.Column(db.Date, nullable=True)

    # 0..1 aktive Historia; nur per Join (contains_eager) oder explizit gesetzt, nie nachgeladen
    clinical_history = db.relationship(
        "ClinicalHistory",
        primaryjoin="and_(Patient.id == ClinicalHistory.patient_id, "
                    "ClinicalHistory.deleted.is_(False))",
        uselist=False,
        viewonly=True,
        lazy="raise_on_sql",
    )

    __table_args__ = (
        # DNI eindeutig unter den aktiven Patienten
        Index(
            "ux_patient_national_id_active",
            "national_id",
            unique=True,
            sqlite_where=text("deleted = 0"),
            postgresql_where=text("NOT deleted"),
        ),
        Index("ix_patient_last_name_first_name", "last_name", "first_name"),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Patient #{self.id} {self.national_id} {self.last_name}, {self.first_name}>"
