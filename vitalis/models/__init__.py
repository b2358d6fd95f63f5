# vitalis/models/__init__.py
from .enums import BloodType
from .patient import Patient
from .clinical_history import ClinicalHistory

__all__ = ["BloodType", "Patient", "ClinicalHistory"]
