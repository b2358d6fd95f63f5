# vitalis/services/__init__.py
from .clinical_histories import ClinicalHistoryService
from .patients import PatientService

__all__ = ["ClinicalHistoryService", "PatientService"]
