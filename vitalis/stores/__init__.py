# vitalis/stores/__init__.py
from .base import BaseStore, unit_of_work
from .patients import PatientStore
from .clinical_histories import ClinicalHistoryStore

__all__ = ["BaseStore", "unit_of_work", "PatientStore", "ClinicalHistoryStore"]
