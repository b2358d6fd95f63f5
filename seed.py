# seed.py

from datetime import date
import random
from dataclasses import dataclass

from faker import Faker

from vitalis.extensions import db
from vitalis.models import Patient, ClinicalHistory, BloodType
from vitalis.services import PatientService
from vitalis.stores import PatientStore, ClinicalHistoryStore

# Spanischer Faker (für Namen / Texte)
fake = Faker("es_ES")


@dataclass(frozen=True)
class HistoryHas:
    blood_type: bool = True
    medical_history: bool = False
    current_medication: bool = False
    notes: bool = False


def create_patient(**overrides) -> Patient:
    return Patient(
        national_id=overrides.get("national_id", str(fake.unique.random_number(digits=8, fix_len=True))),
        first_name=overrides.get("first_name", fake.first_name()),
        last_name=overrides.get("last_name", fake.last_name()),
        birth_date=overrides.get("birth_date", fake.date_of_birth(minimum_age=0, maximum_age=95)),
    )


def create_history(number: int, *, has: HistoryHas = HistoryHas(), **overrides) -> ClinicalHistory:
    data = {
        "history_number": overrides.get("history_number", f"HC-{number:04d}"),
        "opened_date": overrides.get("opened_date", fake.date_between(start_date="-5y", end_date=date.today())),
    }

    if has.blood_type:
        data["blood_type"] = overrides.get("blood_type", random.choice(list(BloodType)))

    if has.medical_history:
        data["medical_history"] = overrides.get("medical_history", fake.sentence(nb_words=8))

    if has.current_medication:
        data["current_medication"] = overrides.get("current_medication", fake.word())

    if has.notes:
        data["notes"] = overrides.get("notes", fake.sentence())

    return ClinicalHistory(**data)


def seed_data(count: int = 10) -> list[Patient]:
    """
    Legt ``count`` Patienten an, etwa jeder fünfte ohne Historia.
    Läuft über den PatientService, damit DNI-Prüfung und Transaktion greifen.
    """
    patient_store = PatientStore(db.session)
    service = PatientService(patient_store, ClinicalHistoryStore(db.session))

    patients = []
    for i in range(1, count + 1):
        patient = create_patient()
        if random.random() < 0.2:
            service.create(patient)
        else:
            has = HistoryHas(
                blood_type=random.random() < 0.9,
                medical_history=random.random() < 0.5,
                current_medication=random.random() < 0.3,
                notes=random.random() < 0.3,
            )
            service.create_with_history(patient, create_history(i, has=has))
        patients.append(patient)
    return patients
