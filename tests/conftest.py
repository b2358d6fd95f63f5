"""Gemeinsame Fixtures: App mit In-Memory-SQLite, Stores und Services."""
from datetime import date

import pytest

from vitalis import create_app
from vitalis.extensions import db
from vitalis.models import BloodType, ClinicalHistory, Patient
from vitalis.services import ClinicalHistoryService, PatientService
from vitalis.stores import ClinicalHistoryStore, PatientStore


@pytest.fixture()
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "LOG_DIR": str(tmp_path / "logs"),
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def patient_store(app):
    return PatientStore(db.session)


@pytest.fixture()
def history_store(app):
    return ClinicalHistoryStore(db.session)


@pytest.fixture()
def patient_service(patient_store, history_store):
    return PatientService(patient_store, history_store)


@pytest.fixture()
def history_service(patient_store, history_store):
    return ClinicalHistoryService(history_store, patient_store)


def make_patient(**overrides) -> Patient:
    data = {
        "national_id": "30111222",
        "first_name": "Ana",
        "last_name": "Gomez",
        "birth_date": date(1990, 5, 1),
    }
    data.update(overrides)
    return Patient(**data)


def make_history(**overrides) -> ClinicalHistory:
    data = {
        "history_number": "HC-001",
        "blood_type": BloodType.O_POS,
        "opened_date": date(2024, 3, 1),
    }
    data.update(overrides)
    return ClinicalHistory(**data)
