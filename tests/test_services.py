from datetime import date

import pytest

from conftest import make_history, make_patient
from vitalis.errors import StorageError, ValidationError
from vitalis.models import BloodType, ClinicalHistory, Patient


class TestPatientServiceCreate:
    def test_end_to_end_create_lookup_delete(self, patient_service, history_store):
        patient = Patient(
            national_id="30111222",
            first_name="Ana",
            last_name="Gomez",
            birth_date=date(1990, 5, 1),
        )
        history = ClinicalHistory(history_number="HC-001", blood_type=BloodType.parse("O+"))

        created = patient_service.create_with_history(patient, history)
        assert created.id is not None
        assert history.id is not None
        assert history.patient_id == created.id
        assert created.clinical_history is history

        found = patient_service.find_by_dni("30111222")
        assert found.id == created.id
        assert found.first_name == "Ana"
        assert found.clinical_history.history_number == "HC-001"
        assert found.clinical_history.blood_type is BloodType.O_POS

        patient_service.delete(created.id)

        assert patient_service.find_by_dni("30111222") is None
        assert history_store.find_by_patient_id(created.id) is None

    def test_create_without_history(self, patient_service):
        p = patient_service.create(make_patient())
        assert p.id is not None
        assert patient_service.find_by_id(p.id).clinical_history is None

    @pytest.mark.parametrize("field", ["national_id", "first_name", "last_name"])
    def test_required_fields(self, patient_service, field):
        with pytest.raises(ValidationError) as exc:
            patient_service.create(make_patient(**{field: "  "}))
        assert field in exc.value.errors

    def test_history_number_required(self, patient_service):
        with pytest.raises(ValidationError):
            patient_service.create_with_history(make_patient(), make_history(history_number=""))
        assert patient_service.get_all() == []

    def test_duplicate_dni_rejected(self, patient_service):
        patient_service.create(make_patient())
        with pytest.raises(ValidationError) as exc:
            patient_service.create_with_history(make_patient(first_name="Otra"), make_history())
        assert "national_id" in exc.value.errors

    def test_dni_reusable_after_delete(self, patient_service):
        first = patient_service.create(make_patient())
        patient_service.delete(first.id)
        second = patient_service.create(make_patient())
        assert second.id != first.id

    def test_failing_history_write_rolls_back_patient(self, patient_service, history_store, monkeypatch):
        def boom(history, *, commit=True):
            raise StorageError("disk full")

        monkeypatch.setattr(history_store, "create", boom)
        patient, history = make_patient(), make_history()

        with pytest.raises(StorageError):
            patient_service.create_with_history(patient, history)

        assert patient.id is None
        assert history.patient_id is None
        assert patient_service.find_by_dni("30111222") is None
        assert patient_service.get_all() == []

    def test_failing_history_insert_rolls_back_patient(self, patient_service, patient_store, monkeypatch):
        first = patient_service.create_with_history(make_patient(national_id="1"), make_history())
        original_create = patient_store.create

        def create_pointing_to_first(p, *, commit=True):
            original_create(p, commit=commit)
            # Historia landet beim ersten Patienten -> Unique-Index "eine aktive Historia" greift
            p.id = first.id
            return p

        monkeypatch.setattr(patient_store, "create", create_pointing_to_first)
        patient = make_patient(national_id="2")
        with pytest.raises(StorageError):
            patient_service.create_with_history(patient, make_history(history_number="HC-002"))
        monkeypatch.undo()

        assert patient.id is None
        assert patient_service.find_by_dni("2") is None
        assert [p.national_id for p in patient_service.get_all()] == ["1"]


class TestPatientServiceReadUpdateDelete:
    def test_find_by_dni_blank_is_validation_error(self, patient_service):
        with pytest.raises(ValidationError):
            patient_service.find_by_dni("   ")

    def test_find_by_dni_strips_input(self, patient_service):
        patient_service.create(make_patient())
        assert patient_service.find_by_dni(" 30111222 ") is not None

    def test_get_all(self, patient_service):
        patient_service.create_with_history(make_patient(national_id="1"), make_history())
        patient_service.create(make_patient(national_id="2"))
        patients = patient_service.get_all()
        assert [p.national_id for p in patients] == ["1", "2"]
        assert patients[0].clinical_history is not None
        assert patients[1].clinical_history is None

    def test_update(self, patient_service):
        p = patient_service.create(make_patient())
        p.last_name = "Pérez"
        patient_service.update(p)
        assert patient_service.find_by_id(p.id).last_name == "Pérez"

    def test_update_requires_fields(self, patient_service):
        p = patient_service.create(make_patient())
        p.first_name = ""
        with pytest.raises(ValidationError):
            patient_service.update(p)
        assert patient_service.find_by_id(p.id).first_name == "Ana"

    def test_update_to_dni_of_other_patient_rejected(self, patient_service):
        patient_service.create(make_patient(national_id="1"))
        p = patient_service.create(make_patient(national_id="2"))
        p.national_id = "1"
        with pytest.raises(ValidationError):
            patient_service.update(p)

    def test_update_keeping_own_dni_is_fine(self, patient_service):
        p = patient_service.create(make_patient())
        p.first_name = "Ana María"
        patient_service.update(p)
        assert patient_service.find_by_dni("30111222").first_name == "Ana María"

    def test_update_deleted_patient_rejected(self, patient_service):
        p = patient_service.create(make_patient())
        patient_service.delete(p.id)
        with pytest.raises(ValidationError):
            patient_service.update(p)

    def test_update_keeps_patient_and_history_active(self, patient_service, history_store):
        p = patient_service.create_with_history(make_patient(), make_history())
        p.deleted = True
        patient_service.update(p)

        found = patient_service.find_by_id(p.id)
        assert found is not None
        assert found.clinical_history is not None
        assert history_store.find_by_patient_id(p.id) is not None

    def test_dni_is_stored_stripped(self, patient_service):
        p = patient_service.create(make_patient(national_id=" 30111222 "))
        assert p.national_id == "30111222"
        assert patient_service.find_by_dni("30111222").id == p.id

        with pytest.raises(ValidationError):
            patient_service.create(make_patient(national_id="30111222  "))

    def test_update_strips_dni(self, patient_service):
        p = patient_service.create(make_patient())
        p.national_id = "  40999888"
        patient_service.update(p)
        assert patient_service.find_by_dni("40999888").id == p.id

    def test_delete_cascades_to_history(self, patient_service, history_store):
        p = patient_service.create_with_history(make_patient(), make_history())
        h_id = p.clinical_history.id

        patient_service.delete(p.id)

        assert history_store.find_by_patient_id(p.id) is None
        assert history_store.find_by_id(h_id) is None
        assert history_store.get_all() == []

    def test_delete_twice_is_noop(self, patient_service):
        p = patient_service.create(make_patient())
        patient_service.delete(p.id)
        patient_service.delete(p.id)
        assert patient_service.find_by_id(p.id) is None


class TestClinicalHistoryService:
    def test_create_for_patient_without_history(self, patient_service, history_service):
        p = patient_service.create(make_patient())
        h = history_service.create(make_history(patient_id=p.id))
        assert h.id is not None
        assert patient_service.find_by_id(p.id).clinical_history.id == h.id

    def test_create_for_unknown_patient_rejected(self, history_service):
        with pytest.raises(ValidationError):
            history_service.create(make_history(patient_id=42))

    def test_create_for_deleted_patient_rejected(self, patient_service, history_service):
        p = patient_service.create(make_patient())
        patient_service.delete(p.id)
        with pytest.raises(ValidationError):
            history_service.create(make_history(patient_id=p.id))

    def test_second_active_history_rejected(self, patient_service, history_service):
        p = patient_service.create_with_history(make_patient(), make_history())
        with pytest.raises(ValidationError):
            history_service.create(make_history(patient_id=p.id, history_number="HC-002"))

    def test_update(self, patient_service, history_service):
        p = patient_service.create_with_history(make_patient(), make_history())
        h = history_service.find_by_patient_id(p.id)
        h.notes = "Alergia a penicilina"
        h.blood_type = BloodType.B_POS
        history_service.update(h)

        found = history_service.find_by_id(h.id)
        assert found.notes == "Alergia a penicilina"
        assert found.blood_type is BloodType.B_POS
        assert found.patient_id == p.id

    def test_update_requires_history_number(self, patient_service, history_service):
        p = patient_service.create_with_history(make_patient(), make_history())
        h = history_service.find_by_patient_id(p.id)
        h.history_number = " "
        with pytest.raises(ValidationError):
            history_service.update(h)

    def test_update_deleted_history_rejected(self, patient_service, history_service):
        p = patient_service.create_with_history(make_patient(), make_history())
        h = history_service.find_by_patient_id(p.id)
        history_service.delete(h.id)
        with pytest.raises(ValidationError):
            history_service.update(h)

    def test_get_all(self, patient_service, history_service):
        patient_service.create_with_history(make_patient(national_id="1"), make_history())
        patient_service.create_with_history(make_patient(national_id="2"), make_history(history_number="HC-002"))
        assert [h.history_number for h in history_service.get_all()] == ["HC-001", "HC-002"]
