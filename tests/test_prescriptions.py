# tests/test_prescriptions.py
import uuid

import pytest
from sqlalchemy.exc import DataError, OperationalError

from app.helpers import messages
from app.system_services.system_routes import translate_db_error


def _create(client, body):
    response = client.post("/api/prescriptions", json=body)
    assert response.status_code == 200, response.text
    return response.json()["data"]


class TestCreatePrescription:
    """POST /api/prescriptions"""

    def test_patient_name_is_required(self, client, sample_prescription):
        sample_prescription["patientName"] = "   "
        response = client.post("/api/prescriptions", json=sample_prescription)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": messages.PATIENT_NAME_REQUIRED}

    def test_diagnosis_is_required(self, client, sample_prescription):
        del sample_prescription["diagnosis"]
        response = client.post("/api/prescriptions", json=sample_prescription)

        assert response.status_code == 400
        assert response.json()["error"] == messages.DIAGNOSIS_REQUIRED

    def test_saved_prescription_round_trips(self, client, sample_prescription):
        response = client.post("/api/prescriptions", json=sample_prescription)
        body = response.json()

        assert body["success"] is True
        assert body["message"] == messages.PRESCRIPTION_CREATED

        fetched = client.get(f"/api/prescriptions/{body['data']['id']}").json()["data"]
        assert fetched["patientName"] == "احمد رحیمی"
        assert fetched["chiefComplaint"] == "سرفه خلط دار و تب"
        assert fetched["allergies"] == ["Penicillin"]
        assert fetched["medicalExams"] == ["CBC", "CRP"]
        assert fetched["status"] == "active"
        assert [m["medicine"] for m in fetched["medicines"]] == ["Amoxicillin", "Acetaminophen"]
        assert fetched["medicines"][0]["withFood"] is True

    def test_medicine_defaults_are_applied(self, client, sample_prescription):
        data = _create(client, sample_prescription)
        acetaminophen = data["medicines"][1]

        assert acetaminophen["form"] == "tablet"
        assert acetaminophen["route"] == "oral"
        assert acetaminophen["timing"] == "after_meal"
        assert acetaminophen["withFood"] is False

    def test_incomplete_medicine_lines_are_skipped(self, client, sample_prescription):
        sample_prescription["medicines"] += [
            {"medicine": "Ibuprofen", "dosage": "  "},
            {"medicine": "", "dosage": "10 mg"},
        ]
        data = _create(client, sample_prescription)

        assert len(data["medicines"]) == 2

    def test_bmi_is_computed_from_weight_and_height(self, client, sample_prescription):
        data = _create(client, sample_prescription)
        assert data["bmi"] == "22.9"

    def test_optional_patient_fields_default_to_blank(self, client):
        data = _create(client, {"patientName": "Karim", "diagnosis": "Flu"})

        assert data["patientAge"] == ""
        assert data["patientAddress"] == ""
        assert data["allergies"] == []
        assert data["medicines"] == []


class TestListPrescriptions:
    """GET /api/prescriptions"""

    def test_search_and_pagination(self, client):
        tag = uuid.uuid4().hex[:8]
        for index in range(3):
            _create(client, {"patientName": f"Patient {tag} {index}", "diagnosis": "Flu"})

        response = client.get("/api/prescriptions", params={"search": tag.upper(), "limit": 2})
        data = response.json()["data"]

        assert data["pagination"] == {"page": 1, "limit": 2, "totalCount": 3, "totalPages": 2}
        # newest first
        assert [p["patientName"] for p in data["prescriptions"]] == [f"Patient {tag} 2", f"Patient {tag} 1"]

        second = client.get("/api/prescriptions", params={"search": tag, "limit": 2, "page": 2}).json()["data"]
        assert [p["patientName"] for p in second["prescriptions"]] == [f"Patient {tag} 0"]

    def test_empty_result(self, client):
        data = client.get("/api/prescriptions", params={"search": "no-such-patient"}).json()["data"]
        assert data["prescriptions"] == []
        assert data["pagination"]["totalPages"] == 0

    def test_other_users_prescriptions_are_hidden(self, client, as_user):
        tag = uuid.uuid4().hex[:8]
        _create(client, {"patientName": f"Private {tag}", "diagnosis": "Flu"})

        as_user("clinician_2")
        data = client.get("/api/prescriptions", params={"search": tag}).json()["data"]
        assert data["pagination"]["totalCount"] == 0

    def test_limit_is_bounded(self, client):
        response = client.get("/api/prescriptions", params={"limit": 10_000})
        assert response.status_code == 422
        assert response.json()["success"] is False


class TestUpdatePrescription:
    """PATCH /api/prescriptions"""

    def test_id_is_required(self, client):
        response = client.patch("/api/prescriptions", json={"diagnosis": "Flu"})

        assert response.status_code == 400
        assert response.json()["error"] == messages.PRESCRIPTION_ID_REQUIRED

    def test_unknown_id_is_not_found(self, client):
        response = client.patch("/api/prescriptions", json={"id": "missing", "diagnosis": "Flu"})

        assert response.status_code == 404
        assert response.json()["error"] == messages.PRESCRIPTION_NOT_FOUND

    def test_blank_diagnosis_is_rejected(self, client, sample_prescription):
        data = _create(client, sample_prescription)
        response = client.patch("/api/prescriptions", json={"id": data["id"], "diagnosis": ""})

        assert response.status_code == 400

    def test_partial_update_keeps_other_fields(self, client, sample_prescription):
        data = _create(client, sample_prescription)
        response = client.patch(
            "/api/prescriptions", json={"id": data["id"], "diagnosis": "برونشیت حاد", "weight": "80"}
        )
        updated = response.json()

        assert updated["message"] == messages.PRESCRIPTION_UPDATED
        assert updated["data"]["diagnosis"] == "برونشیت حاد"
        assert updated["data"]["patientName"] == sample_prescription["patientName"]
        assert updated["data"]["bmi"] == "26.1"
        assert len(updated["data"]["medicines"]) == 2

    def test_medicines_list_replaces_lines(self, client, sample_prescription):
        data = _create(client, sample_prescription)
        response = client.patch(
            "/api/prescriptions",
            json={
                "id": data["id"],
                "medicines": [
                    {"medicine": "Cetirizine", "dosage": "10 mg"},
                    {"medicine": "Skipped"},
                ],
            },
        )

        medicines = response.json()["data"]["medicines"]
        assert [m["medicine"] for m in medicines] == ["Cetirizine"]

    def test_cannot_update_another_users_prescription(self, client, as_user, sample_prescription):
        data = _create(client, sample_prescription)

        as_user("clinician_2")
        response = client.patch("/api/prescriptions", json={"id": data["id"], "diagnosis": "Flu"})
        assert response.status_code == 404

    def test_null_lists_are_stored_as_empty(self, client, sample_prescription):
        data = _create(client, sample_prescription)
        response = client.patch(
            "/api/prescriptions",
            json={"id": data["id"], "allergies": None, "currentMedications": None, "medicalExams": None},
        )

        updated = response.json()["data"]
        assert updated["allergies"] == []
        assert updated["currentMedications"] == []
        assert updated["medicalExams"] == []


class TestDeletePrescription:
    def test_delete_then_not_found(self, client, sample_prescription):
        data = _create(client, sample_prescription)

        response = client.delete(f"/api/prescriptions/{data['id']}")
        assert response.json() == {"success": True, "message": messages.PRESCRIPTION_DELETED}

        assert client.get(f"/api/prescriptions/{data['id']}").status_code == 404
        assert client.delete(f"/api/prescriptions/{data['id']}").status_code == 404


class TestUserPresetsAreNotPrescriptions:
    """Preset rows share the table but only answer on /api/presets"""

    @pytest.fixture
    def preset_id(self, client):
        response = client.post(
            "/api/presets", json={"name": "Flu preset", "diagnosis": "Flu", "category": "respiratory"}
        )
        return response.json()["id"]

    def test_read_update_and_delete_answer_404(self, client, preset_id):
        assert client.get(f"/api/prescriptions/{preset_id}").status_code == 404
        assert client.get(f"/api/prescriptions/{preset_id}/pdf").status_code == 404
        assert client.patch("/api/prescriptions", json={"id": preset_id, "diagnosis": "Cold"}).status_code == 404
        assert client.delete(f"/api/prescriptions/{preset_id}").status_code == 404

        preset = client.get(f"/api/presets/{preset_id}").json()
        assert preset["diagnosis"] == "Flu"


class TestDebugAndErrors:
    def test_debug_summary_counts(self, client, sample_prescription):
        _create(client, sample_prescription)
        summary = client.get("/api/debug").json()

        assert summary["prescriptionsCount"] >= 1
        assert summary["medicinesCount"] >= 2
        assert len(summary["prescriptions"]) == summary["prescriptionsCount"]

    def test_unreachable_database_answers_503(self, client, monkeypatch):
        async def unreachable(db):
            return False

        monkeypatch.setattr("app.database.connection.check_database_connection", unreachable)
        response = client.get("/api/prescriptions")

        assert response.status_code == 503
        assert response.json()["error"] == messages.DB_UNAVAILABLE

    @pytest.mark.parametrize(
        "error, status",
        [
            (DataError("INSERT", {}, Exception("bad value")), 400),
            (OperationalError("SELECT 1", {}, Exception("connection refused")), 503),
            (ValueError("boom"), 500),
        ],
    )
    def test_translate_db_error(self, error, status):
        assert translate_db_error(error, messages.FETCH_FAILED).status_code == status
