# tests/test_presets.py
import pytest

from app.helpers import messages
from app.system_services.predefined_presets import PREDEFINED_PRESETS


@pytest.fixture
def preset_body():
    return {
        "name": "سرماخوردگی من",
        "diagnosis": "سرماخوردگی ویروسی",
        "category": "respiratory",
        "urgency": "low",
        "chiefComplaint": "آبریزش بینی",
        "instructions": "استراحت",
        "medicines": [
            {"medicine": "Cetirizine", "dosage": "10 mg", "frequency": "روزی یکبار"},
            {"medicine": "Vitamin C", "dosage": "500 mg"},
        ],
    }


@pytest.fixture
def user_preset(client, preset_body):
    response = client.post("/api/presets", json=preset_body)
    assert response.status_code == 200, response.text
    return response.json()


class TestPredefinedPresets:
    def test_list_contains_every_predefined_preset(self, client):
        presets = client.get("/api/presets").json()

        for preset_id in PREDEFINED_PRESETS:
            assert presets[preset_id]["id"] == preset_id
            assert presets[preset_id]["predefined"] is True

    def test_get_predefined_preset(self, client):
        preset = client.get("/api/presets/common_cold").json()

        assert preset["name"] == "سرماخوردگی"
        assert preset["patientInfo"]["age"] == 35
        assert preset["medicines"][0]["medicine"] == "Chlorpheniramine"

    def test_unknown_preset_is_not_found(self, client):
        response = client.get("/api/presets/no_such_preset")

        assert response.status_code == 404
        assert response.json()["error"] == messages.PRESET_NOT_FOUND

    def test_predefined_presets_are_read_only(self, client, preset_body):
        edit = client.put("/api/presets/common_cold", json=preset_body)
        delete = client.delete("/api/presets/migraine")

        assert edit.status_code == 403
        assert edit.json()["error"] == messages.PRESET_READ_ONLY_EDIT
        assert delete.status_code == 403
        assert delete.json()["error"] == messages.PRESET_READ_ONLY_DELETE


class TestUserPresets:
    @pytest.mark.parametrize("missing", ["name", "diagnosis", "category"])
    def test_required_fields(self, client, preset_body, missing):
        preset_body[missing] = ""
        response = client.post("/api/presets", json=preset_body)

        assert response.status_code == 400
        assert response.json()["error"] == messages.PRESET_FIELDS_REQUIRED

    def test_create_and_fetch(self, client, user_preset):
        assert user_preset["id"].startswith("user_")
        assert user_preset["predefined"] is False
        assert user_preset["urgency"] == "low"

        fetched = client.get(f"/api/presets/{user_preset['id']}").json()
        assert fetched["name"] == "سرماخوردگی من"
        assert [m["medicine"] for m in fetched["medicines"]] == ["Cetirizine", "Vitamin C"]

        listed = client.get("/api/presets").json()
        assert user_preset["id"] in listed

    def test_user_presets_are_not_listed_as_prescriptions(self, client, user_preset):
        prescriptions = client.get("/api/prescriptions", params={"limit": 200}).json()["data"]["prescriptions"]
        assert user_preset["id"] not in {p["id"] for p in prescriptions}

    def test_update_replaces_fields_and_medicines(self, client, user_preset, preset_body):
        preset_id = user_preset["id"]
        preset_body.update(
            name="نسخه ویرایش شده",
            urgency="high",
            followUp="دو روز بعد",
            medicines=[
                {"medicine": "Ibuprofen", "dosage": "400 mg"},
                {"medicine": "Omeprazole", "dosage": "20 mg"},
            ],
        )

        for _ in range(2):  # a second rewrite reuses the same medicine ids
            response = client.put(f"/api/presets/{preset_id}", json=preset_body)
            assert response.status_code == 200, response.text

        updated = response.json()
        assert updated["name"] == "نسخه ویرایش شده"
        assert updated["urgency"] == "high"
        assert updated["followUp"] == "دو روز بعد"
        assert [m["id"] for m in updated["medicines"]] == [f"{preset_id}_med_0", f"{preset_id}_med_1"]
        assert [m["medicine"] for m in updated["medicines"]] == ["Ibuprofen", "Omeprazole"]

    def test_update_missing_user_preset(self, client, preset_body):
        response = client.put("/api/presets/user_missing", json=preset_body)
        assert response.status_code == 404

    def test_delete(self, client, user_preset):
        preset_id = user_preset["id"]

        response = client.delete(f"/api/presets/{preset_id}")
        assert response.json() == {"message": messages.PRESET_DELETED}
        assert client.get(f"/api/presets/{preset_id}").status_code == 404

    def test_presets_are_private(self, client, as_user, user_preset):
        as_user("clinician_2")

        assert client.get(f"/api/presets/{user_preset['id']}").status_code == 404
        assert user_preset["id"] not in client.get("/api/presets").json()
