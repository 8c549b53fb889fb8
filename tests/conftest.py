# tests/conftest.py
import os
import tempfile
from pathlib import Path

# Settings are read at import time, so the environment comes first
DB_FILE = Path(tempfile.gettempdir()) / f"prescriptions_test_{os.getpid()}.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{DB_FILE}"
os.environ["HUGGING_FACE_API_KEY"] = ""
os.environ["ADMIN_USER_IDS"] = "admin_test"

import pytest
from fastapi.testclient import TestClient

from app.ai_system.inference_client import inference_client
from app.main import app
from app.users.auth_dependencies import get_current_user_id

TEST_USER_ID = "clinician_1"
ADMIN_USER_ID = "admin_test"


@pytest.fixture(scope="session")
def client():
    """Application client with the identity provider bypassed"""
    if DB_FILE.exists():
        DB_FILE.unlink()
    app.dependency_overrides[get_current_user_id] = lambda: TEST_USER_ID
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    if DB_FILE.exists():
        DB_FILE.unlink()


@pytest.fixture
def as_user(client):
    """Switch the authenticated user for one test: as_user("someone") or as_user(None) for anonymous"""

    def switch(user_id):
        if user_id is None:
            app.dependency_overrides.pop(get_current_user_id, None)
        else:
            app.dependency_overrides[get_current_user_id] = lambda: user_id

    yield switch
    app.dependency_overrides[get_current_user_id] = lambda: TEST_USER_ID


class FakeInferenceClient:
    """Stands in for huggingface_hub.InferenceClient; answers per model name"""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def text_generation(self, prompt, model=None, **kwargs):
        self.calls.append(model)
        answer = self.responses.get(model, RuntimeError(f"model {model} unavailable"))
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def fake_inference(monkeypatch):
    """Install a FakeInferenceClient behind the global inference client"""

    def install(responses):
        fake = FakeInferenceClient(responses)
        monkeypatch.setattr(inference_client, "_client", fake)
        monkeypatch.setattr(inference_client, "_load_attempted", True)
        return fake

    yield install
    inference_client.reset()


@pytest.fixture
def sample_prescription():
    """A complete prescription body as the form sends it (camelCase)"""
    return {
        "patientName": "احمد رحیمی",
        "patientAge": "42",
        "patientGender": "مرد",
        "patientPhone": "0700123456",
        "weight": "70",
        "height": "175",
        "diagnosis": "عفونت تنفسی فوقانی",
        "chiefComplaint": "سرفه خلط دار و تب",
        "physicalExamination": "حلق قرمز، ریه‌ها پاک",
        "pulseRate": "88",
        "bloodPressure": "120/80",
        "temperature": "38.2",
        "oxygenSaturation": "97",
        "allergies": ["Penicillin"],
        "currentMedications": ["Metformin 500 mg"],
        "medicalExams": ["CBC", "CRP"],
        "pastMedicalHistory": "دیابت نوع ۲",
        "instructions": "استراحت کافی و مصرف مایعات فراوان",
        "followUp": "در صورت عدم بهبود پس از ۳ روز مراجعه شود",
        "doctorName": "دکتر احمدی",
        "doctorLicenseNumber": "MD-4521",
        "clinicName": "کلینیک شفا",
        "medicines": [
            {
                "medicine": "Amoxicillin",
                "dosage": "500 mg",
                "form": "capsule",
                "frequency": "هر ۸ ساعت",
                "duration": "۷ روز",
                "instructions": "قبل از غذا",
                "withFood": True,
            },
            {
                "medicine": "Acetaminophen",
                "dosage": "500 mg",
                "frequency": "هر ۶ ساعت",
                "duration": "۳ روز",
            },
        ],
    }
