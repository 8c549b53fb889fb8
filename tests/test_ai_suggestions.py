# tests/test_ai_suggestions.py
import pytest

from app.ai_system import knowledge_base as kb
from app.ai_system.autocomplete import get_autocomplete_suggestions, get_local_suggestions
from app.ai_system.medical_analysis import medical_analysis
from app.ai_system.medication_service import get_dynamic_medications
from app.ai_system.prescription_generator import generate_intelligent_prescription, select_condition
from app.ai_system.symptom_analyzer import LOCAL_MODEL_NAME, analyze_symptoms
from app.helpers import messages
from app.helpers.validation import validate_prescription
from config.aiconfig import ai_settings


# ============================================================================
# LOCAL FALLBACKS (no API key)
# ============================================================================
class TestAnalyzeSymptomsEndpoint:
    def test_symptoms_are_required(self, client):
        response = client.post("/api/analyze-symptoms", json={"symptoms": "  "})

        assert response.status_code == 400
        assert response.json()["error"] == messages.SYMPTOMS_HISTORY_REQUIRED

    @pytest.mark.parametrize(
        "symptoms, diagnosis",
        [
            ("سرفه و تب از دیروز", "عفونت تنفسی فوقانی"),
            ("High fever since morning", "سندرم تب‌دار"),
            ("I have a headache", "سردرد تنشی"),
            ("درد معده بعد از غذا", "گاستریت یا سوءهاضمه"),
            ("خستگی عمومی", kb.LOCAL_DEFAULT_DIAGNOSIS),
        ],
    )
    def test_local_analysis(self, client, symptoms, diagnosis):
        body = client.post(
            "/api/analyze-symptoms", json={"symptoms": symptoms, "patientHistory": "دیابت"}
        ).json()

        assert body["success"] is True
        assert body["analysis"]["diagnosis"] == diagnosis
        assert body["analysis"]["confidence"] == "low"
        assert body["analysis"]["aiModelUsed"] == LOCAL_MODEL_NAME
        assert "دیابت" in body["analysis"]["clinicalNotes"]


class TestGeneratePrescriptionEndpoint:
    def test_symptoms_are_required(self, client):
        response = client.post("/api/generate-prescription", json={})

        assert response.status_code == 400
        assert response.json()["error"] == messages.SYMPTOMS_REQUIRED

    def test_medicines_follow_the_diagnosis(self, client):
        body = client.post("/api/generate-prescription", json={"symptoms": "سرفه شدید"}).json()

        assert body["source"] == "local"
        medicines = body["prescription"]["medications"]
        assert [m["medicine"] for m in medicines] == ["Amoxicillin", "Acetaminophen"]
        assert [m["id"] for m in medicines] == ["1", "2"]

    def test_current_diagnosis_overrides_analysis(self, client):
        body = client.post(
            "/api/generate-prescription",
            json={"symptoms": "ناراحتی", "currentDiagnosis": "گاستریت مزمن"},
        ).json()

        assert [m["medicine"] for m in body["prescription"]["medications"]] == ["Omeprazole"]

    def test_no_match_gives_general_medicines(self, client):
        body = client.post(
            "/api/generate-prescription", json={"symptoms": "ناراحتی", "currentDiagnosis": "unknown"}
        ).json()

        medicines = body["prescription"]["medications"]
        assert [m["id"] for m in medicines] == ["general_1", "general_2"]
        assert [m["medicine"] for m in medicines] == ["Acetaminophen", "Vitamin C"]

    def test_internal_error_answers_with_fallback(self, client, monkeypatch):
        def broken(*args):
            raise RuntimeError("lookup failed")

        monkeypatch.setattr("app.ai_system.routes.get_dynamic_medications", broken)
        response = client.post("/api/generate-prescription", json={"symptoms": "سرفه"})

        assert response.status_code == 200
        body = response.json()
        assert body["source"] == "fallback"
        assert body["prescription"]["diagnosis"] == kb.EMERGENCY_FALLBACK_PRESCRIPTION["diagnosis"]


class TestAutocompleteEndpoint:
    def test_text_too_short(self, client):
        response = client.post("/api/autocomplete", json={"text": "تب"})

        assert response.status_code == 400
        assert response.json()["error"] == messages.TEXT_TOO_SHORT

    def test_category_completions(self, client):
        suggestions = client.post("/api/autocomplete", json={"text": "سرفه"}).json()["suggestions"]
        assert suggestions == kb.SYMPTOM_COMPLETIONS["سرفه"][:5]

    def test_overlapping_categories_are_capped(self):
        # "سردرد" also contains the "درد" category
        suggestions = get_local_suggestions("سردرد")

        assert len(suggestions) == ai_settings.MAX_SUGGESTIONS
        assert suggestions[0] == "سردرد میگرنی"

    def test_general_list_filter(self):
        assert get_local_suggestions("سرگیجه دارم") == ["سرگیجه"]

    def test_unknown_text_gives_defaults(self, client):
        suggestions = client.post("/api/autocomplete", json={"text": "xyzw"}).json()["suggestions"]
        assert suggestions == kb.DEFAULT_COMPLETIONS


class TestSuggestEndpoint:
    def test_text_too_short(self, client):
        response = client.post("/api/suggest", json={"text": "سرفه"})

        assert response.status_code == 400
        assert response.json()["error"] == messages.TEXT_TOO_SHORT_FOR_PRESCRIPTION

    def test_whitespace_padding_does_not_count(self, client):
        response = client.post("/api/suggest", json={"text": "  تب   "})
        assert response.status_code == 400

    def test_draft_for_sore_throat(self, client):
        draft = client.post("/api/suggest", json={"text": "گلودرد و مشکل در بلع"}).json()

        assert draft["diagnosis"] == "فارنژیت استرپتوکوکی"
        assert draft["chiefComplaint"] == "گلودرد شدید و مشکل در بلع"
        assert draft["differentialDiagnosis"] == kb.DEFAULT_DIFFERENTIAL
        assert draft["followUp"] == kb.FOLLOW_UP_URGENT
        assert draft["temperature"] == "38.0-39.0"
        assert draft["prescription"][0]["medicine"] == "Penicillin V"
        assert all(len(m["id"]) == 9 for m in draft["prescription"])
        assert draft["patientName"] == ""

    def test_unmatched_text_uses_default_condition(self, client):
        draft = client.post("/api/suggest", json={"text": "feeling unwell today"}).json()

        assert draft["diagnosis"] == kb.DEFAULT_CONDITION.name
        assert draft["chiefComplaint"] == kb.DEFAULT_CHIEF_COMPLAINT
        assert draft["followUp"] == kb.FOLLOW_UP_ROUTINE


class TestDraftGenerator:
    def test_more_keyword_hits_win(self):
        condition, matched = select_condition("سرفه با خلط و درد سینه")
        assert condition.name == "برونشیت حاد"

    def test_ties_go_to_the_later_condition(self):
        # one hit each for sinusitis and migraine
        condition, matched = select_condition("سردرد")

        assert [c.name for c in matched] == ["سینوزیت حاد", "میگرن"]
        assert condition.name == "میگرن"

    def test_differential_lists_matched_conditions(self):
        draft = generate_intelligent_prescription("سردرد و سوزش ادرار")
        assert draft["differential_diagnosis"] == "سینوزیت حاد، عفونت ادراری، میگرن"

    def test_drafts_pass_validation(self):
        for text in ("گلودرد شدید", "عطسه و خارش", "feeling unwell"):
            assert validate_prescription(generate_intelligent_prescription(text)).is_valid

    def test_fallbacks_are_deterministic(self):
        first = generate_intelligent_prescription("سرفه و خلط")
        second = generate_intelligent_prescription("سرفه و خلط")

        for field in ("diagnosis", "chief_complaint", "physical_examination", "instructions", "restrictions"):
            assert first[field] == second[field]
        assert [m["medicine"] for m in first["prescription"]] == [m["medicine"] for m in second["prescription"]]


class TestMedicalAnalysisEndpoint:
    def test_symptoms_are_required(self, client):
        assert client.post("/api/medical-analysis", json={"symptoms": ""}).status_code == 400

    def test_local_report_without_key(self, client):
        body = client.post(
            "/api/medical-analysis", json={"symptoms": "fever and cough", "patientHistory": "asthma"}
        ).json()

        assert body["confidence"] == "low"
        assert body["model"] == LOCAL_MODEL_NAME
        assert "fever and cough" in body["analysis"]
        assert "asthma" in body["analysis"]


class TestAIConfig:
    def test_health_reports_inference_state(self, client):
        assert client.get("/health").json() == {"status": "ok", "aiEnabled": False}

    def test_read_config(self, client):
        config = client.get("/api/ai/config").json()

        assert config["inference_enabled"] is False
        assert config["symptom_models"] == ai_settings.SYMPTOM_MODELS

    def test_update_requires_admin(self, client):
        response = client.post("/api/ai/config", json={"max_suggestions": 3})
        assert response.status_code == 403

    def test_admin_update_and_reset(self, client, as_user):
        as_user("admin_test")

        updated = client.post("/api/ai/config", json={"max_suggestions": 3}).json()
        assert updated["max_suggestions"] == 3
        assert len(get_local_suggestions("سرفه")) == 3

        reset = client.post("/api/system/reset-all-configs").json()
        assert reset["reset_by"] == "admin_test"
        assert client.get("/api/ai/config").json()["max_suggestions"] == 5


# ============================================================================
# MODEL CHAIN (fake inference client)
# ============================================================================
class TestModelChain:
    def test_first_answering_model_wins(self, fake_inference):
        first, second, _ = ai_settings.SYMPTOM_MODELS
        fake = fake_inference({second: "بیمار سرفه دارد و احتمالاً عفونت دارد " * 20})

        result = analyze_symptoms("سرفه", "")

        assert fake.calls == [first, second]
        assert result["diagnosis"] == "عفونت تنفسی"
        assert result["confidence"] == "medium"
        assert result["ai_model_used"] == second
        assert len(result["clinical_notes"]) == 303
        assert result["clinical_notes"].endswith("...")

    def test_empty_generations_are_skipped(self, fake_inference):
        models = ai_settings.SYMPTOM_MODELS
        fake_inference({models[0]: "", models[1]: "", models[2]: "unclear"})

        result = analyze_symptoms("something", "")
        assert result["ai_model_used"] == models[2]
        assert result["diagnosis"] == kb.UNKNOWN_DIAGNOSIS

    def test_all_models_failing_falls_back(self, fake_inference):
        fake_inference({})

        result = analyze_symptoms("headache", "")
        assert result["ai_model_used"] == LOCAL_MODEL_NAME
        assert result["diagnosis"] == "سردرد تنشی"

    def test_endpoint_reports_ai_source(self, client, fake_inference):
        fake_inference({ai_settings.SYMPTOM_MODELS[0]: "تشخیص: سردرد"})

        body = client.post("/api/generate-prescription", json={"symptoms": "سردرد"}).json()
        assert body["source"] == "ai"
        assert body["prescription"]["diagnosis"] == "سردرد تنشی"
        assert body["prescription"]["medications"][0]["medicine"] == "Ibuprofen"

    def test_autocomplete_uses_model_lines(self, fake_inference):
        fake_inference({ai_settings.AUTOCOMPLETE_MODEL: "سرفه خشک\n\nسرفه شبانه\n"})
        assert get_autocomplete_suggestions("سرفه") == ["سرفه خشک", "سرفه شبانه"]

    def test_autocomplete_falls_back_when_model_fails(self, fake_inference):
        fake_inference({})
        assert get_autocomplete_suggestions("سرفه") == kb.SYMPTOM_COMPLETIONS["سرفه"][:5]

    def test_analysis_starts_at_preferred_model(self, fake_inference):
        models = ai_settings.ANALYSIS_MODELS
        fake = fake_inference({models[1]: "Likely viral infection."})

        result = medical_analysis("fever", "", model_preference=1)

        assert fake.calls == [models[1]]
        assert result["analysis"] == "Likely viral infection."
        assert result["confidence"] == "high"
        assert result["model"] == models[1]

    def test_analysis_out_of_range_preference_starts_at_first(self, fake_inference):
        models = ai_settings.ANALYSIS_MODELS
        fake = fake_inference({models[0]: "report"})

        medical_analysis("fever", "", model_preference=9)
        assert fake.calls == [models[0]]

    def test_analysis_empty_answer_uses_local_report(self, fake_inference):
        fake_inference({ai_settings.ANALYSIS_MODELS[0]: ""})

        result = medical_analysis("fever", "")
        assert result["confidence"] == "medium"
        assert result["model"] == LOCAL_MODEL_NAME
        assert "fever" in result["analysis"]

    def test_analysis_chain_exhausted(self, fake_inference):
        fake = fake_inference({})

        result = medical_analysis("fever", "", model_preference=1)
        assert fake.calls == ai_settings.ANALYSIS_MODELS[1:]
        assert result["confidence"] == "low"
        assert result["model"] == LOCAL_MODEL_NAME


def test_dynamic_medications_first_key_wins():
    # "عفونت تنفسی" precedes "سرفه" in the table
    medicines = get_dynamic_medications("عفونت تنفسی", "سرفه")
    assert medicines[0].medicine == "Amoxicillin"
