# app/ai_system/routes.py
import logging

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from app.ai_system.autocomplete import get_autocomplete_suggestions, get_local_suggestions
from app.ai_system.inference_client import inference_client
from app.ai_system.knowledge_base import EMERGENCY_FALLBACK_PRESCRIPTION
from app.ai_system.medical_analysis import local_analysis_report, medical_analysis
from app.ai_system.medication_service import get_dynamic_medications
from app.ai_system.prescription_generator import generate_intelligent_prescription
from app.ai_system.schemas import (
    AIAnalysis,
    AutocompleteResponse,
    MedicalAnalysisPayload,
    MedicalAnalysisResponse,
    PrescriptionDraft,
    PrescriptionGenerationPayload,
    PrescriptionGenerationResponse,
    SymptomAnalysisResponse,
    SymptomPayload,
    TextPayload,
)
from app.ai_system.symptom_analyzer import LOCAL_MODEL_NAME, analyze_symptoms
from app.helpers import messages
from app.helpers.time import iso_timestamp
from app.helpers.validation import validate_input
from app.users.auth_dependencies import get_current_admin_id, get_current_user_id
from config.aiconfig import ai_settings
from config.config_schemas import AIConfigRequest, AIConfigResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze-symptoms", response_model=SymptomAnalysisResponse)
async def analyze_symptoms_endpoint(
    payload: SymptomPayload,
    user_id: str = Depends(get_current_user_id),
):
    """Suggest a diagnosis for free-text symptoms."""
    symptoms = (payload.symptoms or "").strip()
    if not symptoms:
        raise HTTPException(status_code=400, detail=messages.SYMPTOMS_HISTORY_REQUIRED)

    try:
        analysis = await run_in_threadpool(analyze_symptoms, payload.symptoms, payload.patient_history or "")
        return SymptomAnalysisResponse(
            analysis=AIAnalysis.model_validate(analysis),
            timestamp=iso_timestamp(),
        )
    except Exception as e:
        logger.error(f"❌ Symptom analysis error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=messages.ANALYSIS_FAILED)


@router.post("/generate-prescription", response_model=PrescriptionGenerationResponse)
async def generate_prescription_endpoint(
    payload: PrescriptionGenerationPayload,
    user_id: str = Depends(get_current_user_id),
):
    """
    Diagnosis plus matching medicines.

    Never fails once the input is valid: an internal error answers with a
    static "needs evaluation" prescription and source "fallback".
    """
    symptoms = (payload.symptoms or "").strip()
    if not symptoms:
        raise HTTPException(status_code=400, detail=messages.SYMPTOMS_REQUIRED)

    try:
        analysis = await run_in_threadpool(analyze_symptoms, payload.symptoms, payload.patient_history or "")
        target_diagnosis = payload.current_diagnosis or analysis["diagnosis"]
        analysis["medications"] = get_dynamic_medications(target_diagnosis, payload.symptoms)

        return PrescriptionGenerationResponse(
            prescription=AIAnalysis.model_validate(analysis),
            timestamp=iso_timestamp(),
            source="local" if analysis["ai_model_used"] == LOCAL_MODEL_NAME else "ai",
        )
    except Exception as e:
        logger.error(f"❌ Prescription generation error: {e}", exc_info=True)
        return PrescriptionGenerationResponse(
            prescription=AIAnalysis.model_validate(EMERGENCY_FALLBACK_PRESCRIPTION),
            timestamp=iso_timestamp(),
            source="fallback",
        )


@router.post("/autocomplete", response_model=AutocompleteResponse)
async def autocomplete_endpoint(
    payload: TextPayload,
    user_id: str = Depends(get_current_user_id),
):
    """Up to five symptom completions."""
    text = payload.text or ""
    if len(text) < ai_settings.AUTOCOMPLETE_MIN_LENGTH:
        raise HTTPException(status_code=400, detail=messages.TEXT_TOO_SHORT)

    try:
        suggestions = await run_in_threadpool(get_autocomplete_suggestions, text)
    except Exception as e:
        logger.error(f"❌ Autocomplete error: {e}", exc_info=True)
        suggestions = get_local_suggestions(text)

    return AutocompleteResponse(suggestions=suggestions)


@router.post("/suggest", response_model=PrescriptionDraft)
async def suggest_endpoint(
    payload: TextPayload,
    user_id: str = Depends(get_current_user_id),
):
    """Pre-filled prescription form for a free-text description."""
    text = payload.text or ""
    if len(text) < ai_settings.SUGGEST_MIN_LENGTH or not validate_input(text).is_valid:
        raise HTTPException(status_code=400, detail=messages.TEXT_TOO_SHORT_FOR_PRESCRIPTION)

    try:
        return PrescriptionDraft.model_validate(generate_intelligent_prescription(text))
    except Exception as e:
        logger.error(f"❌ Suggest error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=messages.SUGGEST_FAILED)


@router.post("/medical-analysis", response_model=MedicalAnalysisResponse)
async def medical_analysis_endpoint(
    payload: MedicalAnalysisPayload,
    user_id: str = Depends(get_current_user_id),
):
    """Free-text analysis report from the analysis model chain."""
    symptoms = (payload.symptoms or "").strip()
    if not symptoms:
        raise HTTPException(status_code=400, detail=messages.SYMPTOMS_HISTORY_REQUIRED)

    try:
        result = await run_in_threadpool(
            medical_analysis, payload.symptoms, payload.patient_history or "", payload.model_preference
        )
        return MedicalAnalysisResponse(**result)
    except Exception as e:
        logger.error(f"❌ Medical analysis error: {e}", exc_info=True)

    try:
        return MedicalAnalysisResponse(
            analysis=local_analysis_report(payload.symptoms, payload.patient_history or ""),
            confidence="low",
            model=LOCAL_MODEL_NAME,
            timestamp=iso_timestamp(),
        )
    except Exception as e:
        logger.error(f"❌ Local analysis error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=messages.ANALYSIS_FAILED)


# ============================================================================
# RUNTIME CONFIGURATION
# ============================================================================
def _current_config() -> AIConfigResponse:
    return AIConfigResponse(
        inference_enabled=ai_settings.inference_enabled,
        inference_timeout=ai_settings.INFERENCE_TIMEOUT,
        symptom_models=ai_settings.SYMPTOM_MODELS,
        analysis_models=ai_settings.ANALYSIS_MODELS,
        autocomplete_model=ai_settings.AUTOCOMPLETE_MODEL,
        symptom_max_new_tokens=ai_settings.SYMPTOM_MAX_NEW_TOKENS,
        symptom_temperature=ai_settings.SYMPTOM_TEMPERATURE,
        analysis_max_new_tokens=ai_settings.ANALYSIS_MAX_NEW_TOKENS,
        analysis_temperature=ai_settings.ANALYSIS_TEMPERATURE,
        autocomplete_max_new_tokens=ai_settings.AUTOCOMPLETE_MAX_NEW_TOKENS,
        autocomplete_temperature=ai_settings.AUTOCOMPLETE_TEMPERATURE,
        max_suggestions=ai_settings.MAX_SUGGESTIONS,
        autocomplete_min_length=ai_settings.AUTOCOMPLETE_MIN_LENGTH,
        suggest_min_length=ai_settings.SUGGEST_MIN_LENGTH,
    )


@router.get("/ai/config", response_model=AIConfigResponse)
async def get_ai_config(user_id: str = Depends(get_current_user_id)):
    """
    Get current AI configuration.

    Returns model chains, generation parameters and suggestion limits.
    The API key is reported only as `inference_enabled`.
    """
    return _current_config()


@router.post("/ai/config", response_model=AIConfigResponse)
async def update_ai_config(config: AIConfigRequest, admin_id: str = Depends(get_current_admin_id)):
    """
    Update AI configuration (in-memory only, resets on restart).

    Supports partial updates — send only the fields you want to change.
    Changing the API key or timeout rebuilds the inference client.

    Example request:
    ```json
    {
        "symptom_models": ["gpt2"],
        "max_suggestions": 3
    }
    ```
    """
    updated_fields = []

    # ── API Access ──
    if config.hugging_face_api_key is not None:
        ai_settings.HUGGING_FACE_API_KEY = config.hugging_face_api_key
        updated_fields.append("hugging_face_api_key → ***")

    if config.inference_timeout is not None:
        ai_settings.INFERENCE_TIMEOUT = config.inference_timeout
        updated_fields.append(f"inference_timeout → {config.inference_timeout}")

    # ── Model Chains ──
    if config.symptom_models is not None:
        ai_settings.SYMPTOM_MODELS = config.symptom_models
        updated_fields.append(f"symptom_models → {config.symptom_models}")

    if config.analysis_models is not None:
        ai_settings.ANALYSIS_MODELS = config.analysis_models
        updated_fields.append(f"analysis_models → {config.analysis_models}")

    if config.autocomplete_model is not None:
        ai_settings.AUTOCOMPLETE_MODEL = config.autocomplete_model
        updated_fields.append(f"autocomplete_model → {config.autocomplete_model}")

    # ── Generation Settings ──
    if config.symptom_max_new_tokens is not None:
        ai_settings.SYMPTOM_MAX_NEW_TOKENS = config.symptom_max_new_tokens
        updated_fields.append(f"symptom_max_new_tokens → {config.symptom_max_new_tokens}")

    if config.symptom_temperature is not None:
        ai_settings.SYMPTOM_TEMPERATURE = config.symptom_temperature
        updated_fields.append(f"symptom_temperature → {config.symptom_temperature}")

    if config.analysis_max_new_tokens is not None:
        ai_settings.ANALYSIS_MAX_NEW_TOKENS = config.analysis_max_new_tokens
        updated_fields.append(f"analysis_max_new_tokens → {config.analysis_max_new_tokens}")

    if config.analysis_temperature is not None:
        ai_settings.ANALYSIS_TEMPERATURE = config.analysis_temperature
        updated_fields.append(f"analysis_temperature → {config.analysis_temperature}")

    # ── Suggestions ──
    if config.max_suggestions is not None:
        ai_settings.MAX_SUGGESTIONS = config.max_suggestions
        updated_fields.append(f"max_suggestions → {config.max_suggestions}")

    if config.hugging_face_api_key is not None or config.inference_timeout is not None:
        inference_client.reset()

    if updated_fields:
        logger.info(f"🔧 AI config updated by {admin_id}: {', '.join(updated_fields)}")
    else:
        logger.info("ℹ️  AI config update requested with no changes")

    return _current_config()
