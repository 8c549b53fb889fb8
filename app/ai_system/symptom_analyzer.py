# app/ai_system/symptom_analyzer.py
"""
Symptom Analysis
Runs the symptom prompt through the model chain and reads a diagnosis out of
the first non-empty answer. Without an API key, or when every model fails,
the local keyword analysis answers instead.
"""
import logging
from typing import Any, Dict

from app.ai_system import knowledge_base as kb
from app.ai_system.inference_client import inference_client
from app.ai_system.prompts import build_symptom_prompt
from config.aiconfig import ai_settings

logger = logging.getLogger(__name__)

LOCAL_MODEL_NAME = "local_fallback"


def extract_diagnosis(text: str) -> str:
    """First keyword found in the text decides the diagnosis."""
    for keyword, diagnosis in kb.DIAGNOSIS_KEYWORDS.items():
        if keyword in text:
            return diagnosis
    return kb.UNKNOWN_DIAGNOSIS


def parse_model_response(text: str, model: str) -> Dict[str, Any]:
    return {
        "diagnosis": extract_diagnosis(text),
        "confidence": "medium",
        "clinical_notes": text[:300] + "...",
        "differential_diagnosis": "نیازمند معاینه بالینی",
        "medications": [],
        "recommendations": ["Complete physical examination", "Monitor vital signs"],
        "warnings": ["This analysis does not replace medical examination"],
        "ai_model_used": model,
    }


def local_analysis(symptoms: str, patient_history: str = "") -> Dict[str, Any]:
    """Keyword analysis for cough, fever, headache and stomach pain (Persian or English)."""
    lowered = symptoms.lower()
    diagnosis = kb.LOCAL_DEFAULT_DIAGNOSIS
    recommendations = list(kb.LOCAL_DEFAULT_RECOMMENDATIONS)

    for rule in kb.LOCAL_ANALYSIS_RULES:
        if any(keyword in lowered for keyword in rule["keywords"]):
            diagnosis = rule["diagnosis"]
            recommendations = list(rule["recommendations"])
            break

    history_note = f"تاریخچه: {patient_history}" if patient_history else ""

    return {
        "diagnosis": diagnosis,
        "confidence": "low",
        "clinical_notes": f"علائم گزارش شده: {symptoms}. {history_note}",
        "differential_diagnosis": (
            "نیازمند ارزیابی بالینی دقیق"
            if diagnosis == kb.LOCAL_DEFAULT_DIAGNOSIS
            else "تشخیص افتراقی نیازمند بررسی بیشتر"
        ),
        "medications": [],
        "recommendations": recommendations,
        "warnings": list(kb.LOCAL_WARNINGS),
        "ai_model_used": LOCAL_MODEL_NAME,
    }


def analyze_symptoms(symptoms: str, patient_history: str = "") -> Dict[str, Any]:
    """
    Analyze symptoms with the configured model chain.

    Args:
        symptoms: Free-text symptoms (Persian or English)
        patient_history: Optional medical history

    Returns:
        Dict with diagnosis, confidence, clinical_notes, differential_diagnosis,
        medications, recommendations, warnings and ai_model_used
    """
    if not inference_client.available:
        logger.info("ℹ️  Inference API not configured, using local analysis")
        return local_analysis(symptoms, patient_history)

    prompt = build_symptom_prompt(symptoms, patient_history)

    for model in ai_settings.SYMPTOM_MODELS:
        text = inference_client.generate(
            model,
            prompt,
            max_new_tokens=ai_settings.SYMPTOM_MAX_NEW_TOKENS,
            temperature=ai_settings.SYMPTOM_TEMPERATURE,
        )
        if text:
            logger.info(f"✅ Model {model} succeeded")
            return parse_model_response(text, model)

    logger.warning("⚠️  All AI models failed, using local analysis")
    return local_analysis(symptoms, patient_history)
