# app/ai_system/medical_analysis.py
"""
Free-text Medical Analysis
Walks the analysis model chain starting at the preferred model. When no
model answers, a report is assembled from the local knowledge tables.
"""
import logging
from typing import Any, Dict, List

from app.ai_system import knowledge_base as kb
from app.ai_system.inference_client import inference_client
from app.ai_system.prompts import build_analysis_prompt
from app.ai_system.symptom_analyzer import LOCAL_MODEL_NAME
from app.helpers.time import iso_timestamp
from config.aiconfig import ai_settings

logger = logging.getLogger(__name__)


def _bullets(items: List[str]) -> str:
    return "\n".join(f"• {item}" for item in items)


def local_analysis_report(symptoms: str, patient_history: str = "") -> str:
    """Plain-text report built from the English symptom map and examination rules."""
    lowered = (symptoms or "").lower()

    conditions: List[str] = []
    for symptom, related in kb.ENGLISH_SYMPTOM_CONDITIONS.items():
        if symptom in lowered:
            for condition in related.split(", "):
                if condition not in conditions:
                    conditions.append(condition)

    actions = ["Complete physical examination"]
    for triggers, examinations in kb.EXAMINATION_RULES:
        if any(trigger in lowered for trigger in triggers):
            actions.extend(examinations)

    history_line = f"تاریخچه: {patient_history}" if patient_history else ""

    return f"""تحلیل اولیه بر اساس شرح حال:

شرح حال: {symptoms}
{history_line}

تشخیص‌های احتمالی:
{_bullets(conditions)}

معاینات پیشنهادی:
{_bullets(actions)}

توصیه‌های اولیه:
{_bullets(kb.GENERAL_ADVICE)}

تذکر: این تحلیل کامپیوتری است و جایگزین معاینه پزشک نمی‌باشد."""


def _model_chain(model_preference: int) -> List[str]:
    models = ai_settings.ANALYSIS_MODELS
    if not isinstance(model_preference, int) or not 0 <= model_preference < len(models):
        model_preference = 0
    return models[model_preference:]


def medical_analysis(symptoms: str, patient_history: str = "", model_preference: int = 0) -> Dict[str, Any]:
    """
    Analyze free text with the preferred model, then the ones after it.

    Returns:
        Dict with analysis (text), confidence (high/medium/low), model
        (the model that answered or "local_fallback") and timestamp
    """
    result = {
        "analysis": None,
        "confidence": "low",
        "model": LOCAL_MODEL_NAME,
        "timestamp": iso_timestamp(),
    }

    if not inference_client.available:
        result["analysis"] = local_analysis_report(symptoms, patient_history)
        return result

    prompt = build_analysis_prompt(symptoms, patient_history)

    for model in _model_chain(model_preference):
        text = inference_client.generate(
            model,
            prompt,
            max_new_tokens=ai_settings.ANALYSIS_MAX_NEW_TOKENS,
            temperature=ai_settings.ANALYSIS_TEMPERATURE,
            return_full_text=False,
        )
        if text is None:
            continue

        if text:
            result.update(analysis=text, confidence="high", model=model)
        else:
            # model answered with nothing
            logger.warning(f"⚠️  Model {model} returned empty text")
            result.update(analysis=local_analysis_report(symptoms, patient_history), confidence="medium")
        return result

    logger.warning("⚠️  Analysis model chain exhausted, using local knowledge")
    result["analysis"] = local_analysis_report(symptoms, patient_history)
    return result
