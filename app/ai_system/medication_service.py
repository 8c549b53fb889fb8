# app/ai_system/medication_service.py
import logging
from typing import List

from app.ai_system import knowledge_base as kb
from app.system_models.medicine_model.medicine_schemas import MedicineSuggestion

logger = logging.getLogger(__name__)


def _suggestions(entries, id_prefix: str = "") -> List[MedicineSuggestion]:
    return [
        MedicineSuggestion.model_validate({"id": entry.get("id") or f"{id_prefix}{i}", **entry})
        for i, entry in enumerate(entries, start=1)
    ]


def get_fallback_medications() -> List[MedicineSuggestion]:
    """Acetaminophen and Vitamin C."""
    return _suggestions(kb.GENERAL_MEDICATIONS)


def get_dynamic_medications(diagnosis: str, symptoms: str) -> List[MedicineSuggestion]:
    """
    Medicines for a diagnosis/symptom pair.
    The first table key contained in "<diagnosis> <symptoms>" wins.
    """
    combined = f"{diagnosis or ''} {symptoms or ''}".lower()

    for key, entries in kb.DIAGNOSIS_MEDICATIONS.items():
        if key.lower() in combined:
            logger.info(f"💊 Medication match: {key}")
            return _suggestions(entries)

    logger.info("💊 No medication match, using general medicines")
    return get_fallback_medications()
