# app/ai_system/autocomplete.py
import logging
from typing import List

from app.ai_system import knowledge_base as kb
from app.ai_system.inference_client import inference_client
from app.ai_system.prompts import build_autocomplete_prompt
from config.aiconfig import ai_settings

logger = logging.getLogger(__name__)


def get_local_suggestions(text: str) -> List[str]:
    """
    Complete a symptom from the static tables.
    Category matches first, then the general list, then the default five.
    """
    lowered = (text or "").lower()
    limit = ai_settings.MAX_SUGGESTIONS
    suggestions: List[str] = []

    for key, values in kb.SYMPTOM_COMPLETIONS.items():
        if key in lowered:
            for value in values:
                if value not in suggestions:
                    suggestions.append(value)

    if not suggestions:
        for suggestion in kb.GENERAL_COMPLETIONS:
            if lowered in suggestion or suggestion.split(" ")[0] in lowered:
                suggestions.append(suggestion)

    if not suggestions:
        return list(kb.DEFAULT_COMPLETIONS)

    return suggestions[:limit]


def get_autocomplete_suggestions(text: str) -> List[str]:
    """Model completions when available (one per non-blank line), else local ones."""
    generated = inference_client.generate(
        ai_settings.AUTOCOMPLETE_MODEL,
        build_autocomplete_prompt(text),
        max_new_tokens=ai_settings.AUTOCOMPLETE_MAX_NEW_TOKENS,
        temperature=ai_settings.AUTOCOMPLETE_TEMPERATURE,
        return_full_text=False,
    )

    if generated:
        lines = [line for line in generated.split("\n") if line.strip()]
        if lines:
            return lines[: ai_settings.MAX_SUGGESTIONS]

    logger.info(f"🔤 Local autocomplete for: {text}")
    return get_local_suggestions(text)
