# config/aiconfig.py
"""
AI Suggestion Configuration
Controls the external text-generation API used for symptom analysis and
autocomplete. Every call falls back to the static tables when the API is
not configured or fails.
"""
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class AISettings(BaseSettings):
    """Configuration for the Hugging Face inference proxy"""

    # ============================================================================
    # API ACCESS
    # ============================================================================
    HUGGING_FACE_API_KEY: str = Field(default="")
    INFERENCE_TIMEOUT: float = 30.0  # seconds per model call

    # ============================================================================
    # MODEL CHAINS (tried in order, first non-empty generation wins)
    # ============================================================================
    SYMPTOM_MODELS: List[str] = [
        "microsoft/BioGPT-Large",
        "microsoft/DialoGPT-large",
        "gpt2",
    ]
    ANALYSIS_MODELS: List[str] = [
        "microsoft/BioGPT-Large",
        "stanford-crfm/BioMedLM",
        "microsoft/BiomedNLP-PubMedBERT-base-uncased-abstract",
    ]
    AUTOCOMPLETE_MODEL: str = "microsoft/DialoGPT-medium"

    # ============================================================================
    # GENERATION SETTINGS
    # ============================================================================
    SYMPTOM_MAX_NEW_TOKENS: int = 500
    SYMPTOM_TEMPERATURE: float = 0.3
    ANALYSIS_MAX_NEW_TOKENS: int = 800
    ANALYSIS_TEMPERATURE: float = 0.2
    AUTOCOMPLETE_MAX_NEW_TOKENS: int = 20
    AUTOCOMPLETE_TEMPERATURE: float = 0.7

    # ============================================================================
    # SUGGESTION LIMITS
    # ============================================================================
    MAX_SUGGESTIONS: int = 5
    AUTOCOMPLETE_MIN_LENGTH: int = 3
    SUGGEST_MIN_LENGTH: int = 5

    class Config:
        env_file = ".env"
        extra = "ignore"

    @property
    def inference_enabled(self) -> bool:
        """API is used only when a non-blank key is configured."""
        return bool(self.HUGGING_FACE_API_KEY and self.HUGGING_FACE_API_KEY.strip())


ai_settings = AISettings()
