# config/config_schemas.py
"""
Runtime Configuration Schemas for the AI Suggestion System
Used by: /api/ai/config

Design: In-memory configuration (no database persistence)
- GET /config → returns current settings
- POST /config → updates settings in-memory (partial updates supported)
- Settings reset to file defaults on application restart
"""
from typing import List, Optional

from pydantic import BaseModel, Field


# ============================================================================
# AI SUGGESTION CONFIGURATION
# ============================================================================
class AIConfigRequest(BaseModel):
    """
    Request to update AI configuration.
    All fields are optional — send only what you want to change.
    """

    # ── API Access ──
    hugging_face_api_key: Optional[str] = Field(
        None, description="Inference API key; an empty string disables the API"
    )
    inference_timeout: Optional[float] = Field(
        None, gt=0, le=120, description="Seconds allowed per model call"
    )

    # ── Model Chains ──
    symptom_models: Optional[List[str]] = Field(
        None,
        min_length=1,
        description="Models tried in order for symptom analysis",
        examples=[["microsoft/BioGPT-Large", "gpt2"]],
    )
    analysis_models: Optional[List[str]] = Field(
        None, min_length=1, description="Models for free-text medical analysis"
    )
    autocomplete_model: Optional[str] = Field(
        None, description="Model used for symptom autocomplete", examples=["microsoft/DialoGPT-medium"]
    )

    # ── Generation Settings ──
    symptom_max_new_tokens: Optional[int] = Field(None, ge=1, le=2048)
    symptom_temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    analysis_max_new_tokens: Optional[int] = Field(None, ge=1, le=2048)
    analysis_temperature: Optional[float] = Field(None, ge=0.0, le=2.0)

    # ── Suggestions ──
    max_suggestions: Optional[int] = Field(
        None, ge=1, le=20, description="Maximum autocomplete suggestions returned"
    )


class AIConfigResponse(BaseModel):
    """Current AI configuration (the API key itself is never echoed)"""

    inference_enabled: bool
    inference_timeout: float

    symptom_models: List[str]
    analysis_models: List[str]
    autocomplete_model: str

    symptom_max_new_tokens: int
    symptom_temperature: float
    analysis_max_new_tokens: int
    analysis_temperature: float
    autocomplete_max_new_tokens: int
    autocomplete_temperature: float

    max_suggestions: int
    autocomplete_min_length: int
    suggest_min_length: int
