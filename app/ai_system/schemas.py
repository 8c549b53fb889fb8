# app/ai_system/schemas.py

from typing import List, Optional

from pydantic import Field

from app.system_models.base_schema import CamelModel
from app.system_models.medicine_model.medicine_schemas import MedicineSuggestion


# ============================================================================
# REQUESTS
# ============================================================================
class SymptomPayload(CamelModel):
    symptoms: Optional[str] = ""
    patient_history: Optional[str] = ""


class PrescriptionGenerationPayload(SymptomPayload):
    current_diagnosis: Optional[str] = None


class MedicalAnalysisPayload(SymptomPayload):
    model_preference: int = 0


class TextPayload(CamelModel):
    text: Optional[str] = ""


# ============================================================================
# RESPONSES
# ============================================================================
class AIAnalysis(CamelModel):
    """Diagnosis suggestion produced by a model or by the local tables"""

    diagnosis: str
    confidence: str = Field(..., description="high, medium or low")
    clinical_notes: str = ""
    differential_diagnosis: Optional[str] = None
    medications: List[MedicineSuggestion] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    ai_model_used: Optional[str] = None


class SymptomAnalysisResponse(CamelModel):
    success: bool = True
    analysis: AIAnalysis
    timestamp: str


class PrescriptionGenerationResponse(CamelModel):
    success: bool = True
    prescription: AIAnalysis
    timestamp: str
    source: str = Field(..., description="ai, local or fallback")


class AutocompleteResponse(CamelModel):
    suggestions: List[str]


class PrescriptionDraft(CamelModel):
    """Pre-filled prescription form returned by /suggest"""

    id: str
    patient_name: str = ""
    patient_age: str = ""
    patient_gender: str = ""
    patient_phone: str = ""
    chief_complaint: str
    history_of_present_illness: str
    physical_examination: str
    diagnosis: str
    differential_diagnosis: str
    pulse_rate: str
    blood_pressure: str
    temperature: str
    respiratory_rate: str
    oxygen_saturation: str
    prescription: List[MedicineSuggestion]
    instructions: str
    follow_up: str
    restrictions: str
    allergies: List[str] = Field(default_factory=list)
    current_medications: List[str] = Field(default_factory=list)
    past_medical_history: str = ""
    doctor_name: str
    clinic_name: str
    created_at: str


class MedicalAnalysisResponse(CamelModel):
    analysis: str
    confidence: str
    model: str
    timestamp: str
