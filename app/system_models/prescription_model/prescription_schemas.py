# app/system_models/prescription_model/prescription_schemas.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from app.system_models.base_schema import CamelModel
from app.system_models.medicine_model.medicine_schemas import MedicineIn, MedicineResponse


class PrescriptionFields(CamelModel):
    """Every editable prescription field. Required-field checks happen in the services."""
    patient_name: Optional[str] = None
    patient_age: Optional[str] = None
    patient_gender: Optional[str] = None
    patient_phone: Optional[str] = None
    patient_address: Optional[str] = None
    weight: Optional[str] = None
    height: Optional[str] = None
    bmi: Optional[str] = None

    diagnosis: Optional[str] = None
    chief_complaint: Optional[str] = None
    history_of_present_illness: Optional[str] = None
    physical_examination: Optional[str] = None
    differential_diagnosis: Optional[str] = None

    pulse_rate: Optional[str] = None
    heart_rate: Optional[str] = None
    blood_pressure: Optional[str] = None
    temperature: Optional[str] = None
    respiratory_rate: Optional[str] = None
    oxygen_saturation: Optional[str] = None

    allergies: Optional[List[str]] = None
    current_medications: Optional[List[str]] = None
    medical_exams: Optional[List[str]] = None
    past_medical_history: Optional[str] = None
    family_history: Optional[str] = None
    social_history: Optional[str] = None
    exam_notes: Optional[str] = None

    instructions: Optional[str] = None
    follow_up: Optional[str] = None
    restrictions: Optional[str] = None

    doctor_name: Optional[str] = None
    doctor_license_number: Optional[str] = None
    clinic_name: Optional[str] = None
    clinic_address: Optional[str] = None
    doctor_fee: Optional[str] = None

    prescription_date: Optional[date] = None
    prescription_number: Optional[str] = None
    source: Optional[str] = None
    status: Optional[str] = None
    ai_confidence: Optional[str] = None
    ai_model_used: Optional[str] = None


class PrescriptionCreate(PrescriptionFields):
    medicines: List[MedicineIn] = Field(default_factory=list)


class PrescriptionUpdate(PrescriptionFields):
    id: Optional[str] = None
    medicines: Optional[List[MedicineIn]] = None


class PrescriptionResponse(PrescriptionFields):
    id: str
    user_id: str
    title: Optional[str] = None
    category: Optional[str] = None
    urgency: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    medicines: List[MedicineResponse] = Field(default_factory=list)


class Pagination(CamelModel):
    page: int
    limit: int
    total_count: int
    total_pages: int


class PrescriptionPage(CamelModel):
    prescriptions: List[PrescriptionResponse]
    pagination: Pagination


class PrescriptionListEnvelope(CamelModel):
    success: bool = True
    data: PrescriptionPage


class PrescriptionEnvelope(CamelModel):
    success: bool = True
    data: PrescriptionResponse
    message: Optional[str] = None


class MessageEnvelope(CamelModel):
    success: bool = True
    message: str
