# app/system_models/medicine_model/medicine_schemas.py
from datetime import datetime
from typing import Optional

from app.system_models.base_schema import CamelModel


class MedicineIn(CamelModel):
    """
    One medicine line as sent by the form.
    Lines without a medicine name or dosage are dropped on save, so nothing
    is required here.
    """
    id: Optional[str] = None
    medicine: Optional[str] = None
    dosage: Optional[str] = None
    dosage_persian: Optional[str] = None
    form: Optional[str] = None
    form_persian: Optional[str] = None
    frequency: Optional[str] = None
    frequency_persian: Optional[str] = None
    duration: Optional[str] = None
    duration_persian: Optional[str] = None
    route: Optional[str] = None
    timing: Optional[str] = None
    with_food: Optional[bool] = None
    instructions: Optional[str] = None
    instructions_persian: Optional[str] = None
    notes: Optional[str] = None


class MedicineResponse(CamelModel):
    id: str
    prescription_id: str
    medicine: str
    dosage: str
    dosage_persian: Optional[str] = ""
    form: Optional[str] = ""
    form_persian: Optional[str] = ""
    frequency: Optional[str] = ""
    frequency_persian: Optional[str] = ""
    duration: Optional[str] = ""
    duration_persian: Optional[str] = ""
    route: Optional[str] = ""
    timing: Optional[str] = ""
    with_food: bool = False
    instructions: Optional[str] = ""
    instructions_persian: Optional[str] = ""
    notes: Optional[str] = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MedicineSuggestion(CamelModel):
    """Medicine proposed by the suggestion engine (not yet persisted)."""
    id: str
    medicine: str
    dosage: str
    form: Optional[str] = None
    frequency: Optional[str] = None
    duration: Optional[str] = None
    route: Optional[str] = None
    timing: Optional[str] = None
    with_food: Optional[bool] = None
    instructions: Optional[str] = None
    notes: Optional[str] = None
    prescription_id: str = ""
