# app/system_models/prescription_model/preset_schemas.py
from datetime import datetime
from typing import List, Optional, Union

from pydantic import Field

from app.system_models.base_schema import CamelModel
from app.system_models.medicine_model.medicine_schemas import MedicineIn


class PresetPayload(CamelModel):
    """
    Body of POST /presets and PUT /presets/{id}.
    name, diagnosis and category are checked by the handler.
    """
    name: Optional[str] = None
    diagnosis: Optional[str] = None
    category: Optional[str] = None
    urgency: Optional[str] = None
    chief_complaint: Optional[str] = None
    instructions: Optional[str] = None
    follow_up: Optional[str] = None
    restrictions: Optional[str] = None
    medicines: Optional[List[MedicineIn]] = None


class PresetPatientInfo(CamelModel):
    name: str
    age: Optional[int] = None
    gender: Optional[str] = None


class PresetResponse(CamelModel):
    id: str
    name: Optional[str] = None
    category: Optional[str] = None
    urgency: str = "medium"
    predefined: bool = False
    patient_info: Optional[PresetPatientInfo] = None
    diagnosis: Optional[str] = None
    chief_complaint: Optional[str] = ""
    history_of_present_illness: Optional[str] = ""
    physical_examination: Optional[str] = ""
    instructions: Optional[str] = ""
    follow_up: Optional[str] = ""
    restrictions: Optional[str] = ""
    medicines: List[MedicineIn] = Field(default_factory=list)
    created_at: Optional[Union[datetime, str]] = None
    updated_at: Optional[datetime] = None
