# app/pdf_system/schemas.py
from typing import Any, Dict, List, Optional

from pydantic import Field

from app.system_models.base_schema import CamelModel
from app.system_models.medicine_model.medicine_schemas import MedicineIn
from app.system_models.prescription_model.prescription_schemas import PrescriptionFields


class PDFPrescription(PrescriptionFields):
    """Everything the renderer reads; built from a stored row or an unsaved form."""
    id: Optional[str] = None
    medicines: List[MedicineIn] = Field(default_factory=list)


class PDFRequest(CamelModel):
    prescription: PDFPrescription
    config: Optional[Dict[str, Any]] = Field(
        None, description="Partial layout overrides, deep-merged into the defaults"
    )
