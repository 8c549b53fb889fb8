# app/system_services/update_prescription.py
import logging
from typing import Callable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.calculations import calculate_bmi
from app.helpers.time import utcnow
from app.system_models.medicine_model.medicine_schemas import MedicineIn
from app.system_models.prescription_model.prescription_model import Prescription
from app.system_models.prescription_model.prescription_schemas import PrescriptionUpdate
from app.system_services.create_prescription import LIST_FIELDS, build_medicines
from app.system_services.query_prescriptions import get_prescription

logger = logging.getLogger(__name__)

# Fields a PATCH may touch; ids, ownership and timestamps are never client-controlled
UPDATABLE_FIELDS = set(PrescriptionUpdate.model_fields) - {"id", "medicines"}


def replace_medicines(
    prescription: Prescription,
    incoming: List[MedicineIn],
    id_factory: Optional[Callable[[int], str]] = None,
) -> None:
    """Swap every medicine line; orphaned rows are deleted by the cascade."""
    prescription.medicines = build_medicines(prescription.id, incoming, id_factory)


async def update_prescription(
    db: AsyncSession, user_id: str, payload: PrescriptionUpdate
) -> Optional[Prescription]:
    """Apply a partial update. Returns None when the prescription is not the user's."""
    db_prescription = await get_prescription(db, payload.id, user_id)
    if db_prescription is None:
        return None

    changes = payload.model_dump(include=UPDATABLE_FIELDS, exclude_unset=True)
    for field, value in changes.items():
        if field in LIST_FIELDS and value is None:
            value = []
        setattr(db_prescription, field, value)

    if ("weight" in changes or "height" in changes) and "bmi" not in changes:
        db_prescription.bmi = calculate_bmi(db_prescription.weight, db_prescription.height) or None

    if payload.medicines is not None:
        replace_medicines(db_prescription, payload.medicines)

    db_prescription.updated_at = utcnow()
    await db.commit()
    await db.refresh(db_prescription)

    logger.info(f"✅ Prescription updated: {db_prescription.id} ({', '.join(changes) or 'no fields'})")
    return db_prescription
