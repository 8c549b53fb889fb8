# app/system_services/preset_services.py
import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.time import utcnow
from app.system_models.medicine_model.medicine_schemas import MedicineIn
from app.system_models.prescription_model.prescription_model import USER_PRESET_PREFIX, Prescription
from app.system_models.prescription_model.prescription_schemas import PrescriptionCreate
from app.system_models.prescription_model.preset_schemas import PresetPayload, PresetResponse
from app.system_services.create_prescription import create_prescription
from app.system_services.query_prescriptions import get_prescription
from app.system_services.update_prescription import replace_medicines

logger = logging.getLogger(__name__)

# Preset columns a PUT rewrites; blanks are stored as ""
PRESET_TEXT_FIELDS = ("chief_complaint", "instructions", "follow_up", "restrictions")


def new_preset_id() -> str:
    return f"{USER_PRESET_PREFIX}{uuid.uuid4().hex}"


def preset_medicine_id(preset_id: str):
    """Medicine ids of a rewritten preset are ``<preset id>_med_<line index>``."""
    return lambda index: f"{preset_id}_med_{index}"


def to_preset_response(prescription: Prescription) -> PresetResponse:
    return PresetResponse(
        id=prescription.id,
        name=prescription.title,
        category=prescription.category,
        urgency=prescription.urgency or "medium",
        diagnosis=prescription.diagnosis,
        chief_complaint=prescription.chief_complaint,
        history_of_present_illness=prescription.history_of_present_illness,
        physical_examination=prescription.physical_examination,
        instructions=prescription.instructions,
        follow_up=prescription.follow_up,
        restrictions=prescription.restrictions,
        medicines=[MedicineIn.model_validate(med) for med in prescription.medicines],
        created_at=prescription.created_at,
        updated_at=prescription.updated_at,
    )


async def list_user_presets(db: AsyncSession, user_id: str) -> List[Prescription]:
    result = await db.execute(
        select(Prescription)
        .where(Prescription.user_id == user_id, Prescription.id.startswith(USER_PRESET_PREFIX))
        .order_by(Prescription.created_at.desc())
    )
    return list(result.scalars().all())


async def get_user_preset(db: AsyncSession, preset_id: str, user_id: str) -> Optional[Prescription]:
    if not preset_id.startswith(USER_PRESET_PREFIX):
        return None
    return await get_prescription(db, preset_id, user_id, include_presets=True)


async def create_user_preset(db: AsyncSession, user_id: str, payload: PresetPayload) -> Prescription:
    """Store a preset as a prescription row with a ``user_`` id and no patient."""
    preset_id = new_preset_id()
    body = PrescriptionCreate(
        patient_name="",
        diagnosis=payload.diagnosis,
        medicines=payload.medicines or [],
        **{field: getattr(payload, field) or "" for field in PRESET_TEXT_FIELDS},
    )
    return await create_prescription(
        db,
        user_id,
        body,
        prescription_id=preset_id,
        title=payload.name,
        category=payload.category,
        urgency=payload.urgency or "medium",
    )


async def update_user_preset(
    db: AsyncSession, preset_id: str, user_id: str, payload: PresetPayload
) -> Optional[Prescription]:
    """Rewrite the clinical fields and every medicine line. None when not found."""
    db_preset = await get_user_preset(db, preset_id, user_id)
    if db_preset is None:
        return None

    db_preset.title = payload.name
    db_preset.category = payload.category
    db_preset.urgency = payload.urgency or "medium"
    db_preset.diagnosis = payload.diagnosis
    for field in PRESET_TEXT_FIELDS:
        setattr(db_preset, field, getattr(payload, field) or "")

    # old lines must be gone before rows reusing their ids are inserted
    db_preset.medicines = []
    await db.flush()
    replace_medicines(db_preset, payload.medicines or [], preset_medicine_id(preset_id))

    db_preset.updated_at = utcnow()
    await db.commit()
    await db.refresh(db_preset)

    logger.info(f"✅ Preset updated: {preset_id} ({len(db_preset.medicines)} medicines)")
    return db_preset


async def delete_user_preset(db: AsyncSession, preset_id: str, user_id: str) -> bool:
    db_preset = await get_user_preset(db, preset_id, user_id)
    if db_preset is None:
        return False

    await db.delete(db_preset)
    await db.commit()
    logger.info(f"🗑️  Preset deleted: {preset_id}")
    return True
