# app/system_services/preset_routes.py
import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_checked_db
from app.helpers import messages
from app.system_models.prescription_model.prescription_model import USER_PRESET_PREFIX
from app.system_models.prescription_model.preset_schemas import PresetPayload, PresetResponse
from app.system_services.predefined_presets import PREDEFINED_PRESETS, is_predefined, predefined_preset
from app.system_services.preset_services import (
    create_user_preset,
    delete_user_preset,
    get_user_preset,
    list_user_presets,
    to_preset_response,
    update_user_preset,
)
from app.system_services.system_routes import translate_db_error
from app.users.auth_dependencies import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_preset_fields(payload: PresetPayload) -> None:
    if not all(((payload.name or "").strip(), (payload.diagnosis or "").strip(), (payload.category or "").strip())):
        raise HTTPException(status_code=400, detail=messages.PRESET_FIELDS_REQUIRED)


@router.get("/presets", response_model=Dict[str, PresetResponse])
async def list_presets_endpoint(
    db: AsyncSession = Depends(get_checked_db),
    user_id: str = Depends(get_current_user_id),
):
    """Predefined templates plus the caller's own presets, keyed by id."""
    try:
        presets = {preset_id: PresetResponse.model_validate(predefined_preset(preset_id)) for preset_id in PREDEFINED_PRESETS}
        for db_preset in await list_user_presets(db, user_id):
            presets[db_preset.id] = to_preset_response(db_preset)
        return presets
    except Exception as e:
        logger.error(f"❌ Presets load error: {e}", exc_info=True)
        raise translate_db_error(e, messages.PRESETS_LOAD_FAILED)


@router.post("/presets", response_model=PresetResponse)
async def create_preset_endpoint(
    payload: PresetPayload,
    db: AsyncSession = Depends(get_checked_db),
    user_id: str = Depends(get_current_user_id),
):
    """Save a new user preset."""
    _require_preset_fields(payload)

    try:
        return to_preset_response(await create_user_preset(db, user_id, payload))
    except Exception as e:
        logger.error(f"❌ Create preset error: {e}", exc_info=True)
        raise translate_db_error(e, messages.PRESET_CREATE_FAILED)


@router.get("/presets/{preset_id}", response_model=PresetResponse)
async def get_preset_endpoint(
    preset_id: str,
    db: AsyncSession = Depends(get_checked_db),
    user_id: str = Depends(get_current_user_id),
):
    if is_predefined(preset_id):
        return PresetResponse.model_validate(predefined_preset(preset_id))

    try:
        db_preset = await get_user_preset(db, preset_id, user_id)
    except Exception as e:
        logger.error(f"❌ Get preset error: {e}", exc_info=True)
        raise translate_db_error(e, messages.PRESET_FETCH_FAILED)

    if db_preset is None:
        raise HTTPException(status_code=404, detail=messages.PRESET_NOT_FOUND)
    return to_preset_response(db_preset)


@router.put("/presets/{preset_id}", response_model=PresetResponse)
async def update_preset_endpoint(
    preset_id: str,
    payload: PresetPayload,
    db: AsyncSession = Depends(get_checked_db),
    user_id: str = Depends(get_current_user_id),
):
    """
    Rewrite a user preset.
    Only `user_` presets are editable (403 otherwise). Medicine lines are replaced.
    """
    if not preset_id.startswith(USER_PRESET_PREFIX):
        raise HTTPException(status_code=403, detail=messages.PRESET_READ_ONLY_EDIT)
    _require_preset_fields(payload)

    try:
        db_preset = await update_user_preset(db, preset_id, user_id, payload)
    except Exception as e:
        logger.error(f"❌ Update preset error: {e}", exc_info=True)
        raise translate_db_error(e, messages.PRESET_UPDATE_FAILED)

    if db_preset is None:
        raise HTTPException(status_code=404, detail=messages.PRESET_NOT_FOUND)
    return to_preset_response(db_preset)


@router.delete("/presets/{preset_id}")
async def delete_preset_endpoint(
    preset_id: str,
    db: AsyncSession = Depends(get_checked_db),
    user_id: str = Depends(get_current_user_id),
):
    if not preset_id.startswith(USER_PRESET_PREFIX):
        raise HTTPException(status_code=403, detail=messages.PRESET_READ_ONLY_DELETE)

    try:
        deleted = await delete_user_preset(db, preset_id, user_id)
    except Exception as e:
        logger.error(f"❌ Delete preset error: {e}", exc_info=True)
        raise translate_db_error(e, messages.PRESET_DELETE_FAILED)

    if not deleted:
        raise HTTPException(status_code=404, detail=messages.PRESET_NOT_FOUND)
    return {"message": messages.PRESET_DELETED}
