# app/system_services/system_routes.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import DataError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_checked_db, get_db
from app.helpers import messages
from app.system_models.prescription_model.prescription_schemas import (
    MessageEnvelope,
    Pagination,
    PrescriptionCreate,
    PrescriptionEnvelope,
    PrescriptionListEnvelope,
    PrescriptionPage,
    PrescriptionResponse,
    PrescriptionUpdate,
)
from app.system_services.create_prescription import create_prescription
from app.system_services.delete_prescription import delete_prescription
from app.system_services.query_prescriptions import (
    debug_summary,
    get_prescription,
    list_prescriptions,
    total_pages,
)
from app.system_services.update_prescription import update_prescription
from app.users.auth_dependencies import get_current_user_id
from config.appconfig import settings

logger = logging.getLogger(__name__)

router = APIRouter()


def translate_db_error(e: Exception, fallback: str) -> HTTPException:
    """Map driver failures to a status code and a message the clinician can act on."""
    if isinstance(e, DataError):
        return HTTPException(status_code=400, detail=messages.INVALID_DATA_FORMAT)
    if isinstance(e, (OperationalError, InterfaceError)):
        return HTTPException(status_code=503, detail=messages.DB_UNAVAILABLE)
    return HTTPException(status_code=500, detail=fallback)


@router.get("/prescriptions", response_model=PrescriptionListEnvelope)
async def list_prescriptions_endpoint(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT),
    search: str = Query(""),
    db: AsyncSession = Depends(get_checked_db),
    user_id: str = Depends(get_current_user_id),
):
    """List the user's prescriptions, newest first, optionally filtered by patient name."""
    try:
        items, total_count = await list_prescriptions(db, user_id, page, limit, search.strip())
        return PrescriptionListEnvelope(
            data=PrescriptionPage(
                prescriptions=[PrescriptionResponse.model_validate(p) for p in items],
                pagination=Pagination(
                    page=page,
                    limit=limit,
                    total_count=total_count,
                    total_pages=total_pages(total_count, limit),
                ),
            )
        )
    except Exception as e:
        logger.error(f"❌ Get prescriptions error: {e}", exc_info=True)
        raise translate_db_error(e, messages.FETCH_FAILED)


@router.post("/prescriptions", response_model=PrescriptionEnvelope)
async def create_prescription_endpoint(
    prescription: PrescriptionCreate,
    db: AsyncSession = Depends(get_checked_db),
    user_id: str = Depends(get_current_user_id),
):
    """Create a prescription with its medicines."""
    if not (prescription.patient_name or "").strip():
        raise HTTPException(status_code=400, detail=messages.PATIENT_NAME_REQUIRED)
    if not (prescription.diagnosis or "").strip():
        raise HTTPException(status_code=400, detail=messages.DIAGNOSIS_REQUIRED)

    try:
        db_prescription = await create_prescription(db, user_id, prescription)
        return PrescriptionEnvelope(
            data=PrescriptionResponse.model_validate(db_prescription),
            message=messages.PRESCRIPTION_CREATED,
        )
    except Exception as e:
        logger.error(f"❌ Create prescription error: {e}", exc_info=True)
        raise translate_db_error(e, messages.CREATE_FAILED)


@router.patch("/prescriptions", response_model=PrescriptionEnvelope)
async def update_prescription_endpoint(
    prescription: PrescriptionUpdate,
    db: AsyncSession = Depends(get_checked_db),
    user_id: str = Depends(get_current_user_id),
):
    """Partially update a prescription; a `medicines` list replaces all lines."""
    if not prescription.id:
        raise HTTPException(status_code=400, detail=messages.PRESCRIPTION_ID_REQUIRED)

    sent = prescription.model_fields_set
    if "patient_name" in sent and not (prescription.patient_name or "").strip():
        raise HTTPException(status_code=400, detail=messages.PATIENT_NAME_REQUIRED)
    if "diagnosis" in sent and not (prescription.diagnosis or "").strip():
        raise HTTPException(status_code=400, detail=messages.DIAGNOSIS_REQUIRED)

    try:
        db_prescription = await update_prescription(db, user_id, prescription)
    except Exception as e:
        logger.error(f"❌ Update prescription error: {e}", exc_info=True)
        raise translate_db_error(e, messages.UPDATE_FAILED)

    if db_prescription is None:
        raise HTTPException(status_code=404, detail=messages.PRESCRIPTION_NOT_FOUND)

    return PrescriptionEnvelope(
        data=PrescriptionResponse.model_validate(db_prescription),
        message=messages.PRESCRIPTION_UPDATED,
    )


@router.get("/prescriptions/{prescription_id}", response_model=PrescriptionEnvelope)
async def get_prescription_endpoint(
    prescription_id: str,
    db: AsyncSession = Depends(get_checked_db),
    user_id: str = Depends(get_current_user_id),
):
    """Get one prescription with its medicines."""
    try:
        db_prescription = await get_prescription(db, prescription_id, user_id)
    except Exception as e:
        logger.error(f"❌ Get prescription error: {e}", exc_info=True)
        raise translate_db_error(e, messages.FETCH_FAILED)

    if db_prescription is None:
        raise HTTPException(status_code=404, detail=messages.PRESCRIPTION_NOT_FOUND)
    return PrescriptionEnvelope(data=PrescriptionResponse.model_validate(db_prescription))


@router.delete("/prescriptions/{prescription_id}", response_model=MessageEnvelope)
async def delete_prescription_endpoint(
    prescription_id: str,
    db: AsyncSession = Depends(get_checked_db),
    user_id: str = Depends(get_current_user_id),
):
    """Delete a prescription and its medicines."""
    try:
        deleted = await delete_prescription(db, prescription_id, user_id)
    except Exception as e:
        logger.error(f"❌ Delete prescription error: {e}", exc_info=True)
        raise translate_db_error(e, messages.DELETE_FAILED)

    if not deleted:
        raise HTTPException(status_code=404, detail=messages.PRESCRIPTION_NOT_FOUND)
    return MessageEnvelope(message=messages.PRESCRIPTION_DELETED)


@router.get("/debug")
async def debug_endpoint(
    db: AsyncSession = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    """Raw counts of the user's prescriptions and medicines."""
    try:
        return await debug_summary(db, user_id)
    except Exception as e:
        logger.error(f"❌ Debug error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Debug failed")
