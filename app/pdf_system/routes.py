# app/pdf_system/routes.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.database.connection import get_checked_db
from app.helpers import messages
from app.pdf_system.pdf_config import PDFConfig, build_pdf_config
from app.pdf_system.prescription_pdf import (
    content_disposition,
    generate_file_name,
    generate_prescription_pdf,
)
from app.pdf_system.schemas import PDFPrescription, PDFRequest
from app.system_services.query_prescriptions import get_prescription
from app.system_services.system_routes import translate_db_error
from app.users.auth_dependencies import get_current_user_id

logger = logging.getLogger(__name__)

router = APIRouter()


async def _render(prescription: PDFPrescription, config) -> Response:
    try:
        pdf_config = build_pdf_config(config)
    except ValidationError as e:
        logger.warning(f"⚠️  Rejected PDF config: {e.errors()}")
        raise HTTPException(status_code=400, detail=messages.PDF_CONFIG_INVALID)

    try:
        # reportlab is synchronous and CPU bound
        pdf_bytes = await run_in_threadpool(generate_prescription_pdf, prescription, pdf_config)
    except Exception as e:
        logger.error(f"❌ PDF generation error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=messages.PDF_FAILED)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(generate_file_name(prescription))},
    )


@router.get("/prescriptions/{prescription_id}/pdf")
async def prescription_pdf_endpoint(
    prescription_id: str,
    db: AsyncSession = Depends(get_checked_db),
    user_id: str = Depends(get_current_user_id),
):
    """Download a saved prescription as PDF with the default layout."""
    try:
        db_prescription = await get_prescription(db, prescription_id, user_id)
    except Exception as e:
        logger.error(f"❌ Get prescription for PDF error: {e}", exc_info=True)
        raise translate_db_error(e, messages.FETCH_FAILED)

    if db_prescription is None:
        raise HTTPException(status_code=404, detail=messages.PRESCRIPTION_NOT_FOUND)

    # detach from the session before handing it to the worker thread
    prescription = PDFPrescription.model_validate(db_prescription)
    return await _render(prescription, None)


@router.post("/pdf")
async def render_pdf_endpoint(
    request: PDFRequest,
    user_id: str = Depends(get_current_user_id),
):
    """Render an unsaved prescription, with optional layout overrides."""
    logger.info(f"📄 PDF requested by {user_id}")
    return await _render(request.prescription, request.config)


@router.get("/pdf/config", response_model=PDFConfig)
async def pdf_config_defaults(user_id: str = Depends(get_current_user_id)):
    """The default layout, as a starting point for overrides."""
    return PDFConfig()
