# app/system_services/delete_prescription.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.system_services.query_prescriptions import get_prescription

logger = logging.getLogger(__name__)


async def delete_prescription(db: AsyncSession, prescription_id: str, user_id: str) -> bool:
    """Delete a prescription and its medicines. False when nothing matched."""
    db_prescription = await get_prescription(db, prescription_id, user_id)
    if db_prescription is None:
        return False

    await db.delete(db_prescription)
    await db.commit()
    logger.info(f"🗑️  Prescription deleted: {prescription_id}")
    return True
