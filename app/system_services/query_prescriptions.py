# app/system_services/query_prescriptions.py
import math
from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.system_models.medicine_model.medicine_model import Medicine
from app.system_models.prescription_model.prescription_model import USER_PRESET_PREFIX, Prescription


def _owned_by(user_id: str, search: str = ""):
    # user presets share the table but are not patient prescriptions
    conditions = [
        Prescription.user_id == user_id,
        ~Prescription.id.startswith(USER_PRESET_PREFIX),
    ]
    if search:
        conditions.append(Prescription.patient_name.ilike(f"%{search}%"))
    return conditions


async def list_prescriptions(
    db: AsyncSession,
    user_id: str,
    page: int = 1,
    limit: int = 50,
    search: str = "",
) -> Tuple[List[Prescription], int]:
    """One page of the user's prescriptions, most recent first, with medicines."""
    conditions = _owned_by(user_id, search)

    total = await db.scalar(select(func.count(Prescription.id)).where(*conditions))
    if not total:
        return [], 0

    result = await db.execute(
        select(Prescription)
        .where(*conditions)
        .order_by(Prescription.created_at.desc())
        .limit(limit)
        .offset((page - 1) * limit)
    )
    return list(result.scalars().all()), total


def total_pages(total_count: int, limit: int) -> int:
    return math.ceil(total_count / limit) if limit else 0


async def get_prescription(
    db: AsyncSession,
    prescription_id: str,
    user_id: Optional[str] = None,
    include_presets: bool = False,
) -> Optional[Prescription]:
    """Fetch one prescription; restricted to ``user_id`` when given. User presets only on request."""
    query = select(Prescription).where(Prescription.id == prescription_id)
    if not include_presets:
        query = query.where(~Prescription.id.startswith(USER_PRESET_PREFIX))
    if user_id is not None:
        query = query.where(Prescription.user_id == user_id)
    result = await db.execute(query.execution_options(populate_existing=True))
    return result.scalars().first()


async def debug_summary(db: AsyncSession, user_id: str) -> dict:
    """Counts and id/name pairs for troubleshooting the prescription/medicine join."""
    prescriptions = (
        await db.execute(select(Prescription).where(Prescription.user_id == user_id))
    ).scalars().all()

    medicines = (
        await db.execute(
            select(Medicine).join(Prescription).where(Prescription.user_id == user_id)
        )
    ).scalars().all()

    joined = []
    for prescription in prescriptions:
        if not prescription.medicines:
            joined.append({"prescriptionId": prescription.id, "patientName": prescription.patient_name, "medicine": None})
        for med in prescription.medicines:
            joined.append({"prescriptionId": prescription.id, "patientName": prescription.patient_name, "medicine": med.medicine})

    return {
        "prescriptionsCount": len(prescriptions),
        "medicinesCount": len(medicines),
        "prescriptions": [{"id": p.id, "patientName": p.patient_name} for p in prescriptions],
        "medicines": [
            {"id": m.id, "prescriptionId": m.prescription_id, "medicine": m.medicine} for m in medicines
        ],
        "joinedData": joined,
    }
