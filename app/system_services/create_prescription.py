# app/system_services/create_prescription.py
import logging
import uuid
from typing import Callable, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.calculations import calculate_bmi
from app.system_models.medicine_model.medicine_model import Medicine
from app.system_models.medicine_model.medicine_schemas import MedicineIn
from app.system_models.prescription_model.prescription_model import Prescription
from app.system_models.prescription_model.prescription_schemas import PrescriptionCreate

logger = logging.getLogger(__name__)

# Patient fields stored as "" rather than NULL when omitted
BLANK_PATIENT_FIELDS = ("patient_age", "patient_gender", "patient_phone", "patient_address")
LIST_FIELDS = ("allergies", "current_medications", "medical_exams")


def new_id() -> str:
    return str(uuid.uuid4())


def build_medicines(
    prescription_id: str,
    incoming: Iterable[MedicineIn],
    id_factory: Optional[Callable[[int], str]] = None,
) -> List[Medicine]:
    """
    Turn form lines into Medicine rows.
    Lines missing a medicine name or dosage after trimming are skipped.
    """
    rows: List[Medicine] = []
    for index, med in enumerate(incoming):
        name = (med.medicine or "").strip()
        dosage = (med.dosage or "").strip()
        if not name or not dosage:
            logger.info(f"⏭️  Skipping medicine {name or 'unknown'}: missing medicine name or dosage")
            continue

        rows.append(
            Medicine(
                id=id_factory(index) if id_factory else new_id(),
                prescription_id=prescription_id,
                position=len(rows),
                medicine=name,
                dosage=dosage,
                dosage_persian=med.dosage_persian or "",
                form=med.form or "tablet",
                form_persian=med.form_persian or "",
                frequency=med.frequency or "",
                frequency_persian=med.frequency_persian or "",
                duration=med.duration or "",
                duration_persian=med.duration_persian or "",
                route=med.route or "oral",
                timing=med.timing or "after_meal",
                with_food=bool(med.with_food),
                instructions=med.instructions or "",
                instructions_persian=med.instructions_persian or "",
                notes=med.notes or "",
            )
        )
    return rows


def prescription_values(payload: PrescriptionCreate) -> dict:
    """Column values for a new prescription, with form defaults applied."""
    values = payload.model_dump(exclude={"medicines"}, exclude_none=True)
    for field in BLANK_PATIENT_FIELDS:
        values.setdefault(field, "")
    for field in LIST_FIELDS:
        values.setdefault(field, [])
    if not values.get("bmi"):
        bmi = calculate_bmi(values.get("weight"), values.get("height"))
        if bmi:
            values["bmi"] = bmi
    values["patient_name"] = (values.get("patient_name") or "").strip()
    return values


async def create_prescription(
    db: AsyncSession,
    user_id: str,
    payload: PrescriptionCreate,
    prescription_id: Optional[str] = None,
    **extra,
) -> Prescription:
    """Create a prescription together with its medicine lines."""
    prescription_id = prescription_id or new_id()

    db_prescription = Prescription(
        id=prescription_id,
        user_id=user_id,
        **prescription_values(payload),
        **extra,
    )
    db_prescription.medicines = build_medicines(prescription_id, payload.medicines)

    db.add(db_prescription)
    await db.commit()
    await db.refresh(db_prescription)

    logger.info(
        f"✅ Prescription created: {db_prescription.id} "
        f"({len(db_prescription.medicines)} medicines)"
    )
    return db_prescription
