# app/ai_system/prescription_generator.py
"""
Draft Prescription Generator
Turns a free-text description into a pre-filled prescription form: the
condition with the most keyword hits becomes the diagnosis and drives the
vitals, examination, medicines and advice templates.
"""
import logging
import time
import uuid
from typing import Any, Dict, List

from app.ai_system import knowledge_base as kb
from app.helpers.time import iso_timestamp
from app.helpers.validation import validate_prescription

logger = logging.getLogger(__name__)


def _match_count(condition: kb.ConditionProfile, symptoms: str) -> int:
    return sum(1 for keyword in condition.keywords if keyword in symptoms)


def select_condition(symptoms: str):
    """
    Returns (primary condition, all matched conditions).
    On equal match counts the later condition wins.
    """
    matched = [c for c in kb.CONDITIONS if _match_count(c, symptoms) > 0]
    if not matched:
        return kb.DEFAULT_CONDITION, matched

    primary = matched[0]
    for candidate in matched[1:]:
        if not _match_count(primary, symptoms) > _match_count(candidate, symptoms):
            primary = candidate
    return primary, matched


def chief_complaint(symptoms: str) -> str:
    for keywords, complaint in kb.CHIEF_COMPLAINT_RULES:
        if all(keyword in symptoms for keyword in keywords):
            return complaint
    return kb.DEFAULT_CHIEF_COMPLAINT


def differential_diagnosis(matched: List[kb.ConditionProfile]) -> str:
    if len(matched) > 1:
        return "، ".join(c.name for c in matched[:3])
    return kb.DEFAULT_DIFFERENTIAL


def follow_up(severity: str) -> str:
    if severity in ("moderate", "severe"):
        return kb.FOLLOW_UP_URGENT
    return kb.FOLLOW_UP_ROUTINE


def generate_medications(diagnosis: str) -> List[Dict[str, Any]]:
    entries = kb.CONDITION_MEDICATIONS.get(diagnosis) or kb.CONDITION_MEDICATIONS[kb.DEFAULT_CONDITION.name]
    return [{"id": uuid.uuid4().hex[:9], **entry} for entry in entries]


def generate_intelligent_prescription(text: str) -> Dict[str, Any]:
    """
    Build a draft prescription from free text.

    Returns a dict in the shape of PrescriptionDraft (snake_case keys).
    Patient fields are left blank for the clinician to fill in.
    """
    symptoms = text.lower()
    condition, matched = select_condition(symptoms)
    complaint = chief_complaint(symptoms)
    vitals = condition.vital_signs

    logger.info(f"🩺 Draft diagnosis: {condition.name} ({len(matched)} condition(s) matched)")

    draft = {
        "id": str(int(time.time() * 1000)),
        "patient_name": "",
        "patient_age": "",
        "patient_gender": "",
        "patient_phone": "",
        "chief_complaint": complaint,
        "history_of_present_illness": kb.HISTORY_TEMPLATE.format(chief_complaint=complaint),
        "physical_examination": kb.PHYSICAL_EXAM_FINDINGS.get(condition.name, kb.DEFAULT_PHYSICAL_EXAM),
        "diagnosis": condition.name,
        "differential_diagnosis": differential_diagnosis(matched),
        "pulse_rate": vitals.pulse_rate,
        "blood_pressure": vitals.blood_pressure,
        "temperature": vitals.temperature,
        "respiratory_rate": vitals.respiratory_rate,
        "oxygen_saturation": vitals.oxygen_saturation,
        "prescription": generate_medications(condition.name),
        "instructions": kb.CARE_INSTRUCTIONS.get(condition.name, kb.DEFAULT_CARE_INSTRUCTIONS),
        "follow_up": follow_up(condition.severity),
        "restrictions": kb.ACTIVITY_RESTRICTIONS.get(condition.name, kb.DEFAULT_ACTIVITY_RESTRICTIONS),
        "allergies": [],
        "current_medications": [],
        "past_medical_history": "",
        "doctor_name": kb.DRAFT_DOCTOR_NAME,
        "clinic_name": kb.DRAFT_CLINIC_NAME,
        "created_at": iso_timestamp(),
    }

    check = validate_prescription(draft)
    if not check.is_valid:
        logger.warning(f"⚠️  Draft prescription incomplete: {check.message}")

    return draft
