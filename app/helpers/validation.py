# app/helpers/validation.py
from dataclasses import dataclass
from typing import Any, Dict

from app.helpers import messages


@dataclass
class ValidationResult:
    is_valid: bool
    message: str = ""


def validate_input(text: str) -> ValidationResult:
    """Free-text symptom / prescription input must be at least 5 characters."""
    if not text or not text.strip():
        return ValidationResult(False, messages.INPUT_EMPTY)

    if len(text.strip()) < 5:
        return ValidationResult(False, messages.INPUT_TOO_SHORT)

    return ValidationResult(True)


def validate_prescription(prescription: Dict[str, Any]) -> ValidationResult:
    """Check a generated prescription draft before it is offered to the clinician."""
    required_fields = ["diagnosis", "prescription"]
    missing = [field for field in required_fields if not prescription.get(field)]
    if missing:
        return ValidationResult(False, messages.MISSING_FIELDS.format(fields=", ".join(missing)))

    medicines = prescription.get("prescription")
    if not isinstance(medicines, list) or not medicines:
        return ValidationResult(False, messages.NO_MEDICINES)

    for med in medicines:
        med_missing = [f for f in ("medicine", "dosage", "frequency", "duration") if not med.get(f)]
        if med_missing:
            return ValidationResult(
                False, messages.INCOMPLETE_MEDICINE.format(fields=", ".join(med_missing))
            )

    return ValidationResult(True)
