# tests/test_helpers.py
import pytest

from app.helpers import messages
from app.helpers.calculations import (
    calculate_bmi,
    calculate_bmr,
    calculate_ideal_body_weight,
    get_bmi_category,
)
from app.helpers.validation import validate_input, validate_prescription


class TestCalculations:
    def test_bmi(self):
        assert calculate_bmi("70", "175") == "22.9"
        assert calculate_bmi(" 70 ", "175") == "22.9"

    @pytest.mark.parametrize("weight, height", [("", "175"), ("70", ""), ("abc", "175"), ("70", "0"), (None, None)])
    def test_bmi_needs_valid_numbers(self, weight, height):
        assert calculate_bmi(weight, height) == ""

    @pytest.mark.parametrize(
        "bmi, category",
        [("17", "Underweight"), ("22.9", "Normal"), ("27", "Overweight"), ("31", "Obese"), ("x", "Invalid")],
    )
    def test_bmi_category(self, bmi, category):
        assert get_bmi_category(bmi)["category"] == category

    def test_ideal_body_weight(self):
        assert calculate_ideal_body_weight("152.4", "male") == "48.0"
        assert calculate_ideal_body_weight("152.4", "مرد") == "48.0"
        assert calculate_ideal_body_weight("152.4", "female") == "45.5"
        assert calculate_ideal_body_weight("") == ""

    def test_bmr(self):
        assert calculate_bmr("70", "175", "30", "male") == "1649"
        assert calculate_bmr("70", "175", "30", "female") == "1483"
        assert calculate_bmr("70", "175", "") == ""


class TestValidation:
    def test_empty_input(self):
        result = validate_input("   ")
        assert not result.is_valid
        assert result.message == messages.INPUT_EMPTY

    def test_short_input(self):
        result = validate_input("abc")
        assert not result.is_valid
        assert result.message == messages.INPUT_TOO_SHORT

    def test_valid_input(self):
        assert validate_input("سردرد و تب").is_valid

    def test_complete_draft(self):
        draft = {
            "diagnosis": "Flu",
            "prescription": [{"medicine": "Paracetamol", "dosage": "500mg", "frequency": "TID", "duration": "3d"}],
        }
        assert validate_prescription(draft).is_valid

    def test_draft_without_medicines(self):
        result = validate_prescription({"diagnosis": "Flu"})

        assert not result.is_valid
        assert result.message == messages.MISSING_FIELDS.format(fields="prescription")

    def test_incomplete_medicine_line(self):
        draft = {"diagnosis": "Flu", "prescription": [{"medicine": "Paracetamol", "dosage": "500mg"}]}
        result = validate_prescription(draft)

        assert not result.is_valid
        assert result.message == messages.INCOMPLETE_MEDICINE.format(fields="frequency, duration")
