# app/helpers/calculations.py
"""
Anthropometric helpers used by the prescription form and the PDF.
All inputs arrive as free-text strings; invalid input yields "".
"""
from typing import Dict, Optional

MALE_VALUES = {"male", "m", "مرد"}


def _to_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def _is_male(gender: Optional[str]) -> bool:
    return (gender or "").strip().lower() in MALE_VALUES


def calculate_bmi(weight: Optional[str], height: Optional[str]) -> str:
    """BMI = weight (kg) / height (m)^2, one decimal place."""
    weight_kg = _to_float(weight)
    height_cm = _to_float(height)
    if not weight_kg or not height_cm or weight_kg <= 0 or height_cm <= 0:
        return ""

    height_m = height_cm / 100
    return f"{weight_kg / (height_m * height_m):.1f}"


def get_bmi_category(bmi_value: Optional[str]) -> Dict[str, str]:
    """Adult BMI category with a short interpretation."""
    bmi = _to_float(bmi_value)
    if bmi is None:
        return {"category": "Invalid", "description": "Please enter valid weight and height"}

    if bmi < 18.5:
        return {"category": "Underweight", "description": "Consider nutritional support"}
    if bmi < 25:
        return {"category": "Normal", "description": "Healthy weight range"}
    if bmi < 30:
        return {"category": "Overweight", "description": "Consider lifestyle changes"}
    return {"category": "Obese", "description": "Medical evaluation recommended"}


def calculate_ideal_body_weight(height_cm: Optional[str], gender: Optional[str] = None) -> str:
    """
    Ideal body weight, Hamwi method.
    Male: 48 kg + 2.7 kg per inch over 5 feet
    Female (default): 45.5 kg + 2.2 kg per inch over 5 feet
    """
    height = _to_float(height_cm)
    if not height or height <= 0:
        return ""

    inches_over_five_feet = height / 2.54 - 60
    if _is_male(gender):
        ibw = 48 + 2.7 * inches_over_five_feet
    else:
        ibw = 45.5 + 2.2 * inches_over_five_feet
    return f"{ibw:.1f}"


def calculate_bmr(
    weight: Optional[str],
    height: Optional[str],
    age: Optional[str],
    gender: Optional[str] = None,
) -> str:
    """Basal metabolic rate, Mifflin-St Jeor equation (kcal/day)."""
    weight_kg = _to_float(weight)
    height_cm = _to_float(height)
    age_years = _to_float(age)
    if weight_kg is None or height_cm is None or age_years is None:
        return ""

    base = 10 * weight_kg + 6.25 * height_cm - 5 * age_years
    bmr = base + 5 if _is_male(gender) else base - 161
    return f"{bmr:.0f}"
