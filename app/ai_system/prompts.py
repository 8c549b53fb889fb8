# app/ai_system/prompts.py
"""Prompt templates sent to the text-generation API"""


def build_symptom_prompt(symptoms: str, patient_history: str = "") -> str:
    return f"""As a medical doctor, analyze these symptoms and provide a professional assessment in Persian:

Symptoms: {symptoms}
Medical History: {patient_history or "None provided"}

Please provide:
1. Potential diagnoses
2. Recommended examinations
3. Initial management
4. Important warnings

Response in Persian:"""


def build_analysis_prompt(symptoms: str, patient_history: str = "") -> str:
    history_line = f"Medical history: {patient_history}" if patient_history else ""
    return f"""Patient history: {symptoms}
{history_line}

Please analyze as a specialist doctor:
1. Possible diagnoses
2. Required examinations
3. Initial actions
4. Important warnings

Response should be professional and in English."""


def build_autocomplete_prompt(text: str) -> str:
    return f"Complete the medical symptom in Persian: {text}. Provide 5 short suggestions:"
