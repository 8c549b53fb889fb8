# app/system_models/prescription_model/prescription_model.py
from sqlalchemy import JSON, Column, Date, DateTime, String, Text
from sqlalchemy.orm import relationship

from app.database.connection import Base
from app.helpers.time import today, utcnow

USER_PRESET_PREFIX = "user_"


class Prescription(Base):
    __tablename__ = "prescriptions"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)  # identity-provider subject

    # Preset metadata (only set on user presets)
    title = Column(String, nullable=True)
    category = Column(String, nullable=True)
    urgency = Column(String, nullable=True)

    # Patient information
    patient_name = Column(String, nullable=False, index=True)
    patient_age = Column(String, default="")
    patient_gender = Column(String, default="")
    patient_phone = Column(String, default="")
    patient_address = Column(String, default="")
    weight = Column(String, nullable=True)
    height = Column(String, nullable=True)
    bmi = Column(String, nullable=True)

    # Clinical narrative
    diagnosis = Column(Text, nullable=True)
    chief_complaint = Column(Text, nullable=True)
    history_of_present_illness = Column(Text, nullable=True)
    physical_examination = Column(Text, nullable=True)
    differential_diagnosis = Column(Text, nullable=True)

    # Vital signs
    pulse_rate = Column(String, nullable=True)
    heart_rate = Column(String, nullable=True)
    blood_pressure = Column(String, nullable=True)
    temperature = Column(String, nullable=True)
    respiratory_rate = Column(String, nullable=True)
    oxygen_saturation = Column(String, nullable=True)

    # Medical history
    allergies = Column(JSON, default=list)
    current_medications = Column(JSON, default=list)
    medical_exams = Column(JSON, default=list)
    past_medical_history = Column(Text, nullable=True)
    family_history = Column(Text, nullable=True)
    social_history = Column(Text, nullable=True)
    exam_notes = Column(Text, nullable=True)

    # Advice
    instructions = Column(Text, nullable=True)
    follow_up = Column(Text, nullable=True)
    restrictions = Column(Text, nullable=True)

    # Doctor / clinic
    doctor_name = Column(String, nullable=True)
    doctor_license_number = Column(String, nullable=True)
    clinic_name = Column(String, nullable=True)
    clinic_address = Column(String, nullable=True)
    doctor_fee = Column(String, nullable=True)

    # Metadata
    prescription_date = Column(Date, default=today)
    prescription_number = Column(String, nullable=True)
    source = Column(String, nullable=True)
    status = Column(String, default="active")
    ai_confidence = Column(String, nullable=True)
    ai_model_used = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    medicines = relationship(
        "Medicine",
        back_populates="prescription",
        cascade="all, delete-orphan",
        order_by="Medicine.position",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Prescription {self.id}: {self.patient_name}>"
