# app/system_models/medicine_model/medicine_model.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.database.connection import Base
from app.helpers.time import utcnow


class Medicine(Base):
    __tablename__ = "medicines"

    id = Column(String, primary_key=True)
    prescription_id = Column(
        String, ForeignKey("prescriptions.id", ondelete="CASCADE"), nullable=False, index=True
    )

    position = Column(Integer, default=0)  # line order on the prescription

    medicine = Column(String, nullable=False)
    dosage = Column(String, nullable=False)
    dosage_persian = Column(String, default="")
    form = Column(String, default="tablet")
    form_persian = Column(String, default="")
    frequency = Column(String, default="")
    frequency_persian = Column(String, default="")
    duration = Column(String, default="")
    duration_persian = Column(String, default="")
    route = Column(String, default="oral")
    timing = Column(String, default="after_meal")
    with_food = Column(Boolean, default=False)

    instructions = Column(Text, default="")
    instructions_persian = Column(Text, default="")
    notes = Column(Text, default="")

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    prescription = relationship("Prescription", back_populates="medicines")

    def __repr__(self):
        return f"<Medicine {self.id}: {self.medicine} {self.dosage}>"
