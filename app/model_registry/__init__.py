# app/model_registry/__init__.py


# Register all models here

# System models
from app.system_models.prescription_model.prescription_model import Prescription
from app.system_models.medicine_model.medicine_model import Medicine
