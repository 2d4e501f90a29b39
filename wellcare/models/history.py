"""Patient history aggregate."""

from pydantic import BaseModel, Field

from wellcare.models.medical_test import MedicalTest
from wellcare.models.patient import Patient


class PatientHistory(BaseModel):
    """Read-only view of a patient together with every recorded test."""

    patient: Patient
    tests: list[MedicalTest] = Field(default_factory=list)
