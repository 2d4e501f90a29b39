"""Data models shared by the client, services and screens."""

from wellcare.models.history import PatientHistory
from wellcare.models.medical_test import TEST_TYPES, MedicalTest, TestPayload, TestType
from wellcare.models.patient import GENDERS, Gender, Patient, PatientPayload

__all__ = [
    "GENDERS",
    "TEST_TYPES",
    "Gender",
    "MedicalTest",
    "Patient",
    "PatientHistory",
    "PatientPayload",
    "TestPayload",
    "TestType",
]
