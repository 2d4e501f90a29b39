"""Display text shared by the list, detail and history screens."""

from dataclasses import dataclass
from datetime import datetime

from wellcare.models.medical_test import MedicalTest
from wellcare.models.patient import Patient


@dataclass
class PatientRow:
    """One line in a patient list."""

    id: str | None
    name: str
    details: str
    critical: bool


@dataclass
class MedicalTestRow:
    """One line in a test list."""

    id: str | None
    type: str
    value: str
    date: str


def age_and_gender(patient: Patient) -> str:
    return f"{patient.age} years old • {patient.gender}"


def format_date(value: datetime | None) -> str:
    """Short month/day/year date, blank when the service sent none."""
    if value is None:
        return ""
    return f"{value.month}/{value.day}/{value.year}"


def patient_row(patient: Patient) -> PatientRow:
    return PatientRow(
        id=patient.id,
        name=patient.name,
        details=age_and_gender(patient),
        critical=patient.critical_condition,
    )


def medical_test_row(test: MedicalTest) -> MedicalTestRow:
    return MedicalTestRow(id=test.id, type=test.type, value=test.value, date=format_date(test.recorded_at))


def patient_header(patient: Patient) -> list[str]:
    """Name, age/gender, address and phone lines for detail views."""
    return [
        patient.name,
        age_and_gender(patient),
        patient.address or "",
        patient.phone_number or "",
    ]
