"""Form state and required-field validation for patient and test screens."""

from dataclasses import dataclass

from pydantic import ValidationError

from wellcare.models.medical_test import TEST_TYPES, MedicalTest, TestPayload
from wellcare.models.patient import GENDERS, Patient, PatientPayload

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields."
ALL_FIELDS_MESSAGE = "Please fill in all fields."
INVALID_AGE_MESSAGE = "Age must be a whole number."


class FormValidationError(ValueError):
    """A form was submitted with missing or unusable input.

    Raised before any remote call is made.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def split_medical_history(text: str) -> list[str]:
    """Turn comma separated input into a clean list, dropping empty items."""
    return [item.strip() for item in text.split(",") if item.strip()]


def join_medical_history(items: list[str]) -> str:
    return ", ".join(items)


def _gender_option(gender: str) -> str:
    """Match a stored gender such as "Male" to its picker option."""
    return gender.lower() if gender.lower() in GENDERS else gender


def _parse_age(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError as e:
        raise FormValidationError(INVALID_AGE_MESSAGE) from e


@dataclass
class PatientForm:
    """Text inputs of the add/update patient screens."""

    name: str = ""
    age: str = ""
    gender: str = ""
    address: str = ""
    phone_number: str = ""
    medical_history: str = ""

    @classmethod
    def from_patient(cls, patient: Patient) -> "PatientForm":
        """Pre-populate the form from a fetched patient."""
        return cls(
            name=patient.name,
            age=str(patient.age),
            gender=_gender_option(patient.gender),
            address=patient.address or "",
            phone_number=patient.phone_number or "",
            medical_history=join_medical_history(patient.medical_history),
        )

    def validate(self) -> None:
        """Check required fields.

        Raises:
            FormValidationError: If name, age or gender is blank, or age is not a number
        """
        if not self.name.strip() or not self.age.strip() or not self.gender:
            raise FormValidationError(REQUIRED_FIELDS_MESSAGE)

        if not self.age.strip().isdecimal():
            raise FormValidationError(INVALID_AGE_MESSAGE)

        if self.gender not in GENDERS:
            raise FormValidationError(REQUIRED_FIELDS_MESSAGE)

    def to_payload(self) -> PatientPayload:
        """Validate and build the request body."""
        self.validate()
        try:
            return PatientPayload(
                name=self.name.strip(),
                age=_parse_age(self.age),
                gender=self.gender,
                address=self.address.strip(),
                phone_number=self.phone_number.strip(),
                medical_history=split_medical_history(self.medical_history),
            )
        except ValidationError as e:
            raise FormValidationError(REQUIRED_FIELDS_MESSAGE) from e


@dataclass
class TestForm:
    """Inputs of the add/update test screens."""

    __test__ = False  # keep pytest from collecting this as a test class

    type: str = ""
    value: str = ""

    @classmethod
    def from_test(cls, test: MedicalTest) -> "TestForm":
        return cls(type=test.type, value=test.value)

    def validate(self) -> None:
        """Both the test type and a value are required."""
        if not self.type or not self.value.strip() or self.type not in TEST_TYPES:
            raise FormValidationError(ALL_FIELDS_MESSAGE)

    def to_payload(self) -> TestPayload:
        self.validate()
        return TestPayload(type=self.type, value=self.value.strip())
