"""Patient data models."""

from typing import Literal, get_args

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

Gender = Literal["male", "female", "other"]

GENDERS: tuple[str, ...] = get_args(Gender)


class Patient(BaseModel):
    """Patient record as returned by the patients API.

    The service is Mongo-backed, so identifiers arrive as ``_id`` and the
    remaining keys are camelCase. ``critical_condition`` is computed server-side.
    Field constraints are the service's to enforce; a record is shown as sent,
    e.g. with a capitalized gender or without an identifier when fetched by id.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = Field(default=None, validation_alias=AliasChoices("_id", "id"))
    name: str
    age: int
    gender: str
    address: str | None = None
    phone_number: str | None = Field(default=None, alias="phoneNumber")
    medical_history: list[str] = Field(default_factory=list, alias="medicalHistory")
    critical_condition: bool = Field(default=False, alias="criticalCondition")


class PatientPayload(BaseModel):
    """Request body for creating or updating a patient."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0)
    gender: Gender
    address: str = ""
    phone_number: str = Field(default="", alias="phoneNumber")
    medical_history: list[str] = Field(default_factory=list, alias="medicalHistory")

    def to_request(self) -> dict:
        """Serialize with the wire (camelCase) field names."""
        return self.model_dump(by_alias=True)
