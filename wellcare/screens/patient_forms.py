"""Add, update and delete patient screens."""

from dataclasses import fields
from typing import Any

from wellcare.clients.errors import ApiError
from wellcare.models.patient import GENDERS
from wellcare.screens.base import Screen, ScreenStatus
from wellcare.screens.forms import FormValidationError, PatientForm
from wellcare.utils.logging import get_logger

logger = get_logger(__name__)

PATIENT_FIELDS = tuple(f.name for f in fields(PatientForm))


class PatientFormScreen(Screen):
    """Shared form handling for the patient screens."""

    gender_options = GENDERS

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.form = PatientForm()

    def set_field(self, name: str, value: str) -> None:
        if name not in PATIENT_FIELDS:
            raise KeyError(f"Unknown patient field: {name}")
        setattr(self.form, name, value)


class AddPatientScreen(PatientFormScreen):
    """Tab for registering a new patient."""

    route_name = "AddPatient"

    async def submit(self) -> None:
        """Validate, create the patient and return to the refreshed list."""
        if self.is_submitting:
            return

        try:
            payload = self.form.to_payload()
        except FormValidationError as e:
            self.show_error(e.message)
            return

        self.status = ScreenStatus.SUBMITTING
        try:
            await self.service.create_patient(payload)
        except ApiError as e:
            logger.error(f"Error adding patient: {e}", exc_info=True)
            self.show_error("Failed to add patient")
            return
        finally:
            self.status = ScreenStatus.IDLE

        self.show_alert("Success", "Patient added successfully")
        self.form = PatientForm()
        await self.navigator.navigate("PatientsList", refresh=True)


class UpdateDeletePatientScreen(PatientFormScreen):
    """Edit or remove an existing patient."""

    route_name = "UpdateDeletePatient"

    @property
    def patient_id(self) -> str:
        return self.params["patientId"]

    async def on_mount(self) -> None:
        await super().on_mount()
        await self.fetch_patient()

    async def fetch_patient(self) -> None:
        self.status = ScreenStatus.LOADING
        try:
            patient = await self.service.get_patient(self.patient_id)
        except ApiError as e:
            logger.error(f"Error fetching patient details: {e}", exc_info=True)
            self.status = ScreenStatus.ERROR
            self.show_error("Failed to fetch patient details")
            return

        self.form = PatientForm.from_patient(patient)
        self.status = ScreenStatus.LOADED

    async def submit(self) -> None:
        """Validate and save changes, then go back."""
        if self.is_submitting:
            return

        try:
            payload = self.form.to_payload()
        except FormValidationError as e:
            self.show_error(e.message)
            return

        self.status = ScreenStatus.SUBMITTING
        try:
            await self.service.update_patient(self.patient_id, payload)
        except ApiError as e:
            logger.error(f"Error updating patient: {e}", exc_info=True)
            self.show_error("Failed to update patient")
            return
        finally:
            self.status = ScreenStatus.IDLE

        self.show_alert("Success", "Patient updated successfully")
        await self.navigator.go_back()

    def request_delete(self) -> None:
        """Ask for confirmation; the delete call only fires from the dialog."""
        if self.is_submitting or self.has_pending_alert("Confirm Deletion"):
            return
        self.confirm(
            "Confirm Deletion",
            "Are you sure you want to delete this patient? This action cannot be undone.",
            "Delete",
            self._delete,
        )

    async def _delete(self) -> None:
        if self.is_submitting:
            return
        self.status = ScreenStatus.SUBMITTING
        try:
            await self.service.delete_patient(self.patient_id)
        except ApiError as e:
            logger.error(f"Error deleting patient: {e}", exc_info=True)
            self.show_error("Failed to delete patient")
            return
        finally:
            self.status = ScreenStatus.IDLE

        self.show_alert("Success", "Patient deleted successfully")
        await self.navigator.navigate("PatientsList", refresh=True)
