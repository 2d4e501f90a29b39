"""Add, update and delete test screens, scoped under a patient."""

from typing import Any

from wellcare.clients.errors import ApiError
from wellcare.models.medical_test import TEST_TYPES
from wellcare.screens.base import Screen, ScreenStatus
from wellcare.screens.forms import FormValidationError, TestForm
from wellcare.utils.logging import get_logger

logger = get_logger(__name__)


class MedicalTestFormScreen(Screen):
    """Shared form handling for the test screens."""

    type_options = TEST_TYPES

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.form = TestForm()

    @property
    def patient_id(self) -> str:
        return self.params["patientId"]

    def set_type(self, test_type: str) -> None:
        self.form.type = test_type

    def set_value(self, value: str) -> None:
        self.form.value = value


class AddTestScreen(MedicalTestFormScreen):
    """Record a new vital-sign reading."""

    route_name = "AddTest"

    async def submit(self) -> None:
        """Create the test and send the details screen a refresh."""
        if self.is_submitting:
            return

        try:
            payload = self.form.to_payload()
        except FormValidationError as e:
            self.show_error(e.message)
            return

        self.status = ScreenStatus.SUBMITTING
        try:
            await self.service.create_test(self.patient_id, payload)
        except ApiError as e:
            logger.error(f"Error adding test: {e}", exc_info=True)
            self.show_error("Failed to add test")
            return
        finally:
            self.status = ScreenStatus.IDLE

        self.show_alert("Success", "Test added successfully")
        await self.navigator.navigate("PatientDetails", patientId=self.patient_id, refresh=True)


class UpdateDeleteTestScreen(MedicalTestFormScreen):
    """Edit or remove one of a patient's tests."""

    route_name = "UpdateDeleteTest"

    @property
    def test_id(self) -> str:
        return self.params["testId"]

    async def on_mount(self) -> None:
        await super().on_mount()
        await self.fetch_test()

    async def fetch_test(self) -> None:
        self.status = ScreenStatus.LOADING
        try:
            test = await self.service.get_test(self.patient_id, self.test_id)
        except ApiError as e:
            logger.error(f"Error fetching test details: {e}", exc_info=True)
            self.status = ScreenStatus.ERROR
            self.show_error("Failed to fetch test details")
            return

        self.form = TestForm.from_test(test)
        self.status = ScreenStatus.LOADED

    async def submit(self) -> None:
        if self.is_submitting:
            return

        try:
            payload = self.form.to_payload()
        except FormValidationError as e:
            self.show_error(e.message)
            return

        self.status = ScreenStatus.SUBMITTING
        try:
            await self.service.update_test(self.patient_id, self.test_id, payload)
        except ApiError as e:
            logger.error(f"Error updating test: {e}", exc_info=True)
            self.show_error("Failed to update test")
            return
        finally:
            self.status = ScreenStatus.IDLE

        self.show_alert("Success", "Test updated successfully")
        await self.navigator.go_back()

    def request_delete(self) -> None:
        """Ask for confirmation; the delete call only fires from the dialog."""
        if self.is_submitting or self.has_pending_alert("Confirm Deletion"):
            return
        self.confirm(
            "Confirm Deletion",
            "Are you sure you want to delete this test? This action cannot be undone.",
            "Delete",
            self._delete,
        )

    async def _delete(self) -> None:
        if self.is_submitting:
            return
        self.status = ScreenStatus.SUBMITTING
        try:
            await self.service.delete_test(self.patient_id, self.test_id)
        except ApiError as e:
            logger.error(f"Error deleting test: {e}", exc_info=True)
            self.show_error("Failed to delete test")
            return
        finally:
            self.status = ScreenStatus.IDLE

        self.show_alert("Success", "Test deleted successfully")
        await self.navigator.go_back()
