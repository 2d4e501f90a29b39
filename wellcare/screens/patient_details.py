"""Single patient with their most recent tests."""

import asyncio
from typing import Any

from wellcare.clients.errors import ApiError
from wellcare.models.medical_test import MedicalTest
from wellcare.models.patient import Patient
from wellcare.screens.base import Screen, ScreenStatus
from wellcare.screens.formatting import MedicalTestRow, medical_test_row, patient_header
from wellcare.utils.logging import get_logger

logger = get_logger(__name__)

RECENT_TEST_LIMIT = 5


class PatientDetailsScreen(Screen):
    """Patient profile plus the latest tests.

    Data is refetched on every focus. A ``refresh`` param sent by a child
    screen forces a refetch when this screen is already focused and is
    cleared once consumed.
    """

    route_name = "PatientDetails"
    empty_message = "No tests available"
    critical_label = "Critical Condition"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.patient: Patient | None = None
        self.tests: list[MedicalTest] = []
        self.status = ScreenStatus.LOADING

    @property
    def patient_id(self) -> str:
        return self.params["patientId"]

    @property
    def header(self) -> list[str]:
        return patient_header(self.patient) if self.patient else []

    @property
    def recent_tests(self) -> list[MedicalTest]:
        # Service returns tests newest first
        return self.tests[:RECENT_TEST_LIMIT]

    @property
    def test_rows(self) -> list[MedicalTestRow]:
        return [medical_test_row(test) for test in self.recent_tests]

    async def on_focus(self) -> None:
        self.navigator.set_params(self, refresh=None)
        await self.refresh()

    async def on_params_changed(self, params: dict[str, Any]) -> None:
        if params.get("refresh"):
            self.navigator.set_params(self, refresh=None)
            await self.refresh()

    async def refresh(self) -> None:
        await asyncio.gather(self.fetch_patient(), self.fetch_tests())

    async def fetch_patient(self) -> None:
        try:
            self.patient = await self.service.get_patient(self.patient_id)
            self.status = ScreenStatus.LOADED
        except ApiError as e:
            logger.error(f"Error fetching patient details: {e}", exc_info=True)
            self.status = ScreenStatus.ERROR
            self.show_error("Failed to fetch patient details")

    async def fetch_tests(self) -> None:
        try:
            self.tests = await self.service.list_tests(self.patient_id)
        except ApiError as e:
            logger.error(f"Error fetching patient tests: {e}", exc_info=True)
            self.show_error("Failed to fetch patient tests")

    async def add_test(self) -> None:
        await self.navigator.navigate("AddTest", patientId=self.patient_id)

    async def view_history(self) -> None:
        await self.navigator.navigate("PatientHistory", patientId=self.patient_id)

    async def edit_patient(self) -> None:
        await self.navigator.navigate("UpdateDeletePatient", patientId=self.patient_id)

    async def select_test(self, test_id: str) -> None:
        await self.navigator.navigate("UpdateDeleteTest", patientId=self.patient_id, testId=test_id)
