"""Read-only full history for one patient."""

from typing import Any

from wellcare.clients.errors import ApiError
from wellcare.models.history import PatientHistory
from wellcare.screens.base import Screen, ScreenStatus
from wellcare.screens.formatting import MedicalTestRow, medical_test_row, patient_header
from wellcare.utils.logging import get_logger

logger = get_logger(__name__)


class PatientHistoryScreen(Screen):
    route_name = "PatientHistory"
    empty_message = "No tests available"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.history: PatientHistory | None = None
        self.status = ScreenStatus.LOADING

    @property
    def patient_id(self) -> str:
        return self.params["patientId"]

    @property
    def header(self) -> list[str]:
        return patient_header(self.history.patient) if self.history else []

    @property
    def test_rows(self) -> list[MedicalTestRow]:
        return [medical_test_row(test) for test in self.history.tests] if self.history else []

    async def on_mount(self) -> None:
        await super().on_mount()
        await self.fetch_history()

    async def fetch_history(self) -> None:
        self.status = ScreenStatus.LOADING
        try:
            self.history = await self.service.get_history(self.patient_id)
            self.status = ScreenStatus.LOADED
        except ApiError as e:
            logger.error(f"Error fetching patient history: {e}", exc_info=True)
            self.status = ScreenStatus.ERROR
            self.show_error("Failed to fetch patient history")
