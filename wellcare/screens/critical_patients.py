"""Patients the service flags as critical."""

from typing import Any

from wellcare.clients.errors import ApiError
from wellcare.models.patient import Patient
from wellcare.screens.base import Screen, ScreenStatus
from wellcare.screens.formatting import PatientRow, patient_row
from wellcare.utils.logging import get_logger

logger = get_logger(__name__)


class CriticalPatientsScreen(Screen):
    """Fetched once on mount; the list does not refresh on focus."""

    route_name = "CriticalPatients"
    empty_message = "No critical patients"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.patients: list[Patient] = []

    @property
    def rows(self) -> list[PatientRow]:
        return [patient_row(patient) for patient in self.patients]

    async def on_mount(self) -> None:
        await super().on_mount()
        await self.refresh()

    async def refresh(self) -> None:
        self.status = ScreenStatus.LOADING
        try:
            self.patients = await self.service.list_critical_patients()
            self.status = ScreenStatus.LOADED
        except ApiError as e:
            logger.error(f"Error fetching critical patients: {e}", exc_info=True)
            self.status = ScreenStatus.ERROR
            self.show_error("Failed to fetch critical patients")

    async def select_patient(self, patient_id: str) -> None:
        await self.navigator.navigate("PatientDetails", patientId=patient_id)
