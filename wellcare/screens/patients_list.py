"""All-patients list with name search."""

from typing import Any

from wellcare.clients.errors import ApiError
from wellcare.models.patient import Patient
from wellcare.screens.base import Screen, ScreenStatus
from wellcare.screens.formatting import PatientRow, patient_row
from wellcare.utils.logging import get_logger

logger = get_logger(__name__)


def filter_patients(patients: list[Patient], query: str) -> list[Patient]:
    """Case-insensitive substring match on the patient's name."""
    needle = query.lower()
    return [patient for patient in patients if needle in patient.name.lower()]


class PatientsListScreen(Screen):
    """Lists every patient; refetches each time the screen gains focus."""

    route_name = "PatientsList"

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.patients: list[Patient] = []
        self.search_query = ""

    @property
    def filtered_patients(self) -> list[Patient]:
        return filter_patients(self.patients, self.search_query)

    @property
    def rows(self) -> list[PatientRow]:
        return [patient_row(patient) for patient in self.filtered_patients]

    def set_search_query(self, query: str) -> None:
        self.search_query = query

    async def on_focus(self) -> None:
        self.params.pop("refresh", None)
        await self.fetch_patients()

    async def on_params_changed(self, params: dict[str, Any]) -> None:
        if self.params.pop("refresh", None):
            await self.fetch_patients()

    async def fetch_patients(self) -> None:
        self.status = ScreenStatus.LOADING
        try:
            self.patients = await self.service.list_patients()
            self.status = ScreenStatus.LOADED
        except ApiError as e:
            logger.error(f"Error fetching patients: {e}", exc_info=True)
            self.status = ScreenStatus.ERROR
            self.show_error("Failed to fetch patients")

    async def select_patient(self, patient_id: str) -> None:
        await self.navigator.navigate("PatientDetails", patientId=patient_id)
