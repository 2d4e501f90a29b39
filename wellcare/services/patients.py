"""Typed access to the patients REST service."""

from typing import Any, Protocol

from pydantic import TypeAdapter, ValidationError

from wellcare.clients.api import ApiClient
from wellcare.clients.errors import InvalidResponseError
from wellcare.models.history import PatientHistory
from wellcare.models.medical_test import MedicalTest, TestPayload
from wellcare.models.patient import Patient, PatientPayload
from wellcare.utils.logging import get_logger

logger = get_logger(__name__)

_patient_list = TypeAdapter(list[Patient])
_test_list = TypeAdapter(list[MedicalTest])


class PatientService(Protocol):
    """Interface the screens use to read and mutate patients and tests."""

    async def list_patients(self) -> list[Patient]:
        """Get every patient."""
        ...

    async def list_critical_patients(self) -> list[Patient]:
        """Get the patients the service currently flags as critical."""
        ...

    async def get_patient(self, patient_id: str) -> Patient:
        """Get a single patient."""
        ...

    async def create_patient(self, payload: PatientPayload) -> Patient:
        """Create a patient; the service assigns the identifier."""
        ...

    async def update_patient(self, patient_id: str, payload: PatientPayload) -> Patient:
        """Replace a patient's editable fields."""
        ...

    async def delete_patient(self, patient_id: str) -> None:
        """Remove a patient."""
        ...

    async def list_tests(self, patient_id: str) -> list[MedicalTest]:
        """Get a patient's tests, most recent first."""
        ...

    async def get_history(self, patient_id: str) -> PatientHistory:
        """Get a patient together with every recorded test."""
        ...

    async def create_test(self, patient_id: str, payload: TestPayload) -> MedicalTest:
        """Record a new test for a patient."""
        ...

    async def get_test(self, patient_id: str, test_id: str) -> MedicalTest:
        """Get a single test."""
        ...

    async def update_test(self, patient_id: str, test_id: str, payload: TestPayload) -> MedicalTest:
        """Replace a test's type and value."""
        ...

    async def delete_test(self, patient_id: str, test_id: str) -> None:
        """Remove a test."""
        ...


class RestPatientService:
    """PatientService backed by the REST routes under ``/patients``."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def list_patients(self) -> list[Patient]:
        data = await self.api.get("/patients")
        return _parse(_patient_list, data, "patient list")

    async def list_critical_patients(self) -> list[Patient]:
        data = await self.api.get("/patients/critical")
        return _parse(_patient_list, data, "critical patient list")

    async def get_patient(self, patient_id: str) -> Patient:
        data = await self.api.get(f"/patients/{patient_id}")
        return _with_patient_id(_parse(Patient, data, "patient"), patient_id)

    async def create_patient(self, payload: PatientPayload) -> Patient:
        logger.info(f"Creating patient {payload.name!r}")
        data = await self.api.post("/patients", payload.to_request())
        return _parse(Patient, data, "created patient")

    async def update_patient(self, patient_id: str, payload: PatientPayload) -> Patient:
        logger.info(f"Updating patient {patient_id}")
        data = await self.api.put(f"/patients/{patient_id}", payload.to_request())
        return _with_patient_id(_parse(Patient, data, "updated patient"), patient_id)

    async def delete_patient(self, patient_id: str) -> None:
        logger.info(f"Deleting patient {patient_id}")
        await self.api.delete(f"/patients/{patient_id}")

    async def list_tests(self, patient_id: str) -> list[MedicalTest]:
        data = await self.api.get(f"/patients/{patient_id}/tests")
        return [_with_test_ids(test, patient_id) for test in _parse(_test_list, data, "test list")]

    async def get_history(self, patient_id: str) -> PatientHistory:
        data = await self.api.get(f"/patients/{patient_id}/history")
        history = _parse(PatientHistory, data, "patient history")
        _with_patient_id(history.patient, patient_id)
        for test in history.tests:
            _with_test_ids(test, patient_id)
        return history

    async def create_test(self, patient_id: str, payload: TestPayload) -> MedicalTest:
        logger.info(f"Adding {payload.type} test for patient {patient_id}")
        data = await self.api.post(f"/patients/{patient_id}/tests", payload.to_request())
        return _with_test_ids(_parse(MedicalTest, data, "created test"), patient_id)

    async def get_test(self, patient_id: str, test_id: str) -> MedicalTest:
        data = await self.api.get(f"/patients/{patient_id}/tests/{test_id}")
        return _with_test_ids(_parse(MedicalTest, data, "test"), patient_id, test_id)

    async def update_test(self, patient_id: str, test_id: str, payload: TestPayload) -> MedicalTest:
        logger.info(f"Updating test {test_id} for patient {patient_id}")
        data = await self.api.put(f"/patients/{patient_id}/tests/{test_id}", payload.to_request())
        return _with_test_ids(_parse(MedicalTest, data, "updated test"), patient_id, test_id)

    async def delete_test(self, patient_id: str, test_id: str) -> None:
        logger.info(f"Deleting test {test_id} for patient {patient_id}")
        await self.api.delete(f"/patients/{patient_id}/tests/{test_id}")


def _parse(target: Any, data: Any, what: str) -> Any:
    """Validate a decoded body against a model or TypeAdapter."""
    try:
        if isinstance(target, TypeAdapter):
            return target.validate_python(data)
        return target.model_validate(data)
    except ValidationError as e:
        logger.error(f"Malformed {what} in response: {e}")
        raise InvalidResponseError(f"Malformed {what} in response") from e


def _with_patient_id(patient: Patient, patient_id: str) -> Patient:
    """Fill in the identifier of a record fetched by id when the body omits it."""
    if patient.id is None:
        patient.id = patient_id
    return patient


def _with_test_ids(test: MedicalTest, patient_id: str, test_id: str | None = None) -> MedicalTest:
    if test.patient_id is None:
        test.patient_id = patient_id
    if test.id is None and test_id is not None:
        test.id = test_id
    return test
