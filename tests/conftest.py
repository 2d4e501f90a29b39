"""Shared fixtures: sample records, mocked collaborators and a fake backend."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
import pytest_asyncio
from fake_backend import create_fake_backend, seed_store
from fastapi import FastAPI

from wellcare.clients.api import ApiClient, ApiConfig
from wellcare.models import MedicalTest, Patient, PatientHistory
from wellcare.navigation.navigator import Navigator
from wellcare.services.patients import RestPatientService

TEST_BASE_URL = "http://testserver/api"


def make_patient(**overrides) -> Patient:
    data = {
        "_id": "p1",
        "name": "John Smith",
        "age": 67,
        "gender": "male",
        "address": "12 King Street",
        "phoneNumber": "555-0101",
        "medicalHistory": ["Hypertension", "Type 2 Diabetes"],
        "criticalCondition": True,
    }
    data.update(overrides)
    return Patient.model_validate(data)


def make_test(**overrides) -> MedicalTest:
    data = {
        "_id": "t1",
        "patient": "p1",
        "type": "Blood Pressure",
        "value": "120/80",
        "date": "2024-10-23T09:00:00Z",
    }
    data.update(overrides)
    return MedicalTest.model_validate(data)


@pytest.fixture
def patient() -> Patient:
    return make_patient()


@pytest.fixture
def medical_test() -> MedicalTest:
    return make_test()


@pytest.fixture
def mock_service(patient, medical_test):
    """PatientService double with canned happy-path answers."""
    service = AsyncMock(spec=RestPatientService)
    service.list_patients.return_value = [
        patient,
        make_patient(_id="p2", name="Jane Doe", age=45, gender="female", criticalCondition=False),
    ]
    service.list_critical_patients.return_value = [patient]
    service.get_patient.return_value = patient
    service.list_tests.return_value = [medical_test]
    service.get_history.return_value = PatientHistory(patient=patient, tests=[medical_test])
    service.get_test.return_value = medical_test
    service.create_patient.return_value = patient
    service.update_patient.return_value = patient
    service.create_test.return_value = medical_test
    service.update_test.return_value = medical_test
    service.delete_patient.return_value = None
    service.delete_test.return_value = None
    return service


@pytest.fixture
def mock_navigator():
    """Navigator double that still applies set_params to the screen."""
    navigator = Mock(spec=Navigator)
    navigator.navigate = AsyncMock()
    navigator.go_back = AsyncMock(return_value=True)
    navigator.set_params = Mock(side_effect=lambda screen, **params: Navigator._merge_params(screen, params))
    return navigator


@pytest.fixture
def backend() -> FastAPI:
    return create_fake_backend(seed_store())


@pytest_asyncio.fixture
async def api(backend) -> AsyncGenerator[ApiClient, None]:
    """ApiClient talking to the fake backend over ASGI."""
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=backend), base_url="http://testserver") as client:
        yield ApiClient(ApiConfig(base_url=TEST_BASE_URL), client=client)


@pytest.fixture
def service(api) -> RestPatientService:
    return RestPatientService(api)
