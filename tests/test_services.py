"""Tests for the typed patient service against the fake backend."""

import httpx
import pytest

from wellcare.clients.api import ApiClient, ApiConfig
from wellcare.clients.errors import HTTPError, InvalidResponseError
from wellcare.models import PatientPayload, TestPayload
from wellcare.screens import (
    CriticalPatientsScreen,
    PatientHistoryScreen,
    ScreenStatus,
    UpdateDeletePatientScreen,
    UpdateDeleteTestScreen,
)
from wellcare.services.patients import RestPatientService


@pytest.mark.asyncio
class TestPatientRoutes:
    """Tests for the patient routes."""

    async def test_list_patients(self, service):
        """Test fetching the full collection."""
        patients = await service.list_patients()
        assert [patient.name for patient in patients] == ["John Smith", "Jane Doe", "Maria Johnson"]

    async def test_list_critical_patients(self, service):
        """Test that the critical subset comes from the service."""
        patients = await service.list_critical_patients()
        assert [patient.id for patient in patients] == ["p1", "p3"]
        assert all(patient.critical_condition for patient in patients)

    async def test_get_patient(self, service):
        """Test fetching a single patient."""
        patient = await service.get_patient("p2")
        assert patient.name == "Jane Doe"
        assert patient.address == "8 Queen Avenue"

    async def test_get_missing_patient(self, service):
        """Test that an unknown id surfaces as HTTPError."""
        with pytest.raises(HTTPError) as exc_info:
            await service.get_patient("nope")
        assert exc_info.value.status_code == 404

    async def test_create_patient(self, service, backend):
        """Test that the service assigns the identifier."""
        payload = PatientPayload(name="Ali Khan", age=30, gender="male", medical_history=["Allergy"])
        created = await service.create_patient(payload)

        assert created.id.startswith("p")
        assert created.name == "Ali Khan"
        assert created.medical_history == ["Allergy"]
        assert backend.state.store.patients[created.id]["phoneNumber"] == ""

    async def test_update_patient(self, service):
        """Test replacing a patient's fields."""
        payload = PatientPayload(name="Jane Doe", age=46, gender="female", address="9 New Road")
        updated = await service.update_patient("p2", payload)

        assert updated.age == 46
        assert updated.address == "9 New Road"

    async def test_delete_patient(self, service, backend):
        """Test that delete returns nothing and removes the record."""
        assert await service.delete_patient("p2") is None
        assert "p2" not in backend.state.store.patients


@pytest.mark.asyncio
class TestTestRoutes:
    """Tests for the routes scoped under a patient."""

    async def test_list_tests_newest_first(self, service):
        """Test the server ordering is preserved."""
        tests = await service.list_tests("p1")
        assert [test.id for test in tests] == ["t2", "t1"]

    async def test_history(self, service):
        """Test fetching the aggregate in one call."""
        history = await service.get_history("p1")
        assert history.patient.name == "John Smith"
        assert [test.type for test in history.tests] == ["Heartbeat Rate", "Blood Pressure"]

    async def test_create_and_get_test(self, service):
        """Test recording a reading and reading it back."""
        created = await service.create_test("p2", TestPayload(type="Blood Oxygen Level", value="96"))
        fetched = await service.get_test("p2", created.id)

        assert fetched.patient_id == "p2"
        assert fetched.value == "96"
        assert fetched.recorded_at is not None

    async def test_update_test(self, service):
        """Test replacing a test's type and value."""
        updated = await service.update_test("p1", "t1", TestPayload(type="Blood Pressure", value="130/85"))
        assert updated.value == "130/85"

    async def test_delete_test(self, service, backend):
        """Test removing a test."""
        await service.delete_test("p1", "t1")
        assert "t1" not in backend.state.store.tests


@pytest.mark.asyncio
class TestMalformedResponses:
    """Tests for bodies that do not match the models."""

    async def test_malformed_patient(self):
        """Test that a body missing required keys raises InvalidResponseError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"name": "No Id"})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = RestPatientService(ApiClient(ApiConfig(base_url="http://host/api"), client=client))
            with pytest.raises(InvalidResponseError, match="Malformed patient"):
                await service.get_patient("p1")

    async def test_list_body_not_a_list(self):
        """Test that an object where a list is expected is rejected."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"patients": []})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = RestPatientService(ApiClient(ApiConfig(base_url="http://host/api"), client=client))
            with pytest.raises(InvalidResponseError):
                await service.list_patients()


def serve_json(routes: dict[str, object]) -> httpx.AsyncClient:
    """httpx client answering GET paths with fixed JSON bodies."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=routes[request.url.path])

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
class TestRecordsAsServed:
    """Tests that records are shown as the service sends them, without client-side constraints."""

    async def test_critical_patients_with_capitalized_gender(self, mock_navigator):
        """Test that both critical records render with their age and gender."""
        body = [
            {"_id": "1", "name": "John Doe", "age": 65, "gender": "Male"},
            {"_id": "2", "name": "Jane Smith", "age": 72, "gender": "Female"},
        ]
        async with serve_json({"/api/patients/critical": body}) as client:
            service = RestPatientService(ApiClient(ApiConfig(base_url="http://host/api"), client=client))
            screen = CriticalPatientsScreen(mock_navigator, service)
            await screen.on_mount()

        assert screen.status == ScreenStatus.LOADED
        assert screen.alerts == []
        assert [(row.name, row.details) for row in screen.rows] == [
            ("John Doe", "65 years old • Male"),
            ("Jane Smith", "72 years old • Female"),
        ]

    async def test_history_patient_without_id(self, mock_navigator):
        """Test the history screen when the patient body has no identifier."""
        body = {
            "patient": {
                "name": "John Doe",
                "age": 30,
                "gender": "Male",
                "address": "123 Main St",
                "phoneNumber": "555-1234",
            },
            "tests": [{"_id": "1", "type": "Blood Pressure", "value": "120/80", "date": "2024-11-23T00:00:00.000Z"}],
        }
        async with serve_json({"/api/patients/123/history": body}) as client:
            service = RestPatientService(ApiClient(ApiConfig(base_url="http://host/api"), client=client))
            screen = PatientHistoryScreen(mock_navigator, service, {"patientId": "123"})
            await screen.on_mount()

        assert screen.status == ScreenStatus.LOADED
        assert screen.header == ["John Doe", "30 years old • Male", "123 Main St", "555-1234"]
        assert [(row.type, row.value) for row in screen.test_rows] == [("Blood Pressure", "120/80")]
        assert screen.history.patient.id == "123"

    async def test_update_test_form_from_bare_body(self, mock_navigator):
        """Test that a test body with only type and value pre-populates the form."""
        body = {"type": "Blood Pressure", "value": "120/80"}
        async with serve_json({"/api/patients/123/tests/456": body}) as client:
            service = RestPatientService(ApiClient(ApiConfig(base_url="http://host/api"), client=client))
            screen = UpdateDeleteTestScreen(mock_navigator, service, {"patientId": "123", "testId": "456"})
            await screen.on_mount()

        assert screen.status == ScreenStatus.LOADED
        assert screen.form.type == "Blood Pressure"
        assert screen.form.value == "120/80"

    async def test_get_fills_missing_ids(self):
        """Test that records fetched by id take the id from the route."""
        routes = {
            "/api/patients/p9": {"name": "John Doe", "age": 30, "gender": "Male"},
            "/api/patients/p9/tests/t9": {"type": "Heartbeat Rate", "value": 72},
        }
        async with serve_json(routes) as client:
            service = RestPatientService(ApiClient(ApiConfig(base_url="http://host/api"), client=client))
            patient = await service.get_patient("p9")
            test = await service.get_test("p9", "t9")

        assert patient.id == "p9"
        assert (test.id, test.patient_id, test.value) == ("t9", "p9", "72")

    async def test_update_form_maps_capitalized_gender(self, mock_navigator):
        """Test that a stored "Male" pre-selects the male option so the form can be saved."""
        body = {"_id": "1", "name": "John Doe", "age": 65, "gender": "Male"}
        async with serve_json({"/api/patients/1": body}) as client:
            service = RestPatientService(ApiClient(ApiConfig(base_url="http://host/api"), client=client))
            screen = UpdateDeletePatientScreen(mock_navigator, service, {"patientId": "1"})
            await screen.on_mount()

        assert screen.form.gender == "male"
        assert screen.form.to_payload().gender == "male"
