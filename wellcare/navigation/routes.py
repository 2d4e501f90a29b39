"""The app's navigation graph: one stack with a nested tab group."""

from wellcare.navigation.navigator import Navigator, RouteDefinition, TabGroupDefinition
from wellcare.screens import (
    AddPatientScreen,
    AddTestScreen,
    CriticalPatientsScreen,
    PatientDetailsScreen,
    PatientHistoryScreen,
    PatientsListScreen,
    SettingsScreen,
    UpdateDeletePatientScreen,
    UpdateDeleteTestScreen,
    WelcomeScreen,
)
from wellcare.services.patients import PatientService

MAIN_TABS = TabGroupDefinition(
    name="Main",
    tabs=[
        RouteDefinition("PatientsList", PatientsListScreen, "Patients", header_shown=False),
        RouteDefinition("AddPatient", AddPatientScreen, "Add Patient", header_shown=False),
        RouteDefinition("CriticalPatients", CriticalPatientsScreen, "Critical", header_shown=False),
        RouteDefinition("Settings", SettingsScreen, "Settings", header_shown=False),
    ],
    initial_tab="PatientsList",
)

ROUTES: list[RouteDefinition | TabGroupDefinition] = [
    RouteDefinition("Welcome", WelcomeScreen, "Welcome", header_shown=False),
    MAIN_TABS,
    RouteDefinition("PatientDetails", PatientDetailsScreen, "Patient Details"),
    RouteDefinition("AddTest", AddTestScreen, "Add Test"),
    RouteDefinition("PatientHistory", PatientHistoryScreen, "Patient History"),
    RouteDefinition("UpdateDeletePatient", UpdateDeletePatientScreen, "Update Patient"),
    RouteDefinition("UpdateDeleteTest", UpdateDeleteTestScreen, "Update Test"),
]


def build_navigator(service: PatientService, initial_route: str = "Welcome") -> Navigator:
    """Create a navigator over the app's routes."""
    return Navigator(ROUTES, service=service, initial_route=initial_route)
