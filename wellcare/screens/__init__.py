"""Screen controllers."""

from wellcare.screens.base import Alert, AlertButton, Screen, ScreenStatus
from wellcare.screens.critical_patients import CriticalPatientsScreen
from wellcare.screens.medical_test_forms import AddTestScreen, UpdateDeleteTestScreen
from wellcare.screens.patient_details import PatientDetailsScreen
from wellcare.screens.patient_forms import AddPatientScreen, UpdateDeletePatientScreen
from wellcare.screens.patient_history import PatientHistoryScreen
from wellcare.screens.patients_list import PatientsListScreen
from wellcare.screens.settings import SettingsScreen, WelcomeScreen

__all__ = [
    "AddPatientScreen",
    "AddTestScreen",
    "Alert",
    "AlertButton",
    "CriticalPatientsScreen",
    "PatientDetailsScreen",
    "PatientHistoryScreen",
    "PatientsListScreen",
    "Screen",
    "ScreenStatus",
    "SettingsScreen",
    "UpdateDeletePatientScreen",
    "UpdateDeleteTestScreen",
    "WelcomeScreen",
]
