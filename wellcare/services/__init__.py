"""Service layer between screens and the REST client."""

from wellcare.services.patients import PatientService, RestPatientService

__all__ = ["PatientService", "RestPatientService"]
