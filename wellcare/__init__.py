"""WellCare: terminal front-end for the hospital patient-tracking service."""

__version__ = "0.1.0"
