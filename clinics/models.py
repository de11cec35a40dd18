"""
Clinics app models.
"""
from clinics.infrastructure.models import Clinic, ClinicControl  # noqa: F401
