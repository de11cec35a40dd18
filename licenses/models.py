"""
Licenses app models.
"""
from licenses.infrastructure.models import License, Transaction  # noqa: F401
