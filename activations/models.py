"""
Activations app models.
"""
from activations.infrastructure.models import Device  # noqa: F401
