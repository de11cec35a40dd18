"""
Accounts app models.
"""
from accounts.infrastructure.models import Session, User  # noqa: F401
