"""
Django implementation of UserRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from accounts.domain.user import User
from accounts.infrastructure.models import User as UserModel
from accounts.ports.user_repository import UserRepository
from core.domain.exceptions import DuplicateError
from core.domain.value_objects import RegistrationStatus, Role


class DjangoUserRepository(UserRepository):
    """Django ORM implementation of UserRepository."""

    def _to_domain(self, model: UserModel) -> User:
        """
        Convert Django model to domain entity.

        Args:
            model: Django User model

        Returns:
            User domain entity
        """
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=Role(model.role),
            status=RegistrationStatus(model.status),
            created_at=model.created_at,
            clinic_id=model.clinic_id,
            last_login=model.last_login,
            last_login_ip=model.last_login_ip,
        )

    def create_sync(self, user: User, password: str) -> UserModel:
        """
        Insert a user row inside a savepoint.

        Raises:
            DuplicateError: If the email is taken
        """
        if UserModel.objects.filter(email__iexact=user.email).exists():
            raise DuplicateError("An account with this email already exists", code="DUPLICATE_EMAIL")
        try:
            with transaction.atomic():
                return UserModel.objects.create_user(
                    email=user.email,
                    password=password,
                    id=user.id,
                    name=user.name,
                    role=user.role.value,
                    status=user.status.value,
                    clinic_id=user.clinic_id,
                    created_at=user.created_at,
                )
        except IntegrityError as e:
            raise DuplicateError("An account with this email already exists", code="DUPLICATE_EMAIL") from e

    @sync_to_async
    def add(self, user: User, password: str) -> User:
        """
        Insert a user with a hashed password.

        Raises:
            DuplicateError: If the email is taken
        """
        return self._to_domain(self.create_sync(user, password))

    @sync_to_async
    def find_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """
        Find a user by ID.

        Args:
            user_id: User UUID

        Returns:
            User entity or None if not found
        """
        try:
            return self._to_domain(UserModel.objects.get(id=user_id))
        except UserModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_email(self, email: str) -> Optional[User]:
        model = UserModel.objects.filter(email__iexact=(email or "").strip()).first()
        return self._to_domain(model) if model else None

    @sync_to_async
    def authenticate(self, email: str, password: str) -> Optional[User]:
        """
        Check credentials.

        Returns:
            The user when the password matches, else None
        """
        model = UserModel.objects.filter(email__iexact=(email or "").strip()).first()
        if model is None or not model.check_password(password):
            return None
        return self._to_domain(model)

    @sync_to_async
    def clinic_status(self, user: User) -> Optional[RegistrationStatus]:
        if not user.clinic_id:
            return None
        status = (
            UserModel.objects.filter(id=user.id)
            .values_list("clinic__status", flat=True)
            .first()
        )
        return RegistrationStatus(status) if status else None

    @sync_to_async
    def record_login(self, user_id: uuid.UUID, ip_address: Optional[str], now: datetime) -> None:
        UserModel.objects.filter(id=user_id).update(last_login=now, last_login_ip=ip_address)

    @sync_to_async
    def list_all(self) -> List[User]:
        return [self._to_domain(model) for model in UserModel.objects.order_by("-created_at")]

    @sync_to_async
    def delete(self, user_id: uuid.UUID) -> bool:
        deleted, _ = UserModel.objects.filter(id=user_id).delete()
        return deleted > 0
