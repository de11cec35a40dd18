"""
Django implementation of LicenseRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from asgiref.sync import sync_to_async
from django.db import IntegrityError, transaction

from core.domain.exceptions import DuplicateSerialError
from core.domain.value_objects import LicenseStatus, ProductType
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.ports.license_repository import LicenseRepository


class DjangoLicenseRepository(LicenseRepository):
    """
    Django ORM implementation of LicenseRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def _to_domain(self, model: LicenseModel) -> License:
        """
        Convert Django model to domain entity.

        Args:
            model: Django License model

        Returns:
            License domain entity
        """
        return License(
            id=model.id,
            serial=model.serial,
            plan_id=model.plan_id,
            product_type=ProductType(model.product_type),
            customer_name=model.customer_name,
            status=LicenseStatus(model.status),
            is_paused=model.is_paused,
            device_limit=model.device_limit,
            expire_date=model.expire_date,
            created_at=model.created_at,
            updated_at=model.updated_at,
            hardware_id=model.hardware_id,
            activation_date=model.activation_date,
            activation_count=model.activation_count,
            last_check_in=model.last_check_in,
            last_renewal_date=model.last_renewal_date,
        )

    def _fields(self, license: License) -> Dict[str, Any]:
        """Column values for a license entity."""
        return {
            "serial": license.serial,
            "plan_id": license.plan_id,
            "product_type": license.product_type.value,
            "customer_name": license.customer_name,
            "hardware_id": license.hardware_id,
            "device_limit": license.device_limit,
            "status": license.status.value,
            "is_paused": license.is_paused,
            "expire_date": license.expire_date,
            "activation_date": license.activation_date,
            "activation_count": license.activation_count,
            "last_check_in": license.last_check_in,
            "last_renewal_date": license.last_renewal_date,
        }

    def _apply(self, model: LicenseModel, license: License) -> LicenseModel:
        """Copy entity state onto an existing model row."""
        for attr, value in self._fields(license).items():
            setattr(model, attr, value)
        return model

    def insert_sync(self, license: License) -> License:
        """
        Insert a license inside a savepoint so a serial clash leaves any
        enclosing transaction usable.

        Raises:
            DuplicateSerialError: If the serial is already taken
        """
        model = LicenseModel(id=license.id, created_at=license.created_at, **self._fields(license))
        try:
            with transaction.atomic():
                model.save(force_insert=True)
        except IntegrityError as e:
            raise DuplicateSerialError(f"Serial {license.serial} already exists") from e
        return self._to_domain(model)

    async def insert(self, license: License) -> License:
        """
        Insert a newly issued license.

        Raises:
            DuplicateSerialError: If the serial is already taken
        """
        return await sync_to_async(self.insert_sync)(license)

    @sync_to_async
    def save(self, license: License) -> License:
        """
        Save changes to an existing license.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """
        model, created = LicenseModel.objects.get_or_create(
            id=license.id,
            defaults={"created_at": license.created_at, **self._fields(license)},
        )
        if not created:
            self._apply(model, license)
            model.save()
        return self._to_domain(model)

    @sync_to_async
    def find_by_id(self, license_id: uuid.UUID) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID

        Returns:
            License entity or None if not found
        """
        try:
            model = LicenseModel.objects.get(id=license_id)
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_serial(self, serial: str) -> Optional[License]:
        """
        Find a license by serial.

        Args:
            serial: License serial

        Returns:
            License entity or None if not found
        """
        try:
            model = LicenseModel.objects.get(serial=serial)
            return self._to_domain(model)
        except LicenseModel.DoesNotExist:
            return None

    @sync_to_async
    def list_all(self) -> List[License]:
        return [self._to_domain(model) for model in LicenseModel.objects.order_by("-created_at")]

    @sync_to_async
    def delete(self, license_id: uuid.UUID) -> bool:
        deleted, _ = LicenseModel.objects.filter(id=license_id).delete()
        return deleted > 0

    @sync_to_async
    def find_lapsed(self, now: datetime) -> List[License]:
        """
        Find active licenses whose expiration date has passed.

        Args:
            now: Reference time

        Returns:
            List of License entities
        """
        queryset = LicenseModel.objects.filter(
            status=LicenseStatus.ACTIVE.value,
            expire_date__isnull=False,
            expire_date__lt=now,
        )
        return [self._to_domain(model) for model in queryset]

    @sync_to_async
    def expire_if_lapsed(self, license_id: uuid.UUID, now: datetime) -> bool:
        updated = LicenseModel.objects.filter(
            id=license_id,
            status=LicenseStatus.ACTIVE.value,
            expire_date__isnull=False,
            expire_date__lt=now,
        ).update(status=LicenseStatus.EXPIRED.value, is_paused=False, updated_at=now)
        return updated > 0

    @sync_to_async
    def count_by_status(self, status: LicenseStatus) -> int:
        return LicenseModel.objects.filter(status=status.value).count()

    @sync_to_async
    def count_expiring(self, now: datetime, until: datetime) -> int:
        return LicenseModel.objects.filter(
            status=LicenseStatus.ACTIVE.value,
            expire_date__gt=now,
            expire_date__lte=until,
        ).count()

    @sync_to_async
    def count_customers(self) -> int:
        return LicenseModel.objects.values("customer_name").distinct().count()
