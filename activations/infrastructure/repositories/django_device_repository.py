"""
Django implementation of DeviceRepository port.

This adapter converts between domain entities and Django ORM models.
"""
import uuid
from datetime import datetime
from typing import List, Optional

from asgiref.sync import sync_to_async

from activations.domain.device import Device
from activations.domain.services import DeviceBinding, SeatManager
from activations.infrastructure.models import Device as DeviceModel
from activations.ports.device_repository import DeviceRepository
from core.domain.dates import utcnow
from core.domain.exceptions import LicenseNotFoundError
from core.infrastructure.database import atomic_sync_to_async
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


class DjangoDeviceRepository(DeviceRepository):
    """
    Django ORM implementation of DeviceRepository.

    This adapter:
    1. Converts Django models to domain entities
    2. Converts domain entities to Django models
    3. Implements repository interface
    """

    def __init__(self):
        self.licenses = DjangoLicenseRepository()

    def _to_domain(self, model: DeviceModel) -> Device:
        """
        Convert Django model to domain entity.

        Args:
            model: Django Device model

        Returns:
            Device domain entity
        """
        return Device(
            id=model.id,
            license_id=model.license_id,
            hardware_id=model.hardware_id,
            device_name=model.device_name,
            app_version=model.app_version,
            last_check_in=model.last_check_in,
            is_active=model.is_active,
            created_at=model.created_at,
        )

    def _store(self, device: Device) -> DeviceModel:
        model, created = DeviceModel.objects.get_or_create(
            id=device.id,
            defaults={
                "license_id": device.license_id,
                "hardware_id": device.hardware_id,
                "device_name": device.device_name,
                "app_version": device.app_version,
                "last_check_in": device.last_check_in,
                "is_active": device.is_active,
                "created_at": device.created_at,
            },
        )
        if not created:
            model.device_name = device.device_name
            model.app_version = device.app_version
            model.last_check_in = device.last_check_in
            model.is_active = device.is_active
            model.save()
        return model

    @atomic_sync_to_async
    def bind(
        self,
        serial: str,
        hardware_id: str,
        device_name: Optional[str] = None,
        app_version: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> DeviceBinding:
        """
        Activate a hardware ID on a license inside one transaction.

        Raises:
            LicenseNotFoundError: If the serial is unknown
            DeviceLimitExceededError: If a new device would exceed the limit
        """
        try:
            license_model = LicenseModel.objects.select_for_update().get(serial=serial)
        except LicenseModel.DoesNotExist as e:
            raise LicenseNotFoundError() from e

        # pylint: disable=protected-access
        license = self.licenses._to_domain(license_model)
        existing = DeviceModel.objects.filter(license_id=license.id, hardware_id=hardware_id).first()
        active_devices = DeviceModel.objects.filter(license_id=license.id, is_active=True).count()

        binding = SeatManager.bind(
            license=license,
            existing=self._to_domain(existing) if existing else None,
            active_devices=active_devices,
            hardware_id=hardware_id,
            device_name=device_name,
            app_version=app_version,
            now=now,
        )

        device_model = self._store(binding.device)
        self.licenses._apply(license_model, binding.license)
        license_model.save()

        return DeviceBinding(
            license=self.licenses._to_domain(license_model),
            device=self._to_domain(device_model),
            reactivation=binding.reactivation,
        )

    @atomic_sync_to_async
    def check_in(
        self,
        serial: str,
        hardware_id: Optional[str],
        app_version: Optional[str] = None,
        device_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Optional[License]:
        """
        Stamp the check-in time on a license and its matching device.

        Returns:
            Updated License entity, or None if the serial is unknown
        """
        now = now or utcnow()
        license_model = LicenseModel.objects.select_for_update().filter(serial=serial).first()
        if license_model is None:
            return None

        # pylint: disable=protected-access
        license = self.licenses._to_domain(license_model).touch(now)
        self.licenses._apply(license_model, license)
        license_model.save()

        if hardware_id:
            device_model = DeviceModel.objects.filter(license_id=license.id, hardware_id=hardware_id).first()
            if device_model is not None:
                self._store(
                    self._to_domain(device_model).refresh(
                        device_name=device_name,
                        app_version=app_version,
                        now=now,
                    )
                )
        return self.licenses._to_domain(license_model)

    @sync_to_async
    def find_by_license_and_hardware(self, license_id: uuid.UUID, hardware_id: str) -> Optional[Device]:
        """
        Find a device by license and hardware ID.

        Args:
            license_id: License UUID
            hardware_id: Hardware ID

        Returns:
            Device entity or None if not found
        """
        try:
            model = DeviceModel.objects.get(license_id=license_id, hardware_id=hardware_id)
            return self._to_domain(model)
        except DeviceModel.DoesNotExist:
            return None

    @sync_to_async
    def list_by_license(self, license_id: uuid.UUID) -> List[Device]:
        return [self._to_domain(model) for model in DeviceModel.objects.filter(license_id=license_id)]

    @sync_to_async
    def count_active(self, license_id: uuid.UUID) -> int:
        return DeviceModel.objects.filter(license_id=license_id, is_active=True).count()
