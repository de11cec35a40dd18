"""
ActivateLicenseHandler.

Handler for activating a license on a client machine.
"""
import logging

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.dto.activation_dto import ActivationResultDTO
from activations.domain.events import LicenseActivated
from activations.ports.device_repository import DeviceRepository
from core.domain.exceptions import DeviceLimitExceededError, DomainValidationError
from core.infrastructure.events import event_bus
from core.metrics import device_limit_rejections_total, licenses_activated_total
from licenses.application.services.license_cache_service import LicenseCacheService

logger = logging.getLogger(__name__)


class ActivateLicenseHandler:
    """Handler for ActivateLicenseCommand."""

    def __init__(self, device_repository: DeviceRepository):
        """Initialize handler with repositories."""
        self.device_repository = device_repository

    async def handle(self, command: ActivateLicenseCommand) -> ActivationResultDTO:
        """
        Handle activate license command.

        Args:
            command: ActivateLicenseCommand

        Returns:
            ActivationResultDTO with activation details

        Raises:
            DomainValidationError: If serial or hardware ID is missing
            LicenseNotFoundError: If the serial is unknown
            LicenseRevokedError: If the license is revoked
            LicenseExpiredError: If the license expired
            LicensePausedError: If the license is paused
            DeviceLimitExceededError: If the device limit is reached
        """
        serial = (command.serial or "").strip()
        hardware_id = (command.hardware_id or "").strip()
        if not serial or not hardware_id:
            raise DomainValidationError("Serial and hardwareId are required")

        try:
            binding = await self.device_repository.bind(
                serial=serial,
                hardware_id=hardware_id,
                device_name=command.device_name,
                app_version=command.app_version,
            )
        except DeviceLimitExceededError:
            device_limit_rejections_total.inc()
            logger.warning("Device limit reached", extra={"serial": serial[:8], "hardware_id": hardware_id})
            raise

        licenses_activated_total.labels(
            product_type=binding.license.product_type.value,
            reactivation=str(binding.reactivation).lower(),
        ).inc()

        await event_bus.publish(
            LicenseActivated(
                device_id=binding.device.id,
                license_id=binding.license.id,
                hardware_id=hardware_id,
                reactivation=binding.reactivation,
            )
        )

        await LicenseCacheService.invalidate(serial)

        return ActivationResultDTO(
            license_id=binding.license.id,
            device_id=binding.device.id,
            activation_date=binding.license.activation_date,
            reactivation=binding.reactivation,
        )
