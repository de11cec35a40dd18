"""
HeartbeatHandler.

Records that a client is still running.
"""
from activations.application.commands.activate_license import HeartbeatCommand
from activations.application.dto.activation_dto import HeartbeatResultDTO
from activations.ports.device_repository import DeviceRepository
from core.domain.dates import utcnow
from core.domain.exceptions import DomainValidationError, LicenseNotFoundError


class HeartbeatHandler:
    """Handler for HeartbeatCommand."""

    def __init__(self, device_repository: DeviceRepository):
        self.device_repository = device_repository

    async def handle(self, command: HeartbeatCommand) -> HeartbeatResultDTO:
        """
        Stamp last check-in on the license and the reporting device.

        Raises:
            DomainValidationError: If the serial is missing
            LicenseNotFoundError: If the serial is unknown
        """
        serial = (command.serial or "").strip()
        if not serial:
            raise DomainValidationError("Serial is required")

        now = utcnow()
        license = await self.device_repository.check_in(
            serial=serial,
            hardware_id=command.hardware_id,
            app_version=command.app_version,
            device_name=command.device_name,
            now=now,
        )
        if license is None:
            raise LicenseNotFoundError()
        return HeartbeatResultDTO(success=True, timestamp=now)
