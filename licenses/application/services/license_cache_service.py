"""
License cache service.

Caches validate results per serial. Every handler that mutates a
license invalidates its entry.
"""
import hashlib
import logging
from datetime import datetime
from typing import Optional

from django.conf import settings

from core.infrastructure.cache_adapters import cache_adapter
from licenses.application.dto.license_dto import ValidationResultDTO

logger = logging.getLogger(__name__)

# Cache TTL (in seconds)
CACHE_TTL_LICENSE_VALIDATION = 60


def validation_ttl() -> int:
    return getattr(settings, "LICENSE_VALIDATION_CACHE_TTL", CACHE_TTL_LICENSE_VALIDATION)


def capped_validation_ttl(expire_date: Optional[datetime], now: datetime) -> int:
    """
    TTL for a validate result, never reaching past the license's expiry.

    Returns 0 when the license is already at or past its expiry.
    """
    ttl = validation_ttl()
    if expire_date is None:
        return ttl
    return max(0, min(ttl, int((expire_date - now).total_seconds())))


class LicenseCacheService:
    """Service for caching license validation results."""

    @staticmethod
    def _validation_key(serial: str) -> str:
        """Generate cache key for a serial's validate result."""
        key_hash = hashlib.sha256(serial.encode()).hexdigest()[:16]
        return f"license:validation:{key_hash}"

    @staticmethod
    async def get_validation(serial: str) -> Optional[ValidationResultDTO]:
        """
        Get a cached validate result.

        Args:
            serial: License serial

        Returns:
            Cached ValidationResultDTO or None
        """
        cached = await cache_adapter.get(LicenseCacheService._validation_key(serial))
        if not cached:
            return None
        try:
            return ValidationResultDTO.from_cache(cached)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Error deserializing cached validation: %s", e)
            return None

    @staticmethod
    async def set_validation(serial: str, result: ValidationResultDTO, ttl: int = None) -> None:
        """
        Cache a validate result.

        Args:
            serial: License serial
            result: ValidationResultDTO to cache
            ttl: Time to live in seconds
        """
        await cache_adapter.set(
            LicenseCacheService._validation_key(serial),
            result.to_cache(),
            timeout=ttl or validation_ttl(),
        )

    @staticmethod
    async def invalidate(serial: str) -> None:
        """
        Invalidate the cached validate result of a serial.

        Args:
            serial: License serial
        """
        await cache_adapter.delete(LicenseCacheService._validation_key(serial))
        logger.info("Invalidated license validation cache: %s...", serial[:8])
