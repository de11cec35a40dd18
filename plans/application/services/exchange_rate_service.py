"""
Exchange rate provider.

Fetches USD based rates from the configured public API and falls back
to a built-in table when the API cannot be reached.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Dict

import requests
from asgiref.sync import sync_to_async
from django.conf import settings

logger = logging.getLogger(__name__)

DEFAULT_EXCHANGE_RATES_URL = "https://api.exchangerate-api.com/v4/latest/USD"
REQUEST_TIMEOUT_SECONDS = 10

API_SOURCE = "exchangerate-api.com"
SIMULATED_SOURCE = "simulated"

# Units per USD
SIMULATED_RATES: Dict[str, Decimal] = {
    "EUR": Decimal("0.92"),
    "GBP": Decimal("0.79"),
    "JPY": Decimal("149.50"),
    "AUD": Decimal("1.53"),
    "CAD": Decimal("1.36"),
    "CHF": Decimal("0.89"),
    "CNY": Decimal("7.24"),
    "INR": Decimal("83.12"),
    "MXN": Decimal("17.05"),
    "SGD": Decimal("1.34"),
    "HKD": Decimal("7.81"),
    "NOK": Decimal("10.45"),
    "SEK": Decimal("10.83"),
    "NZD": Decimal("1.69"),
    "IQD": Decimal("1310.00"),
    "SAR": Decimal("3.75"),
    "AED": Decimal("3.67"),
    "TRY": Decimal("32.50"),
    "EGP": Decimal("30.90"),
    "KWD": Decimal("0.31"),
    "QAR": Decimal("3.64"),
    "BHD": Decimal("0.376"),
    "OMR": Decimal("0.385"),
}


@dataclass(frozen=True)
class RateSnapshot:
    """Rates and where they came from."""

    rates: Dict[str, Decimal]
    source: str

    @property
    def from_api(self) -> bool:
        return self.source == API_SOURCE


class ExchangeRateService:
    """Service for fetching current exchange rates."""

    def __init__(self, url: str = None, timeout: int = REQUEST_TIMEOUT_SECONDS):
        self.url = url or getattr(settings, "EXCHANGE_RATES_URL", DEFAULT_EXCHANGE_RATES_URL)
        self.timeout = timeout

    def fetch_sync(self) -> RateSnapshot:
        """
        Fetch rates, falling back to the simulated table on any failure.

        Returns:
            RateSnapshot with units per USD keyed by currency code
        """
        try:
            response = requests.get(
                self.url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            raw = response.json()["rates"]
            rates = {code.upper(): Decimal(str(value)) for code, value in raw.items()}
        except (requests.exceptions.RequestException, ValueError, KeyError, TypeError, AttributeError,
                InvalidOperation) as e:
            logger.warning("Exchange rate API unavailable, using simulated rates: %s", e)
            return RateSnapshot(rates=dict(SIMULATED_RATES), source=SIMULATED_SOURCE)

        logger.info("Fetched %d exchange rates from %s", len(rates), self.url)
        return RateSnapshot(rates=rates, source=API_SOURCE)

    async def fetch(self) -> RateSnapshot:
        """Async wrapper around fetch_sync."""
        return await sync_to_async(self.fetch_sync, thread_sensitive=False)()
