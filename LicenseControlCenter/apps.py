"""
App configuration for License Control Center.
"""
import logging
import os
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)

SKIP_COMMANDS = {"migrate", "makemigrations", "collectstatic", "check", "createsuperuser"}


class LicenseControlCenterConfig(AppConfig):
    """App configuration for LicenseControlCenter."""

    name = "LicenseControlCenter"
    verbose_name = "License Control Center"

    def ready(self):
        """Set up tracing and event handlers once per process."""
        import core.schema_extensions  # noqa: F401 pylint: disable=import-outside-toplevel,unused-import

        if len(sys.argv) > 1 and sys.argv[1] in SKIP_COMMANDS:
            return

        # Django's autoreloader parent process
        if os.environ.get("RUN_MAIN") == "false":
            return

        if getattr(self, "_initialized", False):
            return

        self.setup_observability()
        self.register_event_handlers()
        self._initialized = True

    def setup_observability(self):
        """Setup OpenTelemetry after apps are ready."""
        from core.instrumentation import setup_opentelemetry

        try:
            setup_opentelemetry()
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.warning("Failed to setup OpenTelemetry: %s", e)

    def register_event_handlers(self):
        """Register event handlers after apps are ready."""
        from core.infrastructure.event_handlers import register_event_handlers as register

        register()
