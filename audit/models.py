from audit.infrastructure.models import AuditLog, TrafficLog  # noqa: F401
