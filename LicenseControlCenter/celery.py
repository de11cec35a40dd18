"""
Celery configuration for background tasks.

Used for the periodic license expiry sweep.
"""
import os

from celery import Celery
from celery.schedules import crontab

# Set default Django settings module
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "LicenseControlCenter.settings.dev")

app = Celery("LicenseControlCenter")

# Load configuration from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()

app.conf.beat_schedule = {
    "sweep-expired-licenses": {
        "task": "core.tasks.sweep_expired_licenses",
        "schedule": crontab(minute=0),
    },
}
