"""
Release and configuration Django ORM models.
"""
import uuid

from django.db import models
from django.utils import timezone


class AppVersion(models.Model):
    """A published client build."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    version = models.CharField(max_length=50)
    release_notes = models.TextField(blank=True, default="")
    download_url = models.URLField(max_length=500)
    force_update = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    release_date = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        db_table = "app_versions"
        ordering = ["-release_date"]

    def __str__(self):
        return self.version


class SystemSetting(models.Model):
    """Back-office setting."""

    key = models.CharField(max_length=100, primary_key=True)
    value = models.JSONField(null=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "system_settings"

    def __str__(self):
        return self.key


class RemoteConfig(models.Model):
    """Configuration entry pulled by client installations."""

    key = models.CharField(max_length=100, primary_key=True)
    value = models.JSONField(null=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "remote_config"

    def __str__(self):
        return self.key
