"""
Serializers for app version and settings endpoints.
"""

from rest_framework import serializers


class AppVersionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    version = serializers.CharField()
    releaseNotes = serializers.CharField(source="release_notes", allow_blank=True)
    downloadUrl = serializers.CharField(source="download_url")
    forceUpdate = serializers.BooleanField(source="force_update")
    isActive = serializers.BooleanField(source="is_active")
    releaseDate = serializers.DateTimeField(source="release_date")


class PublishVersionRequestSerializer(serializers.Serializer):
    version = serializers.CharField(max_length=50)
    downloadUrl = serializers.CharField()
    releaseNotes = serializers.CharField(required=False, allow_blank=True, default="")
    forceUpdate = serializers.BooleanField(required=False, default=False)
    isActive = serializers.BooleanField(required=False, default=True)


class UpdateVersionRequestSerializer(serializers.Serializer):
    version = serializers.CharField(required=False, max_length=50)
    downloadUrl = serializers.CharField(required=False)
    releaseNotes = serializers.CharField(required=False, allow_blank=True)
    forceUpdate = serializers.BooleanField(required=False)
    isActive = serializers.BooleanField(required=False)
