"""
URL configuration for app version and settings endpoints.
"""

from django.urls import path

from api.v1.releases import views

version_urlpatterns = [
    path("", views.VersionListView.as_view(), name="version-list"),
    path("latest", views.LatestVersionView.as_view(), name="version-latest"),
    path("<uuid:version_id>", views.VersionDetailView.as_view(), name="version-detail"),
]

settings_urlpatterns = [
    path("", views.SystemSettingsView.as_view(), name="settings"),
    path("remote", views.RemoteConfigView.as_view(), name="settings-remote"),
]
