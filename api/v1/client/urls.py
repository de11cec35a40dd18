"""
URL configuration for the client surface.

Desktop clinic software uses the short paths; POS terminals use the
``/api/pos/`` family.
"""

from django.urls import path

from api.v1.client import views

urlpatterns = [
    path("license/activate", views.ActivateLicenseView.as_view(), name="license-activate"),
    path("license/validate", views.ValidateLicenseView.as_view(), name="license-validate"),
    path("app/update", views.CheckForUpdateView.as_view(), name="app-update"),
    path("config/sync", views.ConfigSyncView.as_view(), name="config-sync"),
    path("support/request", views.SupportRequestView.as_view(), name="support-request"),
    path("api/pos/activate", views.ActivateLicenseView.as_view(), name="pos-activate"),
    path("api/pos/validate", views.PosValidateLicenseView.as_view(), name="pos-validate"),
    path("api/pos/heartbeat", views.HeartbeatView.as_view(), name="pos-heartbeat"),
    path("api/pos/notifications", views.DeviceNotificationsView.as_view(), name="pos-notifications"),
    path("api/pos/plans", views.PlanCatalogView.as_view(), name="pos-plans"),
]
