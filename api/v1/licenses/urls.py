"""
URL configuration for license endpoints.
"""

from django.urls import path

from api.v1.licenses import views

urlpatterns = [
    path("", views.LicenseListView.as_view(), name="license-list"),
    path("generate", views.GenerateLicensesView.as_view(), name="license-generate"),
    path("<uuid:license_id>", views.LicenseDetailView.as_view(), name="license-detail"),
    path("<uuid:license_id>/renew", views.RenewLicenseView.as_view(), name="license-renew"),
    path("<uuid:license_id>/pause", views.ToggleLicensePauseView.as_view(), name="license-pause"),
    path("<uuid:license_id>/revoke", views.RevokeLicenseView.as_view(), name="license-revoke"),
]
