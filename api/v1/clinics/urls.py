"""
URL configuration for clinic endpoints.
"""

from django.urls import path

from api.v1.clinics import views

urlpatterns = [
    path("register", views.RegisterClinicView.as_view(), name="clinic-register"),
    path("requests", views.ClinicRequestListView.as_view(), name="clinic-requests"),
    path("<uuid:clinic_id>", views.ClinicDetailView.as_view(), name="clinic-detail"),
    path("<uuid:clinic_id>/approve", views.ApproveClinicView.as_view(), name="clinic-approve"),
    path("<uuid:clinic_id>/reject", views.RejectClinicView.as_view(), name="clinic-reject"),
    path("<uuid:clinic_id>/toggle-status", views.ToggleClinicStatusView.as_view(), name="clinic-toggle-status"),
    path("<uuid:clinic_id>/controls", views.ClinicControlsView.as_view(), name="clinic-controls"),
]

subscription_urlpatterns = [
    path("status", views.SubscriptionStatusView.as_view(), name="subscription-status"),
]
