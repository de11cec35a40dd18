"""
URL configuration for audit and traffic log endpoints.
"""

from django.urls import path

from api.v1.audit import views

audit_urlpatterns = [
    path("", views.AuditLogListView.as_view(), name="audit-log-list"),
]

traffic_urlpatterns = [
    path("", views.TrafficLogListView.as_view(), name="traffic-log-list"),
    path("<uuid:log_id>", views.TrafficLogDetailView.as_view(), name="traffic-log-detail"),
]
