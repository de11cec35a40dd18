"""
URL configuration for notification endpoints.
"""

from django.urls import path

from api.v1.notifications import views

urlpatterns = [
    path("", views.NotificationListView.as_view(), name="notification-list"),
    path("<uuid:notification_id>", views.NotificationDetailView.as_view(), name="notification-detail"),
]
