"""
URL configuration for support tickets and clinic support messages.
"""

from django.urls import path

from api.v1.support import views

ticket_urlpatterns = [
    path("", views.TicketListView.as_view(), name="ticket-list"),
    path("<uuid:ticket_id>", views.TicketDetailView.as_view(), name="ticket-detail"),
    path("<uuid:ticket_id>/reply", views.TicketReplyView.as_view(), name="ticket-reply"),
    path("<uuid:ticket_id>/resolve", views.TicketResolveView.as_view(), name="ticket-resolve"),
]

message_urlpatterns = [
    path("messages", views.SupportMessageListView.as_view(), name="support-message-list"),
    path("messages/<uuid:message_id>", views.SupportMessageDetailView.as_view(), name="support-message-detail"),
]
