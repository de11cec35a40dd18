"""
Support app models.
"""
from support.infrastructure.models import SupportMessage, SupportTicket, TicketReply  # noqa: F401
