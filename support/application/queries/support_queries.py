"""
Support queries and their results.
"""
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from support.domain.support_message import MessageStatus, SupportMessage


@dataclass
class SearchSupportMessagesQuery:
    status: Optional[MessageStatus] = None
    clinic_id: Optional[uuid.UUID] = None
    search: Optional[str] = None


@dataclass
class SupportInboxDTO:
    """Filtered messages plus the global unread count."""

    messages: List[SupportMessage] = field(default_factory=list)
    unread_count: int = 0
