"""
Database utilities and transaction management.
"""

import functools
from typing import Callable

from asgiref.sync import sync_to_async
from django.db import transaction


def atomic_sync_to_async(func: Callable) -> Callable:
    """
    Expose a synchronous ORM routine as a coroutine running in one transaction.

    The whole routine executes on the database thread inside
    ``transaction.atomic()``, so row locks taken with
    ``select_for_update()`` are held until it returns.

    Usage:
        class DjangoDeviceRepository(DeviceRepository):
            @atomic_sync_to_async
            def bind(self, ...):
                ...
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with transaction.atomic():
            return func(*args, **kwargs)

    return sync_to_async(wrapper)
