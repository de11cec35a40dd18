"""
Licenses module - License serials, lifecycle and revenue.

This module handles:
- License entity and its state machine (pending, active, paused, revoked, expired)
- Serial generation and batch issuance
- Renewals and the transactions they record
- Validation results and their cache
- Dashboard analytics
"""
