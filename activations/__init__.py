"""
Activations module - Device binding and seat limits.

This module handles:
- Device entity (one seat of a license)
- Device-limit enforcement under a row lock
- Client activation and heartbeat
"""
