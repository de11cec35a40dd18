"""
Releases module - Client software versions and remote configuration.

This module handles:
- Published application versions and the update check
- Back-office system settings
- Remote configuration pulled by client installations
"""
