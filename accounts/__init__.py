"""
Accounts module - Users, sessions and authentication.

This module handles:
- Back-office users and clinic administrators (custom user model)
- Login sessions backing every refresh token
- Session-bound JWT authentication and forced logout
"""
