"""
Support module - Tickets from POS installations and messages from clinics.
"""
