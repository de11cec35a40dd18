"""
Audit app.

Append-only audit trail of back-office operations and the log of
requests made by client software.
"""
