"""
Notifications module - Messages pushed to client installations.

Broadcast notifications reach every installation of a product line;
direct ones target a single serial.
"""
