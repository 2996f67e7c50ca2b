"""
Alumni Advantage - Placement & Career Portal
Connects students, alumni and the placement cell.

Architecture:
- Record store: five collections (users, opportunities, events, applications, notifications)
- Services: approval / application state machines + notification fan-out
- FastAPI: thin HTTP layer over the PortalService facade
"""

__version__ = "1.0.0"
__author__ = "Placement Cell"
