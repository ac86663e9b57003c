"""Repository layer for data persistence.

Provides repository classes for the roster, inbound responses and
incident windows. Repositories encapsulate data access logic and
provide a clean interface for the service layer.
"""

from src.repositories.contact_repo import ContactRepository
from src.repositories.incident_repo import IncidentRepository
from src.repositories.response_repo import ResponseRepository

__all__ = [
    "ContactRepository",
    "IncidentRepository",
    "ResponseRepository",
]
