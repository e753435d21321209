"""
Domain package - Pure business logic layer.

This package contains:
- entities.py: Domain entities with business logic
- interfaces.py: Repository contracts
- guards.py: Preconditions for user lifecycle mutations
"""

from .entities import Patient, User
from .interfaces import (
    IPatientReader,
    IPatientRepository,
    IPatientWriter,
    IUserReader,
    IUserRepository,
    IUserWriter,
)

__all__ = [
    # Domain entities
    "Patient",
    "User",
    # Repository interfaces
    "IPatientRepository",
    "IUserRepository",
    # Segregated interfaces
    "IPatientReader",
    "IPatientWriter",
    "IUserReader",
    "IUserWriter",
]
