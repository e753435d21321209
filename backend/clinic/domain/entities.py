"""
Domain entities - Pure business logic, no framework dependencies.

Following SOLID principles:
- Single Responsibility: Each entity represents one business concept
- Open/Closed: Entities can be extended without modification
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

GENDERS = ("male", "female", "other")

ROLE_ADMIN = "admin"
ROLE_DOCTOR = "doctor"
ROLE_NURSE = "nurse"
ROLE_RECEPTIONIST = "receptionist"
ROLES = (ROLE_ADMIN, ROLE_DOCTOR, ROLE_NURSE, ROLE_RECEPTIONIST)


@dataclass
class Patient:
    """Domain entity representing a Patient.

    ``id``, ``created_at`` and ``updated_at`` are assigned by the store and
    are None until the entity has been persisted.
    """

    first_name: str = ""
    last_name: str = ""
    gender: str = ""
    phone: str = ""
    email: str = ""
    notes: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        if not self.first_name:
            raise ValueError("First name is required")
        if not self.last_name:
            raise ValueError("Last name is required")
        if self.gender not in GENDERS:
            raise ValueError(f"Invalid gender '{self.gender}'")


@dataclass
class User:
    """Domain entity representing a staff User.

    ``password_hash`` travels with the entity between service and repository
    but is never part of any response projection.
    """

    email: str = ""
    firstname: str = ""
    lastname: str = ""
    role: str = ROLE_RECEPTIONIST
    password_hash: str = ""
    is_active: bool = True
    must_change_password: bool = False
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate domain rules."""
        if not self.email or "@" not in self.email:
            raise ValueError("Invalid email format")
        if self.role not in ROLES:
            raise ValueError(f"Invalid role '{self.role}'")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_doctor(self) -> bool:
        return self.role == ROLE_DOCTOR
