"""
Abstract interfaces for repositories following Interface Segregation Principle.

These interfaces define the persistence contract the services depend on,
enabling dependency injection and easier testing.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .entities import Patient, User


class IPatientReader(ABC):
    """Interface for patient read operations."""

    @abstractmethod
    def get_by_id(self, patient_id: str) -> Optional[Patient]:
        """Get patient by ID."""
        pass

    @abstractmethod
    def search(
        self,
        q: Optional[str],
        gender: Optional[str],
        newest_first: bool,
        offset: int,
        limit: int,
    ) -> Tuple[int, List[Patient]]:
        """Count and fetch one page of matching patients atomically.

        Returns (total matching rows, page items).
        """
        pass


class IPatientWriter(ABC):
    """Interface for patient write operations."""

    @abstractmethod
    def create(self, patient: Patient) -> Patient:
        """Create a new patient."""
        pass

    @abstractmethod
    def update(self, patient: Patient) -> Patient:
        """Write every editable field of an existing patient."""
        pass

    @abstractmethod
    def delete(self, patient_id: str) -> bool:
        """Delete a patient."""
        pass


class IPatientRepository(IPatientReader, IPatientWriter):
    """Complete patient repository interface combining read/write operations."""

    pass


class IUserReader(ABC):
    """Interface for user read operations."""

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        pass

    @abstractmethod
    def get_all(self) -> List[User]:
        """Get every user."""
        pass

    @abstractmethod
    def search(
        self, q: Optional[str], offset: int, limit: int
    ) -> Tuple[int, List[User]]:
        """Count and fetch one page of matching users (newest first) atomically."""
        pass

    @abstractmethod
    def count_active_admins(self) -> int:
        """Count users with role 'admin' that are active."""
        pass

    @abstractmethod
    def count_linked_records(self, user_id: str) -> Tuple[int, int]:
        """Count appointments and authored medical records for a user.

        Returns (appointments, medical records), read in one transaction.
        """
        pass


class IUserWriter(ABC):
    """Interface for user write operations."""

    @abstractmethod
    def create(self, user: User) -> User:
        """Create a new user."""
        pass

    @abstractmethod
    def update(self, user: User) -> User:
        """Update an existing user."""
        pass

    @abstractmethod
    def delete(self, user_id: str) -> bool:
        """Delete a user."""
        pass


class IUserRepository(IUserReader, IUserWriter):
    """Complete user repository interface combining read/write operations."""

    pass
