import logging
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from clinic.core.exceptions import ConflictError
from clinic.db.base import Appointment, MedicalRecord
from clinic.db.base import User as DbUser
from clinic.db.session import atomic
from clinic.domain.entities import ROLE_ADMIN
from clinic.domain.entities import User as DomainUser
from clinic.domain.interfaces import IUserRepository

logger = logging.getLogger(__name__)


class UserRepository(IUserRepository):
    """Repository for User persistence operations following SOLID principles.

    This implementation:
    - Implements IUserRepository interface (Dependency Inversion)
    - Handles data access only (Single Responsibility)
    - Maps between domain entities and database models
    """

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, user_id: str) -> Optional[DomainUser]:
        """Get user by ID, returning domain entity."""
        db_user = self.db.query(DbUser).filter_by(id=user_id).first()
        return self._to_domain(db_user) if db_user else None

    def get_by_email(self, email: str) -> Optional[DomainUser]:
        """Get user by email, returning domain entity."""
        db_user = self.db.query(DbUser).filter_by(email=email).first()
        return self._to_domain(db_user) if db_user else None

    def get_all(self) -> List[DomainUser]:
        db_users = self.db.query(DbUser).all()
        return [self._to_domain(db_user) for db_user in db_users]

    def search(
        self, q: Optional[str], offset: int, limit: int
    ) -> Tuple[int, List[DomainUser]]:
        """Count and page users matching ``q`` in email or names, newest first."""
        query = self.db.query(DbUser)
        if q:
            query = query.filter(
                or_(
                    DbUser.email.icontains(q, autoescape=True),
                    DbUser.firstname.icontains(q, autoescape=True),
                    DbUser.lastname.icontains(q, autoescape=True),
                )
            )

        with atomic(self.db):
            total = query.count()
            rows = (
                query.order_by(DbUser.created_at.desc(), DbUser.id.desc())
                .offset(offset)
                .limit(limit)
                .all()
            )

        return total, [self._to_domain(row) for row in rows]

    def count_active_admins(self) -> int:
        return (
            self.db.query(DbUser)
            .filter(DbUser.role == ROLE_ADMIN, DbUser.is_active.is_(True))
            .count()
        )

    def count_linked_records(self, user_id: str) -> Tuple[int, int]:
        """Get counts of appointments and medical records tied to a user."""
        with atomic(self.db):
            appointments = (
                self.db.query(Appointment).filter_by(doctor_id=user_id).count()
            )
            records = self.db.query(MedicalRecord).filter_by(author_id=user_id).count()
        return appointments, records

    def create(self, user: DomainUser) -> DomainUser:
        """Create a new user from domain entity.

        Raises:
            ConflictError: If the unique email constraint rejects the insert
        """
        db_user = DbUser(
            email=user.email,
            firstname=user.firstname,
            lastname=user.lastname,
            role=user.role,
            password_hash=user.password_hash,
            is_active=user.is_active,
            must_change_password=user.must_change_password,
        )

        self.db.add(db_user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Another request inserted the same email after our pre-check
            self.db.rollback()
            logger.warning(
                "User insert rejected by unique constraint",
                extra={"context": {"error": str(e.orig)}},
            )
            raise ConflictError("Email already in use") from e
        self.db.refresh(db_user)
        return self._to_domain(db_user)

    def update(self, user: DomainUser) -> DomainUser:
        """Update an existing user from domain entity."""
        if not user.id:
            raise ValueError("User ID is required for update")

        db_user = self.db.query(DbUser).filter_by(id=user.id).first()
        if not db_user:
            raise ValueError(f"User with ID {user.id} not found")

        db_user.email = user.email
        db_user.firstname = user.firstname
        db_user.lastname = user.lastname
        db_user.role = user.role
        db_user.is_active = user.is_active
        db_user.must_change_password = user.must_change_password
        if user.password_hash:
            db_user.password_hash = user.password_hash

        self.db.add(db_user)
        self.db.commit()
        self.db.refresh(db_user)
        return self._to_domain(db_user)

    def delete(self, user_id: str) -> bool:
        """Delete a user by ID."""
        db_user = self.db.query(DbUser).filter_by(id=user_id).first()
        if not db_user:
            return False

        self.db.delete(db_user)
        self.db.commit()
        return True

    def _to_domain(self, db_user: DbUser) -> DomainUser:
        """Convert database model to domain entity."""
        return DomainUser(
            id=db_user.id,
            email=db_user.email,
            firstname=db_user.firstname,
            lastname=db_user.lastname,
            role=db_user.role,
            password_hash=db_user.password_hash,
            is_active=db_user.is_active,
            must_change_password=db_user.must_change_password,
            created_at=db_user.created_at,
        )
