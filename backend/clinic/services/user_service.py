import dataclasses
import logging
from typing import List, Optional

from clinic.core.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from clinic.core.security import hash_password
from clinic.domain import guards
from clinic.domain.entities import ROLES
from clinic.domain.entities import User as DomainUser
from clinic.domain.interfaces import IUserRepository
from clinic.schemas.dtos import (
    MessageResponse,
    PageResponse,
    UserCreateRequest,
    UserListQuery,
    UserProfileResponse,
    UserResponse,
    UserRoleResponse,
    UserStatusResponse,
    UserSummaryResponse,
)

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


class UserService:
    """Application service for staff user use-cases following SOLID principles.

    This service:
    - Keeps business rules separate from transports and repositories (Single Responsibility)
    - Depends on abstractions (IUserRepository) not concrete implementations (Dependency Inversion)
    - Evaluates every guard before the mutating repository call
    - Never returns the password hash
    """

    def __init__(self, repo: IUserRepository) -> None:
        self.repo = repo

    def create_by_admin(self, request: UserCreateRequest) -> UserResponse:
        """Create a staff account on behalf of an admin.

        Business Rules:
        - Email must not already be registered
        - The temporary password is stored as a bcrypt hash
        - New accounts are active and must change their password on first login

        The email pre-check and the insert are separate statements; the unique
        constraint on ``users.email`` turns a concurrent duplicate into a
        ConflictError as well.

        Raises:
            BadRequestError: If the request is malformed
            ConflictError: If the email is already in use
        """
        request.validate()
        email = request.email.strip()

        if self.repo.get_by_email(email) is not None:
            logger.warning(
                "User creation rejected: email already in use",
                extra={"context": {"role": request.role}},
            )
            raise ConflictError("Email already in use")

        user = DomainUser(
            email=email,
            firstname=request.first_name.strip(),
            lastname=request.last_name.strip(),
            role=request.role,
            password_hash=hash_password(request.temporary_password),
            is_active=True,
            must_change_password=True,
        )
        created = self.repo.create(user)
        logger.info(
            "User created by admin",
            extra={"context": {"user_id": created.id, "role": created.role}},
        )
        return UserResponse.from_domain(created)

    def find_all(self) -> List[UserSummaryResponse]:
        """Return every user with a minimal projection.

        Unpaginated; meant for small admin pick lists only.
        """
        users = self.repo.get_all()
        logger.debug("Listed all users", extra={"context": {"count": len(users)}})
        return [UserSummaryResponse.from_domain(u) for u in users]

    def list_users(self, query: UserListQuery) -> PageResponse:
        """Search users by email or name, newest first, one page at a time."""
        query.validate()
        total, users = self.repo.search(q=query.q, offset=query.offset, limit=query.limit)
        return PageResponse(
            total=total,
            offset=query.offset,
            limit=query.limit,
            items=[UserResponse.from_domain(u) for u in users],
        )

    def update_role(self, new_role: str, user_id: str) -> UserRoleResponse:
        """Change a user's role.

        Raises:
            BadRequestError: If the role is unknown or the user is the last active admin
            NotFoundError: If the user does not exist
        """
        if new_role not in ROLES:
            raise BadRequestError(f"Role must be one of: {', '.join(ROLES)}")

        user = self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)

        if guards.demotes_admin(user, new_role):
            active_admins = self.repo.count_active_admins()
            try:
                guards.ensure_admin_remains(active_admins)
            except BadRequestError:
                logger.warning(
                    "Role change rejected: last active admin",
                    extra={"context": {"user_id": user_id, "new_role": new_role}},
                )
                raise

        updated = self.repo.update(dataclasses.replace(user, role=new_role))
        logger.info(
            "User role updated",
            extra={
                "context": {"user_id": user_id, "old_role": user.role, "new_role": new_role}
            },
        )
        return UserRoleResponse(id=updated.id, email=updated.email, role=updated.role)

    def update_status(self, user_id: str, is_active: bool) -> UserStatusResponse:
        """Activate or deactivate a user.

        A missing user is reported as BadRequestError, not NotFoundError.
        """
        if not isinstance(is_active, bool):
            raise BadRequestError("is_active must be a boolean")

        user = self.repo.get_by_id(user_id)
        if user is None:
            raise BadRequestError(USER_NOT_FOUND)

        updated = self.repo.update(dataclasses.replace(user, is_active=is_active))
        logger.info(
            "User status updated",
            extra={"context": {"user_id": user_id, "is_active": is_active}},
        )
        return UserStatusResponse(
            id=updated.id, email=updated.email, is_active=updated.is_active
        )

    def remove_user(self, user_id: str, requesting_user_id: str) -> MessageResponse:
        """Delete a user account.

        Checks run in a fixed order and the first failure wins:
        existence, self-deletion, admin role, doctor with linked records.

        Raises:
            NotFoundError: If the user does not exist
            ForbiddenError: If the user tries to delete their own account
            BadRequestError: If the user is an admin, or a doctor with
                appointments or authored medical records
        """
        user = self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND)

        try:
            guards.ensure_not_self(user_id, requesting_user_id)
            guards.ensure_not_admin(user)
            if user.is_doctor:
                appointments, records = self.repo.count_linked_records(user_id)
                guards.ensure_doctor_unlinked(appointments, records)
        except (BadRequestError, ForbiddenError) as e:
            logger.warning(
                f"User deletion rejected: {e.message}",
                extra={
                    "context": {
                        "user_id": user_id,
                        "requesting_user_id": requesting_user_id,
                        "role": user.role,
                    }
                },
            )
            raise

        self.repo.delete(user_id)
        logger.info(
            "User deleted",
            extra={"context": {"user_id": user_id, "requesting_user_id": requesting_user_id}},
        )
        return MessageResponse(message="User deleted")

    def get_user(self, user_id: str) -> Optional[UserProfileResponse]:
        """Look up a user; returns None when absent instead of raising."""
        user = self.repo.get_by_id(user_id)
        return UserProfileResponse.from_domain(user) if user else None
