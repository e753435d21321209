"""
Guard predicates for user lifecycle mutations.

Each guard looks only at values already read from the store and raises the
matching domain error when the mutation must not proceed. They never touch
the store themselves, so the services call them strictly before any write.
"""

from clinic.core.exceptions import BadRequestError, ForbiddenError
from clinic.domain.entities import ROLE_ADMIN, User

LAST_ADMIN_MESSAGE = "At least one active admin must remain"
SELF_DELETE_MESSAGE = "You cannot delete your own account"
DOCTOR_LINKED_MESSAGE = (
    "Doctor has related appointments/records. Reassign or archive before deletion."
)


def demotes_admin(user: User, new_role: str) -> bool:
    """True when the change takes the admin role away from ``user``."""
    return user.is_admin and new_role != ROLE_ADMIN


def ensure_admin_remains(active_admins: int) -> None:
    """Reject demoting an admin when it is the last active one."""
    if active_admins <= 1:
        raise BadRequestError(LAST_ADMIN_MESSAGE)


def ensure_not_self(target_id: str, requesting_user_id: str) -> None:
    if target_id == requesting_user_id:
        raise ForbiddenError(SELF_DELETE_MESSAGE)


def ensure_not_admin(user: User) -> None:
    # Admin accounts are never deleted through this path, last one or not.
    if user.is_admin:
        raise BadRequestError(LAST_ADMIN_MESSAGE)


def ensure_doctor_unlinked(appointments: int, records: int) -> None:
    if appointments > 0 or records > 0:
        raise BadRequestError(DOCTOR_LINKED_MESSAGE)
