"""
Schemas package - Data Transfer Objects and validation.

This package contains the request and response contracts of the
patient and user directories.
"""

from .dtos import (
    MessageResponse,
    PageResponse,
    PatientCreateRequest,
    PatientListQuery,
    PatientResponse,
    PatientUpdateRequest,
    UserCreateRequest,
    UserListQuery,
    UserProfileResponse,
    UserResponse,
    UserRoleResponse,
    UserStatusResponse,
    UserSummaryResponse,
)

__all__ = [
    "MessageResponse",
    "PageResponse",
    "PatientCreateRequest",
    "PatientListQuery",
    "PatientResponse",
    "PatientUpdateRequest",
    "UserCreateRequest",
    "UserListQuery",
    "UserProfileResponse",
    "UserResponse",
    "UserRoleResponse",
    "UserStatusResponse",
    "UserSummaryResponse",
]
