"""
Data Transfer Objects (DTOs) and validation schemas.

Following SOLID principles:
- Single Responsibility: Each schema validates one specific data contract
- Open/Closed: Schemas can be extended without modification

Requests raise BadRequestError on malformed input. Responses are the
projections handed back to callers; none of them carries a password hash.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from clinic.core.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from clinic.core.exceptions import BadRequestError
from clinic.domain.entities import GENDERS, ROLES

PATIENT_EDITABLE_FIELDS = (
    "first_name",
    "last_name",
    "gender",
    "phone",
    "email",
    "notes",
)
SORT_OLDEST = "oldest"
SORT_NEWEST = "newest"


def _require_text(value: Any, label: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise BadRequestError(f"{label} is required")


def _require_email(value: Any, label: str = "Email") -> None:
    _require_text(value, label)
    if "@" not in value:
        raise BadRequestError(f"{label} must be a valid email address")


def _parse_int(raw: Any, name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool):
        raise BadRequestError(f"{name} must be an integer")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise BadRequestError(f"{name} must be an integer") from None


def _blank_to_none(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def _check_page(offset: int, limit: int) -> None:
    if offset < 0:
        raise BadRequestError("offset must be greater than or equal to 0")
    if limit < 1 or limit > MAX_PAGE_LIMIT:
        raise BadRequestError(f"limit must be between 1 and {MAX_PAGE_LIMIT}")


# ------------------- Patients -------------------


@dataclass
class PatientCreateRequest:
    """DTO for patient creation requests."""

    first_name: str
    last_name: str
    gender: str
    phone: str
    email: str
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PatientCreateRequest":
        return cls(
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            gender=data.get("gender", ""),
            phone=data.get("phone", ""),
            email=data.get("email", ""),
            notes=data.get("notes"),
        )

    def validate(self) -> None:
        """Validate the request data."""
        _require_text(self.first_name, "First name")
        _require_text(self.last_name, "Last name")
        if self.gender not in GENDERS:
            raise BadRequestError(f"Gender must be one of: {', '.join(GENDERS)}")
        _require_text(self.phone, "Phone")
        _require_email(self.email)
        if self.notes is not None and not isinstance(self.notes, str):
            raise BadRequestError("Notes must be text")


@dataclass
class PatientUpdateRequest:
    """DTO for partial patient updates.

    Only keys present in ``fields`` are applied. A key that is absent leaves
    the stored value untouched; ``notes`` present with ``None`` clears it.
    """

    fields: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PatientUpdateRequest":
        unknown = sorted(set(data) - set(PATIENT_EDITABLE_FIELDS))
        if unknown:
            raise BadRequestError(f"Unknown patient field(s): {', '.join(unknown)}")
        return cls(fields={name: data[name] for name in PATIENT_EDITABLE_FIELDS if name in data})

    def is_present(self, name: str) -> bool:
        return name in self.fields

    def changes(self) -> Dict[str, Any]:
        return dict(self.fields)

    def validate(self) -> None:
        """Validate only the supplied fields."""
        labels = {
            "first_name": "First name",
            "last_name": "Last name",
            "phone": "Phone",
        }
        for name, label in labels.items():
            if self.is_present(name):
                _require_text(self.fields[name], label)
        if self.is_present("gender") and self.fields["gender"] not in GENDERS:
            raise BadRequestError(f"Gender must be one of: {', '.join(GENDERS)}")
        if self.is_present("email"):
            _require_email(self.fields["email"])
        notes = self.fields.get("notes")
        if notes is not None and not isinstance(notes, str):
            raise BadRequestError("Notes must be text")


@dataclass
class PatientListQuery:
    """Query parameters for the paginated patient list."""

    q: Optional[str] = None
    gender: Optional[str] = None
    sort: str = SORT_NEWEST
    offset: int = 0
    limit: int = DEFAULT_PAGE_LIMIT

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "PatientListQuery":
        query = cls(
            q=_blank_to_none(args.get("q")),
            gender=_blank_to_none(args.get("gender")),
            sort=_blank_to_none(args.get("sort")) or SORT_NEWEST,
            offset=_parse_int(args.get("offset"), "offset", 0),
            limit=_parse_int(args.get("limit"), "limit", DEFAULT_PAGE_LIMIT),
        )
        query.validate()
        return query

    @property
    def newest_first(self) -> bool:
        return self.sort != SORT_OLDEST

    def validate(self) -> None:
        if self.gender is not None and self.gender not in GENDERS:
            raise BadRequestError(f"Gender must be one of: {', '.join(GENDERS)}")
        if self.sort not in (SORT_OLDEST, SORT_NEWEST):
            raise BadRequestError("sort must be 'oldest' or 'newest'")
        _check_page(self.offset, self.limit)


@dataclass
class PatientResponse:
    """Full patient projection (no hidden fields on this entity)."""

    id: str
    first_name: str
    last_name: str
    gender: str
    phone: str
    email: str
    notes: Optional[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @classmethod
    def from_domain(cls, patient) -> "PatientResponse":
        """Create response from domain entity."""
        return cls(
            id=patient.id,
            first_name=patient.first_name,
            last_name=patient.last_name,
            gender=patient.gender,
            phone=patient.phone,
            email=patient.email,
            notes=patient.notes,
            created_at=patient.created_at,
            updated_at=patient.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ------------------- Users -------------------


@dataclass
class UserCreateRequest:
    """DTO for admin-created user accounts."""

    email: str
    first_name: str
    last_name: str
    role: str
    temporary_password: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserCreateRequest":
        return cls(
            email=data.get("email", ""),
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            role=data.get("role", ""),
            temporary_password=data.get("temporary_password", ""),
        )

    def validate(self) -> None:
        """Validate the request data."""
        _require_email(self.email)
        _require_text(self.first_name, "First name")
        _require_text(self.last_name, "Last name")
        if self.role not in ROLES:
            raise BadRequestError(f"Role must be one of: {', '.join(ROLES)}")
        if not isinstance(self.temporary_password, str) or len(self.temporary_password) < 8:
            raise BadRequestError("Temporary password must be at least 8 characters")


@dataclass
class UserListQuery:
    """Query parameters for the paginated user list (always newest first)."""

    q: Optional[str] = None
    offset: int = 0
    limit: int = DEFAULT_PAGE_LIMIT

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "UserListQuery":
        query = cls(
            q=_blank_to_none(args.get("q")),
            offset=_parse_int(args.get("offset"), "offset", 0),
            limit=_parse_int(args.get("limit"), "limit", DEFAULT_PAGE_LIMIT),
        )
        query.validate()
        return query

    def validate(self) -> None:
        _check_page(self.offset, self.limit)


@dataclass
class UserResponse:
    """User projection returned from creation and listing."""

    id: str
    email: str
    firstname: str
    lastname: str
    role: str
    is_active: bool
    created_at: Optional[datetime]

    @classmethod
    def from_domain(cls, user) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            firstname=user.firstname,
            lastname=user.lastname,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UserSummaryResponse:
    """Minimal projection used by the unpaginated user listing."""

    id: str
    email: str
    role: str
    created_at: Optional[datetime]

    @classmethod
    def from_domain(cls, user) -> "UserSummaryResponse":
        return cls(
            id=user.id, email=user.email, role=user.role, created_at=user.created_at
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UserProfileResponse:
    """Projection returned by a single-user lookup."""

    id: str
    firstname: str
    lastname: str
    email: str
    role: str
    created_at: Optional[datetime]

    @classmethod
    def from_domain(cls, user) -> "UserProfileResponse":
        return cls(
            id=user.id,
            firstname=user.firstname,
            lastname=user.lastname,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UserRoleResponse:
    id: str
    email: str
    role: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class UserStatusResponse:
    id: str
    email: str
    is_active: bool

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ------------------- Shared -------------------


@dataclass
class PageResponse:
    """One page of a filtered listing plus the total match count."""

    total: int
    offset: int
    limit: int
    items: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "offset": self.offset,
            "limit": self.limit,
            "items": [item.to_dict() for item in self.items],
        }


@dataclass
class MessageResponse:
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
