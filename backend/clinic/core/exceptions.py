"""
Custom exceptions for the application.
Following SOLID principles - centralized error handling.

Services raise these; whatever transport wraps the services translates
``status_code`` into its own protocol-level response.
"""


class ClinicError(Exception):
    """Base class for locally-detected business failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message}


class NotFoundError(ClinicError):
    """Raised when a key-based lookup finds no entity."""

    status_code = 404


class ConflictError(ClinicError):
    """Raised on a uniqueness violation (e.g. duplicate email)."""

    status_code = 409


class BadRequestError(ClinicError):
    """Raised when a business rule or input precondition is violated."""

    status_code = 400


class ForbiddenError(ClinicError):
    """Raised for authorization-shaped rules such as self-deletion."""

    status_code = 403
