"""
Centralized configuration module for application-wide settings.

Values are read from the environment once, at import time. A local ``.env``
file is loaded only when ``DATABASE_URL`` is not already defined, so tests and
containers can override everything through real environment variables.
"""

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

if not os.getenv("DATABASE_URL"):
    load_dotenv()


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    """Read an integer env var, falling back to ``default`` on bad input."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(
            f"Invalid integer '{raw}' in {name}. Falling back to {default}.",
            extra={"context": {"env_var": name, "value": raw}},
        )
        return default
    if value < minimum:
        logger.warning(
            f"{name}={value} is below the minimum {minimum}. Falling back to {default}.",
            extra={"context": {"env_var": name, "value": value}},
        )
        return default
    return value


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("true", "1", "yes")


# ===========================
# Database Configuration
# ===========================


def get_database_url() -> str:
    """
    Get the database URL.

    Environment Variables:
        DATABASE_URL: SQLAlchemy URL
            Default: 'sqlite:///./clinic.db'
            Tests: 'sqlite:///:memory:'
            Production: 'postgresql+psycopg2://...'
    """
    return os.getenv("DATABASE_URL", "sqlite:///./clinic.db")


# ===========================
# Password Hashing Configuration
# ===========================


def get_bcrypt_rounds() -> int:
    """
    Get the bcrypt work factor used for new password hashes.

    Environment Variables:
        BCRYPT_ROUNDS: log2 cost factor (4..31)
            Default: 10
    """
    rounds = _env_int("BCRYPT_ROUNDS", 10, minimum=4)
    if rounds > 31:
        logger.warning(
            "BCRYPT_ROUNDS above 31 is not supported by bcrypt. Using 10.",
            extra={"context": {"value": rounds}},
        )
        return 10
    return rounds


BCRYPT_ROUNDS = get_bcrypt_rounds()


# ===========================
# Pagination Configuration
# ===========================

DEFAULT_PAGE_LIMIT = _env_int("DEFAULT_PAGE_LIMIT", 20, minimum=1)
MAX_PAGE_LIMIT = max(_env_int("MAX_PAGE_LIMIT", 100, minimum=1), DEFAULT_PAGE_LIMIT)


# ===========================
# Logging Configuration
# ===========================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_JSON = _env_flag("LOG_JSON")
LOG_TO_FILE = _env_flag("LOG_TO_FILE")
SQL_ECHO = _env_flag("SQL_ECHO")


# ===========================
# Bootstrap Configuration
# ===========================


def get_admin_email() -> str | None:
    """
    Get the email of the bootstrap admin account.

    Environment Variables:
        ADMIN_EMAIL: email used by ``manage.py ensure-admin`` when no
            ``--email`` option is given.
    """
    email = os.getenv("ADMIN_EMAIL", "").strip()
    return email or None


def log_config() -> None:
    """
    Log the active configuration.

    Should be called during startup to provide visibility into the settings
    in use (without exposing the database credentials).
    """
    logger.info(
        "Configuration initialized",
        extra={
            "context": {
                "database_backend": get_database_url().split(":", 1)[0],
                "bcrypt_rounds": BCRYPT_ROUNDS,
                "default_page_limit": DEFAULT_PAGE_LIMIT,
                "max_page_limit": MAX_PAGE_LIMIT,
                "log_level": LOG_LEVEL,
            }
        },
    )
