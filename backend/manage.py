"""Management commands for the clinic backend."""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional

import click

from clinic.core import config
from clinic.core.exceptions import ClinicError
from clinic.core.logging_config import setup_logging
from clinic.db.session import SessionLocal, create_tables
from clinic.domain.entities import ROLE_ADMIN
from clinic.repositories.user_repo import UserRepository
from clinic.schemas.dtos import UserCreateRequest
from clinic.services.user_service import UserService

logger = logging.getLogger("clinic.manage")


@click.group()
def cli() -> None:
    """Entry point for management commands."""
    setup_logging(
        log_level=config.LOG_LEVEL,
        enable_sql_echo=config.SQL_ECHO,
        log_to_file=config.LOG_TO_FILE,
        use_json_format=config.LOG_JSON,
    )
    config.log_config()


@cli.command("init-db")
def init_db() -> None:
    """Create all tables in the configured database."""
    create_tables()
    logger.info("Database tables created")


@cli.command("ensure-admin")
@click.option(
    "--email",
    "email_override",
    default=None,
    help="Admin email. Overrides ADMIN_EMAIL environment variable.",
)
@click.option("--password", default=None, help="Temporary password for a new admin.")
@click.option("--first-name", default="Clinic", show_default=True)
@click.option("--last-name", default="Admin", show_default=True)
def ensure_admin(
    email_override: Optional[str],
    password: Optional[str],
    first_name: str,
    last_name: str,
) -> None:
    """Ensure at least one active admin exists.

    No-op when an active admin is present. Otherwise an existing user with
    the email is promoted and reactivated, or a new admin account is created
    with a temporary password that must be changed on first login.
    """
    target_email = email_override or config.get_admin_email()
    if not target_email:
        raise click.ClickException(
            "ADMIN_EMAIL environment variable is not set and no --email provided."
        )

    create_tables()
    session = SessionLocal()
    try:
        repo = UserRepository(session)
        service = UserService(repo)

        if repo.count_active_admins() > 0:
            logger.info("Active admin already present; no changes made.")
            return

        user = repo.get_by_email(target_email)
        if user is not None:
            repo.update(dataclasses.replace(user, role=ROLE_ADMIN, is_active=True))
            logger.info(
                "Promoted existing user to active admin",
                extra={"context": {"user_id": user.id}},
            )
            return

        if not password:
            password = click.prompt(
                "Temporary password", hide_input=True, confirmation_prompt=True
            )
        created = service.create_by_admin(
            UserCreateRequest(
                email=target_email,
                first_name=first_name,
                last_name=last_name,
                role=ROLE_ADMIN,
                temporary_password=password,
            )
        )
        logger.info("Created admin account", extra={"context": {"user_id": created.id}})
    except ClinicError as e:
        session.rollback()
        raise click.ClickException(e.message) from e
    finally:
        session.close()


if __name__ == "__main__":
    cli()
