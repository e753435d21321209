# Core package initialization
# This file makes the core directory a Python package
# and allows importing core modules

from . import config, exceptions, logging_config, security

__all__ = [
    "config",
    "exceptions",
    "logging_config",
    "security",
]
