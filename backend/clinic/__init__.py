"""Clinic directory backend: patient and staff user management."""

__version__ = "0.1.0"
