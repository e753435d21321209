# Services package initialization
# This file makes the services directory a Python package
# and allows importing service modules

from . import patient_service, user_service

__all__ = [
    "patient_service",
    "user_service",
]
