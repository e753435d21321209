from .patient_repo import PatientRepository
from .user_repo import UserRepository

__all__ = ["PatientRepository", "UserRepository"]
