"""
Patient service for business logic following SOLID principles.

This service:
- Keeps business rules separate from transports and repositories (Single Responsibility)
- Depends on abstractions (IPatientRepository) not concrete implementations (Dependency Inversion)
- Returns response projections, never database models
"""

import dataclasses
import logging

from clinic.core.exceptions import NotFoundError
from clinic.domain.entities import Patient as DomainPatient
from clinic.domain.interfaces import IPatientRepository
from clinic.schemas.dtos import (
    MessageResponse,
    PageResponse,
    PatientCreateRequest,
    PatientListQuery,
    PatientResponse,
    PatientUpdateRequest,
)

logger = logging.getLogger(__name__)

PATIENT_NOT_FOUND = "Patient not found"


class PatientService:
    """Application service for patient CRUD and search."""

    def __init__(self, repo: IPatientRepository) -> None:
        self.repo = repo

    def create_patient(self, request: PatientCreateRequest) -> PatientResponse:
        """Create a patient; id and timestamps are assigned by the store.

        Field values are stored exactly as supplied.
        """
        request.validate()
        patient = DomainPatient(
            first_name=request.first_name,
            last_name=request.last_name,
            gender=request.gender,
            phone=request.phone,
            email=request.email,
            notes=request.notes,
        )
        created = self.repo.create(patient)
        logger.info("Patient created", extra={"context": {"patient_id": created.id}})
        return PatientResponse.from_domain(created)

    def list_patients(self, query: PatientListQuery) -> PageResponse:
        """Search patients and return one page plus the total match count.

        Business Rules:
        - ``q`` matches first name, last name, phone or email (case-insensitive substring)
        - ``gender`` narrows the result to an exact match
        - Newest first unless ``sort`` is 'oldest'
        """
        query.validate()
        total, patients = self.repo.search(
            q=query.q,
            gender=query.gender,
            newest_first=query.newest_first,
            offset=query.offset,
            limit=query.limit,
        )
        return PageResponse(
            total=total,
            offset=query.offset,
            limit=query.limit,
            items=[PatientResponse.from_domain(p) for p in patients],
        )

    def get_patient(self, patient_id: str) -> PatientResponse:
        return PatientResponse.from_domain(self._require(patient_id))

    def update_patient(
        self, patient_id: str, request: PatientUpdateRequest
    ) -> PatientResponse:
        """Apply the supplied fields to an existing patient.

        Fields the caller did not send keep their stored values.

        Raises:
            NotFoundError: If the patient does not exist
            BadRequestError: If a supplied field is invalid
        """
        request.validate()
        existing = self._require(patient_id)

        changes = request.changes()
        if not changes:
            return PatientResponse.from_domain(existing)

        updated = self.repo.update(dataclasses.replace(existing, **changes))
        logger.info(
            "Patient updated",
            extra={"context": {"patient_id": patient_id, "fields": sorted(changes)}},
        )
        return PatientResponse.from_domain(updated)

    def remove_patient(self, patient_id: str) -> MessageResponse:
        self._require(patient_id)
        self.repo.delete(patient_id)
        logger.info("Patient deleted", extra={"context": {"patient_id": patient_id}})
        return MessageResponse(message="Patient deleted")

    def _require(self, patient_id: str) -> DomainPatient:
        patient = self.repo.get_by_id(patient_id)
        if patient is None:
            logger.warning(
                "Patient lookup failed", extra={"context": {"patient_id": patient_id}}
            )
            raise NotFoundError(PATIENT_NOT_FOUND)
        return patient
