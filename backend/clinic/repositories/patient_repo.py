"""Patient repository implementation following SOLID principles.

Maps between Patient domain entities and the ``patients`` table and builds
the search query used by the paginated patient list.
"""

from typing import List, Optional, Tuple

from sqlalchemy import or_

from clinic.db.base import Patient as DbPatient
from clinic.db.session import atomic
from clinic.domain.entities import Patient as DomainPatient
from clinic.domain.interfaces import IPatientRepository

EDITABLE_FIELDS = ("first_name", "last_name", "gender", "phone", "email", "notes")


class PatientRepository(IPatientRepository):
    """Repository for Patient persistence operations."""

    def __init__(self, db_session) -> None:
        self.db = db_session

    def get_by_id(self, patient_id: str) -> Optional[DomainPatient]:
        db_patient = self.db.query(DbPatient).filter_by(id=patient_id).first()
        return self._to_domain(db_patient) if db_patient else None

    def search(
        self,
        q: Optional[str],
        gender: Optional[str],
        newest_first: bool,
        offset: int,
        limit: int,
    ) -> Tuple[int, List[DomainPatient]]:
        query = self.db.query(DbPatient)
        if q:
            query = query.filter(
                or_(
                    DbPatient.first_name.icontains(q, autoescape=True),
                    DbPatient.last_name.icontains(q, autoescape=True),
                    DbPatient.phone.icontains(q, autoescape=True),
                    DbPatient.email.icontains(q, autoescape=True),
                )
            )
        if gender:
            query = query.filter(DbPatient.gender == gender)

        if newest_first:
            ordering = (DbPatient.created_at.desc(), DbPatient.id.desc())
        else:
            ordering = (DbPatient.created_at.asc(), DbPatient.id.asc())

        with atomic(self.db):
            total = query.count()
            rows = query.order_by(*ordering).offset(offset).limit(limit).all()

        return total, [self._to_domain(row) for row in rows]

    def create(self, patient: DomainPatient) -> DomainPatient:
        db_patient = DbPatient()
        for field in EDITABLE_FIELDS:
            setattr(db_patient, field, getattr(patient, field))

        self.db.add(db_patient)
        self.db.commit()
        self.db.refresh(db_patient)
        return self._to_domain(db_patient)

    def update(self, patient: DomainPatient) -> DomainPatient:
        if not patient.id:
            raise ValueError("Patient ID is required for update")

        db_patient = self.db.query(DbPatient).filter_by(id=patient.id).first()
        if not db_patient:
            raise ValueError(f"Patient with ID {patient.id} not found")

        for field in EDITABLE_FIELDS:
            setattr(db_patient, field, getattr(patient, field))

        self.db.add(db_patient)
        self.db.commit()
        self.db.refresh(db_patient)
        return self._to_domain(db_patient)

    def delete(self, patient_id: str) -> bool:
        db_patient = self.db.query(DbPatient).filter_by(id=patient_id).first()
        if not db_patient:
            return False
        self.db.delete(db_patient)
        self.db.commit()
        return True

    def _to_domain(self, db_patient: DbPatient) -> DomainPatient:
        """Convert database model to domain entity."""
        return DomainPatient(
            id=db_patient.id,
            first_name=db_patient.first_name,
            last_name=db_patient.last_name,
            gender=db_patient.gender,
            phone=db_patient.phone,
            email=db_patient.email,
            notes=db_patient.notes,
            created_at=db_patient.created_at,
            updated_at=db_patient.updated_at,
        )
