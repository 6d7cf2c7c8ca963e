"""
Patient Repository Interface
"""

from typing import Protocol, runtime_checkable

from healthapp.domains.clinic.domain.entities.patient import Patient


@runtime_checkable
class IPatientRepository(Protocol):
    """Interface for patient repository."""

    async def find_by_id(self, patient_id: int) -> Patient | None:
        """Find patient by ID."""
        ...

    async def find_by_user_id(self, user_id: str) -> Patient | None:
        """Find the patient profile linked to a user account."""
        ...

    async def find_all(self) -> list[Patient]:
        """List patients ordered by last name."""
        ...

    async def save(self, patient: Patient) -> Patient:
        """Insert or update a patient."""
        ...
