"""
Prescription Repository Interface
"""

from typing import Protocol, runtime_checkable

from healthapp.domains.clinic.domain.entities.prescription import Prescription


@runtime_checkable
class IPrescriptionRepository(Protocol):
    """Interface for prescription repository."""

    async def find_by_id(self, prescription_id: int) -> Prescription | None:
        """Find prescription by ID."""
        ...

    async def find_by_patient(self, patient_id: int) -> list[Prescription]:
        """Prescriptions of a patient, newest first."""
        ...

    async def find_all(self) -> list[Prescription]:
        """Every prescription, newest first."""
        ...

    async def find_by_doctor(self, doctor_id: int) -> list[Prescription]:
        """Prescriptions written by a doctor, newest first."""
        ...

    async def find_by_appointment(self, appointment_id: int) -> Prescription | None:
        """The prescription originally issued for an appointment (renewals excluded)."""
        ...

    async def has_renewal(self, prescription_id: int) -> bool:
        """True if some prescription was renewed from this one."""
        ...

    async def save(self, prescription: Prescription) -> Prescription:
        """Insert or update a prescription."""
        ...

    async def delete(self, prescription_id: int) -> bool:
        """Remove a prescription; False if it does not exist."""
        ...
