"""
Appointment Repository Interface

Defines the contract for appointment data access.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from healthapp.domains.clinic.domain.entities.appointment import Appointment


@runtime_checkable
class IAppointmentRepository(Protocol):
    """
    Interface for appointment repository.

    Soft-deleted appointments are never returned.
    """

    async def find_by_id(self, appointment_id: int) -> Appointment | None:
        """Find appointment by ID."""
        ...

    async def find_by_doctor_between(
        self,
        doctor_id: int,
        start: datetime,
        end: datetime,
    ) -> list[Appointment]:
        """
        Find a doctor's appointments overlapping [start, end), any status.

        Args:
            doctor_id: Doctor ID
            start: Range start
            end: Range end (exclusive)

        Returns:
            Appointments ordered by start time
        """
        ...

    async def find_by_doctor(self, doctor_id: int) -> list[Appointment]:
        """Find all appointments of a doctor ordered by start time."""
        ...

    async def find_by_patient(self, patient_id: int) -> list[Appointment]:
        """Find all appointments of a patient ordered by start time."""
        ...

    async def find_all(self) -> list[Appointment]:
        """Find every appointment ordered by start time."""
        ...

    async def find_due_for_reminder(self, start: datetime, end: datetime) -> list[Appointment]:
        """Find active, not yet reminded appointments starting within [start, end]."""
        ...

    async def save(self, appointment: Appointment) -> Appointment:
        """Insert or update an appointment."""
        ...

    async def delete(self, appointment_id: int) -> bool:
        """Soft-delete an appointment; False if it does not exist."""
        ...
