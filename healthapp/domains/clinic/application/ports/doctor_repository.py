"""
Doctor and Schedule Repository Interfaces
"""

from typing import Protocol, runtime_checkable

from healthapp.domains.clinic.domain.entities.doctor import Doctor, Schedule


@runtime_checkable
class IDoctorRepository(Protocol):
    """
    Interface for doctor repository.

    Defines the contract for doctor data access.
    """

    async def find_by_id(self, doctor_id: int) -> Doctor | None:
        """Find doctor by ID."""
        ...

    async def find_by_user_id(self, user_id: str) -> Doctor | None:
        """Find the doctor profile linked to a user account."""
        ...

    async def find_all(self, active_only: bool = True) -> list[Doctor]:
        """List doctors ordered by last name."""
        ...

    async def find_by_specialization(self, specialization: str, active_only: bool = True) -> list[Doctor]:
        """Doctors whose specialization matches, ignoring case."""
        ...

    async def save(self, doctor: Doctor) -> Doctor:
        """Insert or update a doctor."""
        ...


@runtime_checkable
class IScheduleRepository(Protocol):
    """Interface for doctor weekly schedule windows."""

    async def find_by_doctor(self, doctor_id: int) -> list[Schedule]:
        """All windows of a doctor ordered by weekday and start time."""
        ...

    async def find_by_id(self, schedule_id: int) -> Schedule | None:
        ...

    async def save(self, schedule: Schedule) -> Schedule:
        ...

    async def delete(self, schedule_id: int) -> bool:
        """Remove a window; False if it does not exist."""
        ...
