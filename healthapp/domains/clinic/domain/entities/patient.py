"""
Patient Entity
"""

from dataclasses import dataclass
from datetime import date

from healthapp.core.domain import Entity


@dataclass
class Patient(Entity[int]):
    """Patient profile, linked one-to-one to a user account."""

    user_id: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    phone: str | None = None
    date_of_birth: date | None = None
    address: str | None = None
    blood_type: str | None = None
    allergies: str | None = None
    medical_history: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def age_on(self, day: date) -> int | None:
        if self.date_of_birth is None:
            return None
        years = day.year - self.date_of_birth.year
        if (day.month, day.day) < (self.date_of_birth.month, self.date_of_birth.day):
            years -= 1
        return years
