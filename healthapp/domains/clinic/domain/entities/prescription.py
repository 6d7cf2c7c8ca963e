"""
Prescription Entity

Holds the medication order and the renewal workflow. A renewal never
mutates the original medication fields: it produces a new prescription
linked through renewed_from_id.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from healthapp.core.domain import (
    AggregateRoot,
    BusinessRuleViolationException,
    InvalidOperationException,
)

from ..value_objects import RenewalStatus


@dataclass
class Prescription(AggregateRoot[int]):
    """
    Prescription aggregate root.

    Renewal workflow:
    - request_renewal: NONE -> REQUESTED
    - approve_renewal / reject_renewal: REQUESTED -> APPROVED | REJECTED
    - renew: clone with one refill fewer
    """

    appointment_id: int | None = None
    doctor_id: int = 0
    patient_id: int = 0

    medication: str = ""
    dosage: str = ""
    frequency: str = ""
    duration_days: int | None = None
    instructions: str | None = None
    notes: str | None = None

    allow_refills: bool = False
    refills_allowed: int = 0

    prescribed_at: datetime | None = None
    expires_at: datetime | None = None

    renewal_status: RenewalStatus = RenewalStatus.NONE
    renewal_note: str | None = None
    renewed_from_id: int | None = None

    def __post_init__(self):
        if self.refills_allowed < 0:
            raise BusinessRuleViolationException(
                rule="refills_non_negative", message="refills_allowed cannot be negative"
            )
        if self.prescribed_at and self.expires_at is None and self.duration_days:
            self.expires_at = self.prescribed_at + timedelta(days=self.duration_days)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at < now

    # Renewal workflow

    def request_renewal(self) -> None:
        if self.renewal_status is not RenewalStatus.NONE:
            raise InvalidOperationException(
                operation="request_renewal",
                current_state=self.renewal_status.value,
                message="A renewal has already been requested or processed for this prescription",
            )
        self.renewal_status = RenewalStatus.REQUESTED
        self.increment_version()
        self.touch()

    def _ensure_renewal_requested(self, operation: str) -> None:
        if self.renewal_status is not RenewalStatus.REQUESTED:
            raise InvalidOperationException(operation=operation, current_state=self.renewal_status.value)

    def approve_renewal(self, note: str | None = None) -> None:
        self._ensure_renewal_requested("approve_renewal")
        self.ensure_renewable()
        self.renewal_status = RenewalStatus.APPROVED
        self.renewal_note = note
        self.increment_version()
        self.touch()

    def reject_renewal(self, note: str | None = None) -> None:
        self._ensure_renewal_requested("reject_renewal")
        self.renewal_status = RenewalStatus.REJECTED
        self.renewal_note = note
        self.increment_version()
        self.touch()

    # Refills

    def can_be_renewed(self) -> bool:
        return self.allow_refills and self.refills_allowed > 0

    def ensure_renewable(self) -> None:
        if not self.allow_refills:
            raise BusinessRuleViolationException(
                rule="refills_not_allowed",
                message="This prescription does not allow refills",
                details={"prescription_id": self.id},
            )
        if self.refills_allowed <= 0:
            raise BusinessRuleViolationException(
                rule="no_refills_left",
                message="No refills remaining on this prescription",
                details={"prescription_id": self.id},
            )

    def renew(self, now: datetime) -> "Prescription":
        """
        Build the renewed prescription.

        The clone copies the medication order, starts a new period at now
        and carries one refill fewer. The caller persists it; this
        instance is left untouched.

        Raises:
            BusinessRuleViolationException: Refills disallowed or exhausted
        """
        self.ensure_renewable()
        return Prescription(
            appointment_id=self.appointment_id,
            doctor_id=self.doctor_id,
            patient_id=self.patient_id,
            medication=self.medication,
            dosage=self.dosage,
            frequency=self.frequency,
            duration_days=self.duration_days,
            instructions=self.instructions,
            allow_refills=self.allow_refills,
            refills_allowed=self.refills_allowed - 1,
            prescribed_at=now,
            renewed_from_id=self.id,
        )
