"""
Clinic Domain Value Objects

Status enums and role tags for the clinic domain.
"""

from healthapp.core.domain import StatusEnum


class AppointmentStatus(StatusEnum):
    """
    Appointment lifecycle states.

    Valid transitions:
    - PENDING -> APPROVED, REJECTED, CANCELLED, RESCHEDULED
    - APPROVED -> COMPLETED, CANCELLED, RESCHEDULED
    - RESCHEDULED -> APPROVED, REJECTED, CANCELLED, RESCHEDULED
    - REJECTED, COMPLETED, CANCELLED -> (terminal)
    """

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    RESCHEDULED = "Rescheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        """Check if transition to new status is valid."""
        return new_status in _APPOINTMENT_TRANSITIONS[self]

    def is_terminal(self) -> bool:
        """Check if this is a terminal state."""
        return not _APPOINTMENT_TRANSITIONS[self]

    def is_active(self) -> bool:
        """Check if the appointment is still expected to take place."""
        return self in (AppointmentStatus.PENDING, AppointmentStatus.APPROVED, AppointmentStatus.RESCHEDULED)

    def occupies_slot(self) -> bool:
        """Only cancelled appointments release their time slot."""
        return self is not AppointmentStatus.CANCELLED


_APPOINTMENT_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.PENDING: frozenset(
        {
            AppointmentStatus.APPROVED,
            AppointmentStatus.REJECTED,
            AppointmentStatus.CANCELLED,
            AppointmentStatus.RESCHEDULED,
        }
    ),
    AppointmentStatus.APPROVED: frozenset(
        {
            AppointmentStatus.COMPLETED,
            AppointmentStatus.CANCELLED,
            AppointmentStatus.RESCHEDULED,
        }
    ),
    AppointmentStatus.RESCHEDULED: frozenset(
        {
            AppointmentStatus.APPROVED,
            AppointmentStatus.REJECTED,
            AppointmentStatus.CANCELLED,
            AppointmentStatus.RESCHEDULED,
        }
    ),
    AppointmentStatus.REJECTED: frozenset(),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
}


class RenewalStatus(StatusEnum):
    """
    Prescription renewal workflow.

    NONE -> REQUESTED -> APPROVED | REJECTED
    """

    NONE = "None"
    REQUESTED = "Requested"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class NotificationType(StatusEnum):
    """Type tag stored on each notification row and published on the bus."""

    CONFIRMATION = "AppointmentConfirmation"
    REMINDER = "Reminder"
    CANCELLATION = "Cancellation"
    APPROVAL = "Approval"
    REJECTION = "Rejection"
    RESCHEDULE = "Reschedule"
    COMPLETION = "Completion"
    PRESCRIPTION = "Prescription"
    RENEWAL_REQUEST = "PrescriptionRenewal"
    RENEWAL_APPROVED = "RenewalApproved"
    RENEWAL_REJECTED = "RenewalRejected"
    SYSTEM = "System"


class UserRole(StatusEnum):
    """Roles asserted by the upstream identity provider."""

    ADMIN = "admin"
    DOCTOR = "doctor"
    PATIENT = "patient"
