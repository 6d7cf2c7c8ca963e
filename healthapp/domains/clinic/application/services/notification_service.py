"""
Notification Service

Application service turning clinic events into per-user notification rows
and bus messages. The row is written first and is the source of truth;
publishing is best-effort and never fails the caller.
"""

import json
from typing import Awaitable

from healthapp.core.domain import EntityNotFoundException
from healthapp.core.shared.logger import get_service_logger
from healthapp.domains.clinic.application.ports import (
    IDoctorRepository,
    IEventBus,
    INotificationRepository,
    IPatientRepository,
)
from healthapp.domains.clinic.domain.entities import Appointment, Doctor, Notification, Patient, Prescription
from healthapp.domains.clinic.domain.value_objects import NotificationType

from .formatting import long_datetime

logger = get_service_logger("notification")


class NotificationService:
    """
    Creates notifications for appointment and prescription events.

    Each send_* method maps one clinic event to exactly one notify() call.
    """

    def __init__(
        self,
        notification_repository: INotificationRepository,
        event_bus: IEventBus,
        patient_repository: IPatientRepository,
        doctor_repository: IDoctorRepository,
        channel: str = "notifications",
    ):
        self.notification_repo = notification_repository
        self.event_bus = event_bus
        self.patient_repo = patient_repository
        self.doctor_repo = doctor_repository
        self.channel = channel

    async def notify(
        self,
        user_id: str,
        message: str,
        notification_type: NotificationType,
        related_entity_id: int | None = None,
    ) -> Notification:
        """
        Persist a notification and publish it.

        Args:
            user_id: Recipient account
            message: Text shown to the user
            notification_type: Event tag
            related_entity_id: Appointment or prescription the event refers to

        Returns:
            The stored notification
        """
        notification = await self.notification_repo.save(
            Notification(
                user_id=user_id,
                message=message,
                notification_type=notification_type,
                related_entity_id=related_entity_id,
            )
        )
        await self._publish(notification)
        return notification

    async def deliver(self, pending: Awaitable[Notification]) -> Notification | None:
        """
        Await a send_* call after the triggering change is committed.

        Failures are logged and swallowed so the committed change stands.
        """
        try:
            return await pending
        except Exception as e:
            logger.exception(f"Notification dispatch failed: {e}")
            return None

    async def _publish(self, notification: Notification) -> None:
        try:
            await self.event_bus.publish(self.channel, json.dumps(notification.to_event_payload()))
        except Exception as e:
            logger.error(
                f"Failed to publish notification {notification.id}: {e}",
                notification_type=notification.notification_type.value,
                user_id=notification.user_id,
            )

    # ==================== APPOINTMENT EVENTS ====================

    async def send_appointment_confirmation(self, appointment: Appointment) -> Notification:
        patient, doctor = await self._parties(appointment.patient_id, appointment.doctor_id)
        message = (
            f"Your appointment with {doctor.display_name} is booked for "
            f"{long_datetime(appointment.time_range.start)} and is awaiting approval."
        )
        return await self.notify(patient.user_id, message, NotificationType.CONFIRMATION, appointment.id)

    async def send_appointment_reminder(self, appointment: Appointment) -> Notification:
        patient, doctor = await self._parties(appointment.patient_id, appointment.doctor_id)
        message = (
            f"Reminder: You have an appointment with {doctor.display_name} "
            f"on {long_datetime(appointment.time_range.start)}."
        )
        return await self.notify(patient.user_id, message, NotificationType.REMINDER, appointment.id)

    async def send_appointment_cancellation(self, appointment: Appointment) -> Notification:
        patient, doctor = await self._parties(appointment.patient_id, appointment.doctor_id)
        message = (
            f"Your appointment with {doctor.display_name} "
            f"on {long_datetime(appointment.time_range.start)} has been cancelled."
        )
        if appointment.cancellation_reason:
            message += f" Reason: {appointment.cancellation_reason}"
        return await self.notify(patient.user_id, message, NotificationType.CANCELLATION, appointment.id)

    async def send_appointment_approval(self, appointment: Appointment) -> Notification:
        patient, doctor = await self._parties(appointment.patient_id, appointment.doctor_id)
        message = (
            f"Your appointment with {doctor.display_name} "
            f"on {long_datetime(appointment.time_range.start)} has been approved."
        )
        return await self.notify(patient.user_id, message, NotificationType.APPROVAL, appointment.id)

    async def send_appointment_rejection(self, appointment: Appointment) -> Notification:
        patient, doctor = await self._parties(appointment.patient_id, appointment.doctor_id)
        message = (
            f"Your appointment with {doctor.display_name} "
            f"on {long_datetime(appointment.time_range.start)} has been rejected. "
            f"Reason: {appointment.cancellation_reason or 'not specified'}"
        )
        return await self.notify(patient.user_id, message, NotificationType.REJECTION, appointment.id)

    async def send_appointment_reschedule(self, appointment: Appointment) -> Notification:
        patient, doctor = await self._parties(appointment.patient_id, appointment.doctor_id)
        message = (
            f"Your appointment with {doctor.display_name} "
            f"has been rescheduled to {long_datetime(appointment.time_range.start)}."
        )
        return await self.notify(patient.user_id, message, NotificationType.RESCHEDULE, appointment.id)

    async def send_appointment_completion(self, appointment: Appointment) -> Notification:
        patient, doctor = await self._parties(appointment.patient_id, appointment.doctor_id)
        message = (
            f"Your appointment with {doctor.display_name} "
            f"on {long_datetime(appointment.time_range.start)} has been marked as completed."
        )
        return await self.notify(patient.user_id, message, NotificationType.COMPLETION, appointment.id)

    # ==================== PRESCRIPTION EVENTS ====================

    async def send_prescription_issued(self, prescription: Prescription) -> Notification:
        patient, doctor = await self._parties(prescription.patient_id, prescription.doctor_id)
        message = f"You have a new prescription from {doctor.display_name} for {prescription.medication}."
        return await self.notify(patient.user_id, message, NotificationType.PRESCRIPTION, prescription.id)

    async def send_renewal_requested(self, prescription: Prescription) -> Notification:
        patient, doctor = await self._parties(prescription.patient_id, prescription.doctor_id)
        message = f"{patient.full_name} requested a renewal of {prescription.medication}."
        return await self.notify(doctor.user_id, message, NotificationType.RENEWAL_REQUEST, prescription.id)

    async def send_renewal_approved(self, prescription: Prescription, renewed: Prescription) -> Notification:
        patient, doctor = await self._parties(prescription.patient_id, prescription.doctor_id)
        message = f"{doctor.display_name} approved the renewal of {prescription.medication}."
        if prescription.renewal_note:
            message += f" Note: {prescription.renewal_note}"
        return await self.notify(patient.user_id, message, NotificationType.RENEWAL_APPROVED, renewed.id)

    async def send_renewal_rejected(self, prescription: Prescription) -> Notification:
        patient, doctor = await self._parties(prescription.patient_id, prescription.doctor_id)
        message = f"{doctor.display_name} declined the renewal of {prescription.medication}."
        if prescription.renewal_note:
            message += f" Note: {prescription.renewal_note}"
        return await self.notify(patient.user_id, message, NotificationType.RENEWAL_REJECTED, prescription.id)

    async def _parties(self, patient_id: int, doctor_id: int) -> tuple[Patient, Doctor]:
        patient = await self.patient_repo.find_by_id(patient_id)
        if patient is None:
            raise EntityNotFoundException(entity_type="Patient", entity_id=patient_id)
        doctor = await self.doctor_repo.find_by_id(doctor_id)
        if doctor is None:
            raise EntityNotFoundException(entity_type="Doctor", entity_id=doctor_id)
        return patient, doctor
