"""
Prescription Renewal Use Cases

- RequestRenewalUseCase: patient asks for a renewal
- RespondToRenewalUseCase: doctor approves (new prescription) or rejects
- RenewPrescriptionUseCase: direct renewal without the request cycle

A prescription is renewed at most once; further renewals continue from
the newest prescription in the chain.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from healthapp.core.domain import (
    AuthorizationException,
    BusinessRuleViolationException,
    DomainException,
    EntityNotFoundException,
    ErrorKind,
)
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IPatientRepository, IPrescriptionRepository
from healthapp.domains.clinic.application.services import AccessPolicy, NotificationService
from healthapp.domains.clinic.domain.entities import Prescription

logger = logging.getLogger(__name__)


@dataclass
class RequestRenewalRequest:
    identity: Identity
    prescription_id: int


@dataclass
class RespondToRenewalRequest:
    identity: Identity
    prescription_id: int
    approve: bool
    note: str | None = None


@dataclass
class RenewPrescriptionRequest:
    identity: Identity
    prescription_id: int


@dataclass
class RenewalOutcome:
    """The prescription that was acted on and, when approved, its renewal."""

    prescription: Prescription
    renewed: Prescription | None = None


async def _load(repo: IPrescriptionRepository, prescription_id: int) -> Prescription:
    prescription = await repo.find_by_id(prescription_id)
    if prescription is None:
        raise EntityNotFoundException(entity_type="Prescription", entity_id=prescription_id)
    return prescription


async def _ensure_not_renewed(repo: IPrescriptionRepository, prescription: Prescription) -> None:
    if await repo.has_renewal(prescription.id):
        raise BusinessRuleViolationException(
            rule="already_renewed",
            message="This prescription has already been renewed; renew the latest one instead",
            details={"prescription_id": prescription.id},
        )


class RequestRenewalUseCase:
    """Only the prescription's own patient may request a renewal."""

    def __init__(
        self,
        prescription_repository: IPrescriptionRepository,
        patient_repository: IPatientRepository,
        notification_service: NotificationService,
    ):
        self.prescription_repo = prescription_repository
        self.patient_repo = patient_repository
        self.notifications = notification_service

    async def execute(self, request: RequestRenewalRequest) -> UseCaseResult[Prescription]:
        try:
            prescription = await _load(self.prescription_repo, request.prescription_id)

            patient = await self.patient_repo.find_by_user_id(request.identity.user_id)
            if patient is None or patient.id != prescription.patient_id:
                raise AuthorizationException(
                    operation="request_renewal",
                    resource=f"Prescription {prescription.id}",
                    user_id=request.identity.user_id,
                )

            prescription.request_renewal()
            saved = await self.prescription_repo.save(prescription)
            logger.info(f"Renewal requested for prescription {saved.id}")

            await self.notifications.deliver(self.notifications.send_renewal_requested(saved))
            return UseCaseResult.ok(saved)

        except DomainException as e:
            logger.warning(f"Renewal request rejected for prescription {request.prescription_id}: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error requesting renewal: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to request renewal")


class RespondToRenewalUseCase:
    """
    The prescribing doctor (or an admin) answers a pending renewal request.

    Approval stores exactly one new prescription with one refill fewer and
    marks the original Approved; rejection only marks the original Rejected.
    """

    def __init__(
        self,
        prescription_repository: IPrescriptionRepository,
        notification_service: NotificationService,
        access_policy: AccessPolicy,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.prescription_repo = prescription_repository
        self.notifications = notification_service
        self.access = access_policy
        self.clock = clock

    async def execute(self, request: RespondToRenewalRequest) -> UseCaseResult[RenewalOutcome]:
        try:
            prescription = await _load(self.prescription_repo, request.prescription_id)
            await self.access.ensure_party(request.identity, prescription, "respond_to_renewal", allow_patient=False)

            if not request.approve:
                prescription.reject_renewal(request.note)
                saved = await self.prescription_repo.save(prescription)
                logger.info(f"Renewal rejected for prescription {saved.id}")
                await self.notifications.deliver(self.notifications.send_renewal_rejected(saved))
                return UseCaseResult.ok(RenewalOutcome(prescription=saved))

            prescription.approve_renewal(request.note)
            await _ensure_not_renewed(self.prescription_repo, prescription)

            renewed = await self.prescription_repo.save(prescription.renew(self.clock()))
            saved = await self.prescription_repo.save(prescription)
            logger.info(f"Renewal approved for prescription {saved.id}; new prescription {renewed.id}")

            await self.notifications.deliver(self.notifications.send_renewal_approved(saved, renewed))
            return UseCaseResult.ok(RenewalOutcome(prescription=saved, renewed=renewed))

        except DomainException as e:
            logger.warning(f"Renewal response rejected for prescription {request.prescription_id}: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error responding to renewal: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to respond to renewal")


class RenewPrescriptionUseCase:
    """
    Direct renewal: clone with one refill fewer, original left unchanged.
    """

    def __init__(
        self,
        prescription_repository: IPrescriptionRepository,
        notification_service: NotificationService,
        access_policy: AccessPolicy,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.prescription_repo = prescription_repository
        self.notifications = notification_service
        self.access = access_policy
        self.clock = clock

    async def execute(self, request: RenewPrescriptionRequest) -> UseCaseResult[Prescription]:
        try:
            prescription = await _load(self.prescription_repo, request.prescription_id)
            await self.access.ensure_party(request.identity, prescription, "renew_prescription")

            renewed_entity = prescription.renew(self.clock())
            await _ensure_not_renewed(self.prescription_repo, prescription)

            renewed = await self.prescription_repo.save(renewed_entity)
            logger.info(
                f"Prescription {prescription.id} renewed as {renewed.id} "
                f"({renewed.refills_allowed} refills left)"
            )

            await self.notifications.deliver(self.notifications.send_prescription_issued(renewed))
            return UseCaseResult.ok(renewed)

        except DomainException as e:
            logger.warning(f"Renewal rejected for prescription {request.prescription_id}: {e}")
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error renewing prescription: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to renew prescription")
