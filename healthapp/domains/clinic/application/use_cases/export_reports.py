"""
CSV report use cases.
"""

import logging
from dataclasses import dataclass

from healthapp.core.domain import DomainException, EntityNotFoundException, ErrorKind
from healthapp.domains.clinic.application.dto import Identity, UseCaseResult
from healthapp.domains.clinic.application.ports import IDoctorRepository
from healthapp.domains.clinic.application.services import AccessPolicy, ReportService
from healthapp.domains.clinic.domain.value_objects import UserRole

logger = logging.getLogger(__name__)


@dataclass
class ExportAppointmentsRequest:
    identity: Identity


@dataclass
class ExportDoctorScheduleRequest:
    identity: Identity
    doctor_id: int


class ExportAppointmentsUseCase:
    def __init__(self, report_service: ReportService):
        self.reports = report_service

    async def execute(self, request: ExportAppointmentsRequest) -> UseCaseResult[str]:
        try:
            AccessPolicy.require_role(request.identity, "export_appointments", UserRole.ADMIN)
            return UseCaseResult.ok(await self.reports.appointments_csv())
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error exporting appointments: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to export appointments")


class ExportDoctorScheduleUseCase:
    def __init__(
        self,
        report_service: ReportService,
        doctor_repository: IDoctorRepository,
        access_policy: AccessPolicy,
    ):
        self.reports = report_service
        self.doctor_repo = doctor_repository
        self.access = access_policy

    async def execute(self, request: ExportDoctorScheduleRequest) -> UseCaseResult[str]:
        try:
            await self.access.ensure_doctor_access(request.identity, request.doctor_id, "export_schedule")
            if await self.doctor_repo.find_by_id(request.doctor_id) is None:
                raise EntityNotFoundException(entity_type="Doctor", entity_id=request.doctor_id)
            return UseCaseResult.ok(await self.reports.doctor_schedule_csv(request.doctor_id))
        except DomainException as e:
            return UseCaseResult.from_exception(e)
        except Exception as e:
            logger.error(f"Error exporting doctor schedule: {e}", exc_info=True)
            return UseCaseResult.fail(ErrorKind.UNEXPECTED, "Failed to export schedule")
