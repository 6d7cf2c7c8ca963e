"""
CSV report routes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from healthapp.api.identity import CurrentIdentity
from healthapp.domains.clinic.api.dependencies import (
    get_export_appointments_use_case,
    get_export_doctor_schedule_use_case,
)
from healthapp.domains.clinic.api.errors import unwrap
from healthapp.domains.clinic.application.use_cases import (
    ExportAppointmentsRequest,
    ExportAppointmentsUseCase,
    ExportDoctorScheduleRequest,
    ExportDoctorScheduleUseCase,
)

router = APIRouter(prefix="/reports", tags=["Reports"])

ExportAppointmentsUseCaseDep = Annotated[ExportAppointmentsUseCase, Depends(get_export_appointments_use_case)]
ExportDoctorScheduleUseCaseDep = Annotated[
    ExportDoctorScheduleUseCase, Depends(get_export_doctor_schedule_use_case)
]


def _csv(body: str, filename: str) -> PlainTextResponse:
    return PlainTextResponse(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/appointments.csv", response_class=PlainTextResponse)
async def export_appointments(identity: CurrentIdentity, use_case: ExportAppointmentsUseCaseDep):
    """All appointments as CSV (admin)."""
    result = await use_case.execute(ExportAppointmentsRequest(identity=identity))
    return _csv(unwrap(result), "appointments.csv")


@router.get("/doctors/{doctor_id}/schedule.csv", response_class=PlainTextResponse)
async def export_doctor_schedule(
    doctor_id: int,
    identity: CurrentIdentity,
    use_case: ExportDoctorScheduleUseCaseDep,
):
    """A doctor's weekly schedule as CSV (the doctor or an admin)."""
    result = await use_case.execute(ExportDoctorScheduleRequest(identity=identity, doctor_id=doctor_id))
    return _csv(unwrap(result), f"doctor_{doctor_id}_schedule.csv")
