"""
Appointment API Routes
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from healthapp.api.identity import CurrentIdentity
from healthapp.domains.clinic.api.dependencies import (
    get_appointment_use_case,
    get_book_appointment_use_case,
    get_cancel_appointment_use_case,
    get_delete_appointment_use_case,
    get_list_appointments_use_case,
    get_reschedule_appointment_use_case,
    get_review_appointment_use_case,
    get_send_reminders_use_case,
)
from healthapp.domains.clinic.api.errors import unwrap
from healthapp.domains.clinic.api.schemas import (
    AppointmentCancelRequest,
    AppointmentCompleteRequest,
    AppointmentCreateRequest,
    AppointmentRejectRequest,
    AppointmentRescheduleRequest,
    AppointmentResponse,
    RemindersResponse,
)
from healthapp.domains.clinic.application.use_cases import (
    BookAppointmentRequest,
    BookAppointmentUseCase,
    CancelAppointmentRequest,
    CancelAppointmentUseCase,
    DeleteAppointmentRequest,
    DeleteAppointmentUseCase,
    GetAppointmentRequest,
    GetAppointmentUseCase,
    ListAppointmentsRequest,
    ListAppointmentsUseCase,
    RescheduleAppointmentRequest,
    RescheduleAppointmentUseCase,
    ReviewAction,
    ReviewAppointmentRequest,
    ReviewAppointmentUseCase,
    SendRemindersRequest,
    SendRemindersUseCase,
)

router = APIRouter(prefix="/appointments", tags=["Appointments"])

# Type aliases for use case dependencies
BookAppointmentUseCaseDep = Annotated[BookAppointmentUseCase, Depends(get_book_appointment_use_case)]
CancelAppointmentUseCaseDep = Annotated[CancelAppointmentUseCase, Depends(get_cancel_appointment_use_case)]
RescheduleAppointmentUseCaseDep = Annotated[
    RescheduleAppointmentUseCase, Depends(get_reschedule_appointment_use_case)
]
ReviewAppointmentUseCaseDep = Annotated[ReviewAppointmentUseCase, Depends(get_review_appointment_use_case)]
GetAppointmentUseCaseDep = Annotated[GetAppointmentUseCase, Depends(get_appointment_use_case)]
ListAppointmentsUseCaseDep = Annotated[ListAppointmentsUseCase, Depends(get_list_appointments_use_case)]
DeleteAppointmentUseCaseDep = Annotated[DeleteAppointmentUseCase, Depends(get_delete_appointment_use_case)]
SendRemindersUseCaseDep = Annotated[SendRemindersUseCase, Depends(get_send_reminders_use_case)]


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    request: AppointmentCreateRequest,
    identity: CurrentIdentity,
    use_case: BookAppointmentUseCaseDep,
):
    """Book a new appointment; it starts out Pending."""
    result = await use_case.execute(
        BookAppointmentRequest(
            identity=identity,
            doctor_id=request.doctor_id,
            patient_id=request.patient_id,
            start_at=request.start_at,
            reason=request.reason,
            duration_minutes=request.duration_minutes,
        )
    )
    return AppointmentResponse.model_validate(unwrap(result))


@router.get("", response_model=list[AppointmentResponse])
async def list_appointments(
    identity: CurrentIdentity,
    use_case: ListAppointmentsUseCaseDep,
    doctor_id: int | None = Query(default=None),
    patient_id: int | None = Query(default=None),
):
    """List the appointments visible to the caller."""
    result = await use_case.execute(
        ListAppointmentsRequest(identity=identity, doctor_id=doctor_id, patient_id=patient_id)
    )
    return [AppointmentResponse.model_validate(a) for a in unwrap(result)]


@router.post("/reminders", response_model=RemindersResponse)
async def send_reminders(
    identity: CurrentIdentity,
    use_case: SendRemindersUseCaseDep,
    hours_ahead: int | None = Query(default=None, ge=1, le=168),
):
    """Send reminders for upcoming appointments (admin; meant for a scheduler)."""
    result = await use_case.execute(SendRemindersRequest(identity=identity, hours_ahead=hours_ahead))
    reminded = unwrap(result)
    return RemindersResponse(sent=len(reminded), appointment_ids=reminded)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    identity: CurrentIdentity,
    use_case: GetAppointmentUseCaseDep,
):
    result = await use_case.execute(GetAppointmentRequest(identity=identity, appointment_id=appointment_id))
    return AppointmentResponse.model_validate(unwrap(result))


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment(
    appointment_id: int,
    identity: CurrentIdentity,
    use_case: DeleteAppointmentUseCaseDep,
):
    """Soft-delete an appointment (admin)."""
    unwrap(await use_case.execute(DeleteAppointmentRequest(identity=identity, appointment_id=appointment_id)))


@router.post("/{appointment_id}/cancel", response_model=AppointmentResponse)
async def cancel_appointment(
    appointment_id: int,
    request: AppointmentCancelRequest,
    identity: CurrentIdentity,
    use_case: CancelAppointmentUseCaseDep,
):
    """Cancel an appointment; refused inside the cancellation window."""
    result = await use_case.execute(
        CancelAppointmentRequest(
            identity=identity,
            appointment_id=appointment_id,
            reason=request.reason,
            override_window=request.override_window,
        )
    )
    return AppointmentResponse.model_validate(unwrap(result))


@router.post("/{appointment_id}/reschedule", response_model=AppointmentResponse)
async def reschedule_appointment(
    appointment_id: int,
    request: AppointmentRescheduleRequest,
    identity: CurrentIdentity,
    use_case: RescheduleAppointmentUseCaseDep,
):
    result = await use_case.execute(
        RescheduleAppointmentRequest(
            identity=identity,
            appointment_id=appointment_id,
            new_start_at=request.new_start_at,
        )
    )
    return AppointmentResponse.model_validate(unwrap(result))


@router.post("/{appointment_id}/approve", response_model=AppointmentResponse)
async def approve_appointment(
    appointment_id: int,
    identity: CurrentIdentity,
    use_case: ReviewAppointmentUseCaseDep,
):
    result = await use_case.execute(
        ReviewAppointmentRequest(identity=identity, appointment_id=appointment_id, action=ReviewAction.APPROVE)
    )
    return AppointmentResponse.model_validate(unwrap(result))


@router.post("/{appointment_id}/reject", response_model=AppointmentResponse)
async def reject_appointment(
    appointment_id: int,
    request: AppointmentRejectRequest,
    identity: CurrentIdentity,
    use_case: ReviewAppointmentUseCaseDep,
):
    result = await use_case.execute(
        ReviewAppointmentRequest(
            identity=identity,
            appointment_id=appointment_id,
            action=ReviewAction.REJECT,
            reason=request.reason,
        )
    )
    return AppointmentResponse.model_validate(unwrap(result))


@router.post("/{appointment_id}/complete", response_model=AppointmentResponse)
async def complete_appointment(
    appointment_id: int,
    request: AppointmentCompleteRequest,
    identity: CurrentIdentity,
    use_case: ReviewAppointmentUseCaseDep,
):
    result = await use_case.execute(
        ReviewAppointmentRequest(
            identity=identity,
            appointment_id=appointment_id,
            action=ReviewAction.COMPLETE,
            notes=request.notes,
        )
    )
    return AppointmentResponse.model_validate(unwrap(result))
