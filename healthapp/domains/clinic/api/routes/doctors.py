"""
Doctor, schedule and availability routes.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from healthapp.api.identity import CurrentIdentity
from healthapp.domains.clinic.api.dependencies import (
    get_add_schedule_use_case,
    get_available_slots_use_case,
    get_create_doctor_use_case,
    get_doctor_use_case,
    get_list_doctors_use_case,
    get_list_schedules_use_case,
    get_remove_schedule_use_case,
    get_update_schedule_use_case,
)
from healthapp.domains.clinic.api.errors import unwrap
from healthapp.domains.clinic.api.schemas import (
    DoctorCreateRequest,
    DoctorResponse,
    ScheduleCreateRequest,
    ScheduleResponse,
    SlotResponse,
    ScheduleUpdateRequest,
)
from healthapp.domains.clinic.application.use_cases import (
    AddScheduleRequest,
    AddScheduleUseCase,
    CreateDoctorRequest,
    CreateDoctorUseCase,
    GetAvailableSlotsRequest,
    GetAvailableSlotsUseCase,
    GetDoctorRequest,
    GetDoctorUseCase,
    ListDoctorsRequest,
    ListDoctorsUseCase,
    ListSchedulesRequest,
    ListSchedulesUseCase,
    RemoveScheduleRequest,
    RemoveScheduleUseCase,
    UpdateScheduleRequest,
    UpdateScheduleUseCase,
)

router = APIRouter(tags=["Doctors"])

CreateDoctorUseCaseDep = Annotated[CreateDoctorUseCase, Depends(get_create_doctor_use_case)]
GetDoctorUseCaseDep = Annotated[GetDoctorUseCase, Depends(get_doctor_use_case)]
ListDoctorsUseCaseDep = Annotated[ListDoctorsUseCase, Depends(get_list_doctors_use_case)]
AddScheduleUseCaseDep = Annotated[AddScheduleUseCase, Depends(get_add_schedule_use_case)]
ListSchedulesUseCaseDep = Annotated[ListSchedulesUseCase, Depends(get_list_schedules_use_case)]
RemoveScheduleUseCaseDep = Annotated[RemoveScheduleUseCase, Depends(get_remove_schedule_use_case)]
UpdateScheduleUseCaseDep = Annotated[UpdateScheduleUseCase, Depends(get_update_schedule_use_case)]
GetAvailableSlotsUseCaseDep = Annotated[GetAvailableSlotsUseCase, Depends(get_available_slots_use_case)]


@router.post("/doctors", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    request: DoctorCreateRequest,
    identity: CurrentIdentity,
    use_case: CreateDoctorUseCaseDep,
):
    """Create the doctor profile of a doctor account (admin)."""
    result = await use_case.execute(
        CreateDoctorRequest(
            identity=identity,
            user_id=request.user_id,
            specialization=request.specialization,
            license_number=request.license_number,
            phone=request.phone,
            first_name=request.first_name,
            last_name=request.last_name,
        )
    )
    return DoctorResponse.model_validate(unwrap(result))


@router.get("/doctors", response_model=list[DoctorResponse])
async def list_doctors(
    identity: CurrentIdentity,
    use_case: ListDoctorsUseCaseDep,
    active_only: bool = Query(default=True),
    specialization: str | None = Query(default=None, description="Only doctors with this specialization"),
):
    result = await use_case.execute(ListDoctorsRequest(active_only=active_only, specialization=specialization))
    return [DoctorResponse.model_validate(d) for d in unwrap(result)]


@router.get("/doctors/{doctor_id}", response_model=DoctorResponse)
async def get_doctor(doctor_id: int, identity: CurrentIdentity, use_case: GetDoctorUseCaseDep):
    result = await use_case.execute(GetDoctorRequest(doctor_id=doctor_id))
    return DoctorResponse.model_validate(unwrap(result))


@router.get("/doctors/{doctor_id}/available-slots", response_model=list[SlotResponse])
async def get_available_slots(
    doctor_id: int,
    identity: CurrentIdentity,
    use_case: GetAvailableSlotsUseCaseDep,
    day: date = Query(..., description="Calendar date to search"),
    slot_minutes: int | None = Query(default=None, ge=5, le=240),
):
    """Free slots of a doctor on a given day."""
    result = await use_case.execute(
        GetAvailableSlotsRequest(doctor_id=doctor_id, day=day, slot_minutes=slot_minutes)
    )
    return [
        SlotResponse(doctor_id=s.doctor_id, day=s.date, start_time=s.start_time, end_time=s.end_time)
        for s in unwrap(result)
    ]


@router.get("/doctors/{doctor_id}/schedules", response_model=list[ScheduleResponse])
async def list_schedules(doctor_id: int, identity: CurrentIdentity, use_case: ListSchedulesUseCaseDep):
    result = await use_case.execute(ListSchedulesRequest(doctor_id=doctor_id))
    return [ScheduleResponse.model_validate(s) for s in unwrap(result)]


@router.post(
    "/doctors/{doctor_id}/schedules",
    response_model=ScheduleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_schedule(
    doctor_id: int,
    request: ScheduleCreateRequest,
    identity: CurrentIdentity,
    use_case: AddScheduleUseCaseDep,
):
    """Add a weekly availability window."""
    result = await use_case.execute(
        AddScheduleRequest(
            identity=identity,
            doctor_id=doctor_id,
            day_of_week=request.day_of_week,
            start_time=request.start_time,
            end_time=request.end_time,
            max_appointments=request.max_appointments,
        )
    )
    return ScheduleResponse.model_validate(unwrap(result))


@router.delete("/schedules/{schedule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_schedule(schedule_id: int, identity: CurrentIdentity, use_case: RemoveScheduleUseCaseDep):
    unwrap(await use_case.execute(RemoveScheduleRequest(identity=identity, schedule_id=schedule_id)))


@router.put("/schedules/{schedule_id}", response_model=ScheduleResponse)
async def update_schedule(
    schedule_id: int,
    request: ScheduleUpdateRequest,
    identity: CurrentIdentity,
    use_case: UpdateScheduleUseCaseDep,
):
    """Replace the weekday, hours and cap of a window."""
    result = await use_case.execute(
        UpdateScheduleRequest(
            identity=identity,
            schedule_id=schedule_id,
            day_of_week=request.day_of_week,
            start_time=request.start_time,
            end_time=request.end_time,
            max_appointments=request.max_appointments,
        )
    )
    return ScheduleResponse.model_validate(unwrap(result))
