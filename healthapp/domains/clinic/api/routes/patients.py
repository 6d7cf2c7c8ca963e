"""
Patient profile routes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from healthapp.api.identity import CurrentIdentity
from healthapp.domains.clinic.api.dependencies import (
    get_create_patient_use_case,
    get_list_patients_use_case,
    get_patient_use_case,
    get_update_patient_use_case,
)
from healthapp.domains.clinic.api.errors import unwrap
from healthapp.domains.clinic.api.schemas import PatientCreateRequest, PatientResponse, PatientUpdateRequest
from healthapp.domains.clinic.application.use_cases import (
    CreatePatientRequest,
    CreatePatientUseCase,
    GetPatientRequest,
    GetPatientUseCase,
    ListPatientsRequest,
    ListPatientsUseCase,
    UpdatePatientRequest,
    UpdatePatientUseCase,
)

router = APIRouter(prefix="/patients", tags=["Patients"])

CreatePatientUseCaseDep = Annotated[CreatePatientUseCase, Depends(get_create_patient_use_case)]
UpdatePatientUseCaseDep = Annotated[UpdatePatientUseCase, Depends(get_update_patient_use_case)]
GetPatientUseCaseDep = Annotated[GetPatientUseCase, Depends(get_patient_use_case)]
ListPatientsUseCaseDep = Annotated[ListPatientsUseCase, Depends(get_list_patients_use_case)]


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    request: PatientCreateRequest,
    identity: CurrentIdentity,
    use_case: CreatePatientUseCaseDep,
):
    result = await use_case.execute(
        CreatePatientRequest(identity=identity, **request.model_dump())
    )
    return PatientResponse.from_entity(unwrap(result))


@router.get("", response_model=list[PatientResponse])
async def list_patients(identity: CurrentIdentity, use_case: ListPatientsUseCaseDep):
    result = await use_case.execute(ListPatientsRequest(identity=identity))
    return [PatientResponse.from_entity(p) for p in unwrap(result)]


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(patient_id: int, identity: CurrentIdentity, use_case: GetPatientUseCaseDep):
    """Get patient records."""
    result = await use_case.execute(GetPatientRequest(identity=identity, patient_id=patient_id))
    return PatientResponse.from_entity(unwrap(result))


@router.patch("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: int,
    request: PatientUpdateRequest,
    identity: CurrentIdentity,
    use_case: UpdatePatientUseCaseDep,
):
    result = await use_case.execute(
        UpdatePatientRequest(identity=identity, patient_id=patient_id, **request.model_dump())
    )
    return PatientResponse.from_entity(unwrap(result))
