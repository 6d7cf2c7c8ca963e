"""
Prescription API Routes

Issuing, listing, removal and the renewal workflow.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from healthapp.api.identity import CurrentIdentity
from healthapp.domains.clinic.api.dependencies import (
    get_delete_prescription_use_case,
    get_issue_prescription_use_case,
    get_list_prescriptions_use_case,
    get_prescription_use_case,
    get_renew_prescription_use_case,
    get_request_renewal_use_case,
    get_respond_to_renewal_use_case,
)
from healthapp.domains.clinic.api.errors import unwrap
from healthapp.domains.clinic.api.schemas import (
    PrescriptionCreateRequest,
    PrescriptionResponse,
    RenewalDecisionRequest,
    RenewalDecisionResponse,
)
from healthapp.domains.clinic.application.use_cases import (
    DeletePrescriptionRequest,
    DeletePrescriptionUseCase,
    GetPrescriptionRequest,
    GetPrescriptionUseCase,
    IssuePrescriptionRequest,
    IssuePrescriptionUseCase,
    ListPrescriptionsRequest,
    ListPrescriptionsUseCase,
    RenewPrescriptionRequest,
    RenewPrescriptionUseCase,
    RequestRenewalRequest,
    RequestRenewalUseCase,
    RespondToRenewalRequest,
    RespondToRenewalUseCase,
)

router = APIRouter(prefix="/prescriptions", tags=["Prescriptions"])

IssuePrescriptionUseCaseDep = Annotated[IssuePrescriptionUseCase, Depends(get_issue_prescription_use_case)]
GetPrescriptionUseCaseDep = Annotated[GetPrescriptionUseCase, Depends(get_prescription_use_case)]
ListPrescriptionsUseCaseDep = Annotated[ListPrescriptionsUseCase, Depends(get_list_prescriptions_use_case)]
RequestRenewalUseCaseDep = Annotated[RequestRenewalUseCase, Depends(get_request_renewal_use_case)]
RespondToRenewalUseCaseDep = Annotated[RespondToRenewalUseCase, Depends(get_respond_to_renewal_use_case)]
RenewPrescriptionUseCaseDep = Annotated[RenewPrescriptionUseCase, Depends(get_renew_prescription_use_case)]
DeletePrescriptionUseCaseDep = Annotated[DeletePrescriptionUseCase, Depends(get_delete_prescription_use_case)]


@router.post("", response_model=PrescriptionResponse, status_code=status.HTTP_201_CREATED)
async def issue_prescription(
    request: PrescriptionCreateRequest,
    identity: CurrentIdentity,
    use_case: IssuePrescriptionUseCaseDep,
):
    """Issue the prescription of an appointment (its doctor or an admin)."""
    result = await use_case.execute(IssuePrescriptionRequest(identity=identity, **request.model_dump()))
    return PrescriptionResponse.model_validate(unwrap(result))


@router.get("", response_model=list[PrescriptionResponse])
async def list_prescriptions(
    identity: CurrentIdentity,
    use_case: ListPrescriptionsUseCaseDep,
    patient_id: int | None = Query(default=None),
):
    result = await use_case.execute(ListPrescriptionsRequest(identity=identity, patient_id=patient_id))
    return [PrescriptionResponse.model_validate(p) for p in unwrap(result)]


@router.get("/{prescription_id}", response_model=PrescriptionResponse)
async def get_prescription(
    prescription_id: int,
    identity: CurrentIdentity,
    use_case: GetPrescriptionUseCaseDep,
):
    result = await use_case.execute(GetPrescriptionRequest(identity=identity, prescription_id=prescription_id))
    return PrescriptionResponse.model_validate(unwrap(result))


@router.delete("/{prescription_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_prescription(
    prescription_id: int,
    identity: CurrentIdentity,
    use_case: DeletePrescriptionUseCaseDep,
):
    """Remove a prescription (admin or the prescribing doctor)."""
    unwrap(await use_case.execute(DeletePrescriptionRequest(identity=identity, prescription_id=prescription_id)))


@router.post("/{prescription_id}/renewal-request", response_model=PrescriptionResponse)
async def request_renewal(
    prescription_id: int,
    identity: CurrentIdentity,
    use_case: RequestRenewalUseCaseDep,
):
    """The prescription's patient asks the doctor for a renewal."""
    result = await use_case.execute(RequestRenewalRequest(identity=identity, prescription_id=prescription_id))
    return PrescriptionResponse.model_validate(unwrap(result))


@router.post("/{prescription_id}/renewal-response", response_model=RenewalDecisionResponse)
async def respond_to_renewal(
    prescription_id: int,
    request: RenewalDecisionRequest,
    identity: CurrentIdentity,
    use_case: RespondToRenewalUseCaseDep,
):
    """
    Approve or reject a pending renewal request.

    Approval also creates the renewed prescription, returned as `renewed`.
    """
    result = await use_case.execute(
        RespondToRenewalRequest(
            identity=identity,
            prescription_id=prescription_id,
            approve=request.approve,
            note=request.note,
        )
    )
    outcome = unwrap(result)
    return RenewalDecisionResponse(
        prescription=PrescriptionResponse.model_validate(outcome.prescription),
        renewed=PrescriptionResponse.model_validate(outcome.renewed) if outcome.renewed else None,
    )


@router.post("/{prescription_id}/renew", response_model=PrescriptionResponse, status_code=status.HTTP_201_CREATED)
async def renew_prescription(
    prescription_id: int,
    identity: CurrentIdentity,
    use_case: RenewPrescriptionUseCaseDep,
):
    """Use one refill: creates a new prescription with one refill fewer."""
    result = await use_case.execute(RenewPrescriptionRequest(identity=identity, prescription_id=prescription_id))
    return PrescriptionResponse.model_validate(unwrap(result))
