"""
Unit tests for prescription use cases: issuing, renewal requests,
renewal responses and direct renewal.
"""

from datetime import datetime
from itertools import count

import pytest

from healthapp.core.domain import ErrorKind
from healthapp.domains.clinic.application.use_cases import (
    DeletePrescriptionRequest,
    DeletePrescriptionUseCase,
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
from healthapp.domains.clinic.domain.entities import Prescription
from healthapp.domains.clinic.domain.value_objects import AppointmentStatus, RenewalStatus

NOW = datetime(2025, 3, 20, 8, 0)


@pytest.fixture
def prescription_repo(mock_prescription_repository):
    """Repository double that assigns ids to new rows."""
    ids = count(51)

    def save(entity: Prescription) -> Prescription:
        if entity.id is None:
            entity.id = next(ids)
        return entity

    mock_prescription_repository.save.side_effect = save
    return mock_prescription_repository


# ============================================================================
# IssuePrescriptionUseCase Tests
# ============================================================================


@pytest.fixture
def issue_use_case(
    prescription_repo,
    mock_appointment_repository,
    mock_notification_service,
    access_policy,
    sample_appointment,
):
    sample_appointment.status = AppointmentStatus.COMPLETED
    mock_appointment_repository.find_by_id.return_value = sample_appointment
    return IssuePrescriptionUseCase(
        prescription_repository=prescription_repo,
        appointment_repository=mock_appointment_repository,
        notification_service=mock_notification_service,
        access_policy=access_policy,
        clock=lambda: NOW,
    )


def issue_request(identity, **overrides) -> IssuePrescriptionRequest:
    data = {
        "identity": identity,
        "appointment_id": 100,
        "medication": "Amoxicillin",
        "dosage": "500mg",
        "frequency": "Every 8 hours",
        "duration_days": 10,
        "allow_refills": True,
        "refills_allowed": 2,
    }
    data.update(overrides)
    return IssuePrescriptionRequest(**data)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_issue_prescription_success(issue_use_case, doctor_identity, mock_notification_service):
    # Act
    result = await issue_use_case.execute(issue_request(doctor_identity))

    # Assert
    assert result.success is True
    prescription = result.data
    assert prescription.id == 51
    assert prescription.patient_id == 7
    assert prescription.doctor_id == 1
    assert prescription.prescribed_at == NOW
    assert prescription.refills_allowed == 2
    mock_notification_service.send_prescription_issued.assert_awaited_once_with(prescription)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_issue_second_prescription_for_appointment(
    issue_use_case, doctor_identity, prescription_repo, sample_prescription
):
    prescription_repo.find_by_appointment.return_value = sample_prescription

    result = await issue_use_case.execute(issue_request(doctor_identity))

    assert result.success is False
    assert result.error_kind == ErrorKind.CONFLICT
    prescription_repo.save.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_issue_for_cancelled_appointment(issue_use_case, doctor_identity, sample_appointment):
    sample_appointment.status = AppointmentStatus.CANCELLED

    result = await issue_use_case.execute(issue_request(doctor_identity))

    assert result.error_kind == ErrorKind.INVALID_STATE


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_issue_refills_without_permission(issue_use_case, doctor_identity):
    result = await issue_use_case.execute(issue_request(doctor_identity, allow_refills=False, refills_allowed=1))

    assert result.error_kind == ErrorKind.VALIDATION


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_patient_cannot_issue_prescription(issue_use_case, patient_identity, prescription_repo):
    result = await issue_use_case.execute(issue_request(patient_identity))

    assert result.error_kind == ErrorKind.FORBIDDEN
    prescription_repo.save.assert_not_called()


# ============================================================================
# RequestRenewalUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_patient_requests_renewal_once(
    prescription_repo,
    mock_patient_repository,
    mock_notification_service,
    patient_identity,
    sample_prescription,
):
    # Arrange
    prescription_repo.find_by_id.return_value = sample_prescription
    use_case = RequestRenewalUseCase(prescription_repo, mock_patient_repository, mock_notification_service)
    request = RequestRenewalRequest(identity=patient_identity, prescription_id=50)

    # Act
    first = await use_case.execute(request)
    second = await use_case.execute(request)

    # Assert
    assert first.success is True
    assert first.data.renewal_status == RenewalStatus.REQUESTED
    assert second.error_kind == ErrorKind.INVALID_STATE
    mock_notification_service.send_renewal_requested.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_doctor_cannot_request_renewal(
    prescription_repo,
    mock_patient_repository,
    mock_notification_service,
    doctor_identity,
    sample_prescription,
):
    prescription_repo.find_by_id.return_value = sample_prescription
    mock_patient_repository.find_by_user_id.return_value = None
    use_case = RequestRenewalUseCase(prescription_repo, mock_patient_repository, mock_notification_service)

    result = await use_case.execute(RequestRenewalRequest(identity=doctor_identity, prescription_id=50))

    assert result.error_kind == ErrorKind.FORBIDDEN


# ============================================================================
# RespondToRenewalUseCase Tests
# ============================================================================


@pytest.fixture
def respond_use_case(prescription_repo, mock_notification_service, access_policy, sample_prescription):
    sample_prescription.request_renewal()
    prescription_repo.find_by_id.return_value = sample_prescription
    return RespondToRenewalUseCase(
        prescription_repository=prescription_repo,
        notification_service=mock_notification_service,
        access_policy=access_policy,
        clock=lambda: NOW,
    )


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_approve_renewal_creates_one_new_prescription(
    respond_use_case, doctor_identity, prescription_repo, mock_notification_service
):
    # Act
    result = await respond_use_case.execute(
        RespondToRenewalRequest(identity=doctor_identity, prescription_id=50, approve=True)
    )

    # Assert
    assert result.success is True
    outcome = result.data
    assert outcome.prescription.renewal_status == RenewalStatus.APPROVED
    assert outcome.prescription.refills_allowed == 1
    assert outcome.renewed.id == 51
    assert outcome.renewed.refills_allowed == 0
    assert outcome.renewed.renewed_from_id == 50
    assert outcome.renewed.prescribed_at == NOW
    assert prescription_repo.save.await_count == 2
    mock_notification_service.send_renewal_approved.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_reject_renewal_keeps_single_row(respond_use_case, doctor_identity, prescription_repo):
    result = await respond_use_case.execute(
        RespondToRenewalRequest(identity=doctor_identity, prescription_id=50, approve=False, note="Come in first")
    )

    assert result.success is True
    assert result.data.renewed is None
    assert result.data.prescription.renewal_status == RenewalStatus.REJECTED
    assert result.data.prescription.renewal_note == "Come in first"
    prescription_repo.save.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_patient_cannot_answer_renewal(respond_use_case, patient_identity):
    result = await respond_use_case.execute(
        RespondToRenewalRequest(identity=patient_identity, prescription_id=50, approve=True)
    )

    assert result.error_kind == ErrorKind.FORBIDDEN


# ============================================================================
# RenewPrescriptionUseCase Tests
# ============================================================================


@pytest.fixture
def renew_use_case(prescription_repo, mock_notification_service, access_policy, sample_prescription):
    prescription_repo.find_by_id.return_value = sample_prescription
    return RenewPrescriptionUseCase(
        prescription_repository=prescription_repo,
        notification_service=mock_notification_service,
        access_policy=access_policy,
        clock=lambda: NOW,
    )


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_direct_renewal_decrements_refills(renew_use_case, doctor_identity, sample_prescription):
    result = await renew_use_case.execute(RenewPrescriptionRequest(identity=doctor_identity, prescription_id=50))

    assert result.success is True
    assert result.data.refills_allowed == 0
    assert result.data.renewed_from_id == 50
    assert sample_prescription.refills_allowed == 1


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_already_renewed_prescription(renew_use_case, doctor_identity, prescription_repo):
    prescription_repo.has_renewal.return_value = True

    result = await renew_use_case.execute(RenewPrescriptionRequest(identity=doctor_identity, prescription_id=50))

    assert result.error_kind == ErrorKind.POLICY_VIOLATION
    prescription_repo.save.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_renewal_without_refills(renew_use_case, patient_identity, sample_prescription):
    sample_prescription.refills_allowed = 0

    result = await renew_use_case.execute(RenewPrescriptionRequest(identity=patient_identity, prescription_id=50))

    assert result.error_kind == ErrorKind.POLICY_VIOLATION


# ============================================================================
# ListPrescriptionsUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_admin_without_patient_filter_gets_all(
    prescription_repo, access_policy, admin_identity, sample_prescription
):
    prescription_repo.find_all.return_value = [sample_prescription]
    use_case = ListPrescriptionsUseCase(prescription_repo, access_policy)

    result = await use_case.execute(ListPrescriptionsRequest(identity=admin_identity))

    assert result.success
    assert result.data == [sample_prescription]
    prescription_repo.find_all.assert_awaited_once()
    prescription_repo.find_by_patient.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_patient_lists_own_prescriptions(
    prescription_repo, access_policy, patient_identity, sample_prescription
):
    prescription_repo.find_by_patient.return_value = [sample_prescription]
    use_case = ListPrescriptionsUseCase(prescription_repo, access_policy)

    result = await use_case.execute(ListPrescriptionsRequest(identity=patient_identity))

    assert result.data == [sample_prescription]
    prescription_repo.find_by_patient.assert_awaited_once_with(7)


# ============================================================================
# DeletePrescriptionUseCase Tests
# ============================================================================


@pytest.fixture
def delete_use_case(prescription_repo, access_policy, sample_prescription):
    prescription_repo.find_by_id.return_value = sample_prescription
    prescription_repo.delete.return_value = True
    return DeletePrescriptionUseCase(prescription_repo, access_policy)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_prescribing_doctor_deletes_prescription(delete_use_case, doctor_identity, prescription_repo):
    result = await delete_use_case.execute(DeletePrescriptionRequest(identity=doctor_identity, prescription_id=50))

    assert result.success
    assert result.data == 50
    prescription_repo.delete.assert_awaited_once_with(50)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_patient_cannot_delete_prescription(delete_use_case, patient_identity, prescription_repo):
    result = await delete_use_case.execute(DeletePrescriptionRequest(identity=patient_identity, prescription_id=50))

    assert result.error_kind == ErrorKind.FORBIDDEN
    prescription_repo.delete.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_renewed_prescription_is_not_deleted(delete_use_case, admin_identity, prescription_repo):
    prescription_repo.has_renewal.return_value = True

    result = await delete_use_case.execute(DeletePrescriptionRequest(identity=admin_identity, prescription_id=50))

    assert result.error_kind == ErrorKind.POLICY_VIOLATION
    prescription_repo.delete.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_missing_prescription(delete_use_case, admin_identity, prescription_repo):
    prescription_repo.find_by_id.return_value = None

    result = await delete_use_case.execute(DeletePrescriptionRequest(identity=admin_identity, prescription_id=404))

    assert result.error_kind == ErrorKind.NOT_FOUND
