"""
Access Policy

Resolves the caller's clinic profile and decides whether they may act
on a given appointment or prescription. Admins may act on everything;
doctors and patients only on records they are a party to.
"""

from healthapp.core.domain import AuthorizationException
from healthapp.domains.clinic.application.dto import Identity
from healthapp.domains.clinic.application.ports import IDoctorRepository, IPatientRepository
from healthapp.domains.clinic.domain.entities import Appointment, Doctor, Patient, Prescription
from healthapp.domains.clinic.domain.value_objects import UserRole


class AccessPolicy:
    def __init__(self, patient_repository: IPatientRepository, doctor_repository: IDoctorRepository):
        self.patient_repo = patient_repository
        self.doctor_repo = doctor_repository

    @staticmethod
    def require_role(identity: Identity, operation: str, *roles: UserRole) -> None:
        if identity.role not in roles:
            raise AuthorizationException(operation=operation, user_id=identity.user_id)

    async def patient_profile(self, identity: Identity, operation: str) -> Patient:
        """The caller's patient profile; Forbidden if the caller has none."""
        patient = await self.patient_repo.find_by_user_id(identity.user_id)
        if patient is None:
            raise AuthorizationException(operation=operation, resource="patient profile", user_id=identity.user_id)
        return patient

    async def doctor_profile(self, identity: Identity, operation: str) -> Doctor:
        """The caller's doctor profile; Forbidden if the caller has none."""
        doctor = await self.doctor_repo.find_by_user_id(identity.user_id)
        if doctor is None:
            raise AuthorizationException(operation=operation, resource="doctor profile", user_id=identity.user_id)
        return doctor

    async def ensure_party(
        self,
        identity: Identity,
        record: Appointment | Prescription,
        operation: str,
        allow_patient: bool = True,
    ) -> None:
        """
        Allow admins, the record's doctor and (optionally) the record's patient.

        Raises:
            AuthorizationException: Caller is not allowed
        """
        resource = f"{type(record).__name__} {record.id}"
        if identity.is_admin:
            return
        if identity.is_doctor:
            doctor = await self.doctor_profile(identity, operation)
            if doctor.id == record.doctor_id:
                return
        elif identity.is_patient and allow_patient:
            patient = await self.patient_profile(identity, operation)
            if patient.id == record.patient_id:
                return
        raise AuthorizationException(operation=operation, resource=resource, user_id=identity.user_id)

    async def ensure_doctor_access(self, identity: Identity, doctor_id: int, operation: str) -> None:
        """Admins, or the doctor whose data is requested."""
        if identity.is_admin:
            return
        if identity.is_doctor:
            doctor = await self.doctor_profile(identity, operation)
            if doctor.id == doctor_id:
                return
        raise AuthorizationException(operation=operation, resource=f"Doctor {doctor_id}", user_id=identity.user_id)

    async def ensure_patient_access(self, identity: Identity, patient_id: int, operation: str) -> None:
        """Admins, doctors, or the patient themselves."""
        if identity.is_admin or identity.is_doctor:
            return
        patient = await self.patient_profile(identity, operation)
        if patient.id != patient_id:
            raise AuthorizationException(
                operation=operation, resource=f"Patient {patient_id}", user_id=identity.user_id
            )
