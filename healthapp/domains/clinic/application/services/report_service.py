"""
Report Service

CSV exports of appointments. Values are comma-joined without quoting,
matching the files downstream spreadsheets already import; a comma
inside a reason shifts the columns of that row.
"""

import logging

from healthapp.domains.clinic.application.ports import (
    IAppointmentRepository,
    IDoctorRepository,
    IPatientRepository,
)
from healthapp.domains.clinic.domain.entities import Appointment, Doctor, Patient

from .formatting import short_date, short_time

logger = logging.getLogger(__name__)

ADMIN_REPORT_HEADER = "Date,Time,Patient,Doctor,Status,Reason"
DOCTOR_SCHEDULE_HEADER = "Patient,Date,Time,Status,Reason"


class ReportService:
    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        patient_repository: IPatientRepository,
        doctor_repository: IDoctorRepository,
    ):
        self.appointment_repo = appointment_repository
        self.patient_repo = patient_repository
        self.doctor_repo = doctor_repository

    async def appointments_csv(self) -> str:
        """All appointments, one row each, for administrators."""
        appointments = await self.appointment_repo.find_all()
        patients = await self._patients_by_id()
        doctors = {d.id: d for d in await self.doctor_repo.find_all(active_only=False)}

        lines = [ADMIN_REPORT_HEADER]
        for appointment in appointments:
            start = appointment.time_range.start
            lines.append(
                ",".join(
                    [
                        short_date(start),
                        short_time(start),
                        _patient_name(patients.get(appointment.patient_id)),
                        _doctor_name(doctors.get(appointment.doctor_id)),
                        appointment.status.value,
                        appointment.reason or "",
                    ]
                )
            )
        logger.info(f"Generated appointments report with {len(appointments)} rows")
        return _to_csv(lines)

    async def doctor_schedule_csv(self, doctor_id: int) -> str:
        """One doctor's appointments."""
        appointments = await self.appointment_repo.find_by_doctor(doctor_id)
        patients = await self._patients_by_id()

        lines = [DOCTOR_SCHEDULE_HEADER]
        for appointment in appointments:
            lines.append(_schedule_row(appointment, patients.get(appointment.patient_id)))
        logger.info(f"Generated schedule report for doctor {doctor_id} with {len(appointments)} rows")
        return _to_csv(lines)

    async def _patients_by_id(self) -> dict[int | None, Patient]:
        return {p.id: p for p in await self.patient_repo.find_all()}


def _schedule_row(appointment: Appointment, patient: Patient | None) -> str:
    start = appointment.time_range.start
    return ",".join(
        [
            _patient_name(patient),
            short_date(start),
            short_time(start),
            appointment.status.value,
            appointment.reason or "",
        ]
    )


def _patient_name(patient: Patient | None) -> str:
    return patient.full_name if patient else ""


def _doctor_name(doctor: Doctor | None) -> str:
    return doctor.display_name if doctor else ""


def _to_csv(lines: list[str]) -> str:
    return "\n".join(lines) + "\n"
