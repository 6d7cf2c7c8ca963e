from fastapi import APIRouter

from healthapp.domains.clinic.api.routes import (
    appointments_router,
    doctors_router,
    notifications_router,
    patients_router,
    prescriptions_router,
    reports_router,
    users_router,
)

api_router = APIRouter()

# Accounts and profiles
api_router.include_router(users_router)
api_router.include_router(doctors_router)
api_router.include_router(patients_router)

# Clinical workflow
api_router.include_router(appointments_router)
api_router.include_router(prescriptions_router)

# Notifications and reports
api_router.include_router(notifications_router)
api_router.include_router(reports_router)
