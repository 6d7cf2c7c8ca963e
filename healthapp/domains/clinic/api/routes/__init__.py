"""
Clinic API routers.
"""

from .appointments import router as appointments_router
from .doctors import router as doctors_router
from .notifications import router as notifications_router
from .patients import router as patients_router
from .prescriptions import router as prescriptions_router
from .reports import router as reports_router
from .users import router as users_router

__all__ = [
    "appointments_router",
    "doctors_router",
    "notifications_router",
    "patients_router",
    "prescriptions_router",
    "reports_router",
    "users_router",
]
