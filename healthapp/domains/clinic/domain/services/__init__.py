from .scheduling_service import AvailableSlot, SchedulingService

__all__ = ["AvailableSlot", "SchedulingService"]
