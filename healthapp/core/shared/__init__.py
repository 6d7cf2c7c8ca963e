from healthapp.core.shared.logger import (
    ContextLogger,
    configure_logging,
    get_logger,
    get_service_logger,
)

__all__ = [
    "ContextLogger",
    "configure_logging",
    "get_logger",
    "get_service_logger",
]
