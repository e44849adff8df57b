"""
App package - Application configuration and core utilities.
Contains settings and the exception hierarchy used by services and handlers.
"""

from app.config import settings
from app.exceptions import (
    ServiceError,
    ServiceValidationError,
    NotFoundError,
    ConflictError,
    AIUnavailableError,
    AIResponseError,
)

__all__ = [
    "settings",
    "ServiceError",
    "ServiceValidationError",
    "NotFoundError",
    "ConflictError",
    "AIUnavailableError",
    "AIResponseError",
]
