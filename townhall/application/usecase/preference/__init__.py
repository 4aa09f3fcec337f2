"""Notification preference use cases."""

from .get_preferences import (
    GetPreferencesRequest,
    GetPreferencesUseCase,
    PreferencesResponse,
)
from .update_preferences import UpdatePreferencesRequest, UpdatePreferencesUseCase

__all__ = [
    "GetPreferencesRequest",
    "GetPreferencesUseCase",
    "PreferencesResponse",
    "UpdatePreferencesRequest",
    "UpdatePreferencesUseCase",
]
