"""Notification preference routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from townhall.application.usecase.preference import (
    GetPreferencesRequest,
    GetPreferencesUseCase,
    PreferencesResponse,
    UpdatePreferencesRequest,
    UpdatePreferencesUseCase,
)
from townhall.domain.service import JWTService
from townhall.domain.value import NotificationPreferences
from townhall.interface.api.auth import require_user_id

router = APIRouter(
    prefix="/communities/{community_id}/notification-preferences",
    tags=["preferences"],
    route_class=DishkaRoute,
)


@router.get("", response_model=PreferencesResponse)
async def get_preferences(
    community_id: UUID,
    get_preferences_use_case: FromDishka[GetPreferencesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PreferencesResponse:
    """Get the caller's notification preferences in a community.

    Members who never saved preferences get the defaults.
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await get_preferences_use_case.execute(
        GetPreferencesRequest(user_id=user_id, community_id=str(community_id))
    )


@router.put("", response_model=PreferencesResponse)
async def update_preferences(
    community_id: UUID,
    preferences: NotificationPreferences,
    update_preferences_use_case: FromDishka[UpdatePreferencesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PreferencesResponse:
    """Replace the caller's notification preferences in a community."""
    user_id = require_user_id(jwt_service, auth_token)
    return await update_preferences_use_case.execute(
        UpdatePreferencesRequest(
            user_id=user_id,
            community_id=str(community_id),
            preferences=preferences,
        )
    )
