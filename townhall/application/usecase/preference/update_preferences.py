"""Update notification preferences use case."""

from uuid import UUID

from pydantic import BaseModel

from townhall.domain.service import PreferenceService
from townhall.domain.value import CommunityId, NotificationPreferences, UserId

from .get_preferences import PreferencesResponse


class UpdatePreferencesRequest(BaseModel):
    """Update preferences request."""

    user_id: str  # User ID from authenticated user
    community_id: str  # UUID string
    preferences: NotificationPreferences


class UpdatePreferencesUseCase:
    """Use case for replacing the caller's notification preferences."""

    def __init__(self, preference_service: PreferenceService) -> None:
        """Initialize update preferences use case.

        Args:
            preference_service: Preference domain service
        """
        self.preference_service = preference_service

    async def execute(self, request: UpdatePreferencesRequest) -> PreferencesResponse:
        """Execute update preferences flow.

        Raises:
            NotFoundError: If the caller is not a member of the community
        """
        preferences = await self.preference_service.update_preferences(
            user_id=UserId(UUID(request.user_id)),
            community_id=CommunityId(UUID(request.community_id)),
            preferences=request.preferences,
        )
        return PreferencesResponse(
            community_id=request.community_id, preferences=preferences
        )
