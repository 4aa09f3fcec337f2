"""Get notification preferences use case."""

from uuid import UUID

from pydantic import BaseModel

from townhall.domain.service import PreferenceService
from townhall.domain.value import CommunityId, NotificationPreferences, UserId


class GetPreferencesRequest(BaseModel):
    """Get preferences request."""

    user_id: str  # User ID from authenticated user
    community_id: str  # UUID string


class PreferencesResponse(BaseModel):
    """Notification preferences of a member in one community."""

    community_id: str
    preferences: NotificationPreferences


class GetPreferencesUseCase:
    """Use case for reading the caller's notification preferences."""

    def __init__(self, preference_service: PreferenceService) -> None:
        """Initialize get preferences use case.

        Args:
            preference_service: Preference domain service
        """
        self.preference_service = preference_service

    async def execute(self, request: GetPreferencesRequest) -> PreferencesResponse:
        """Execute get preferences flow.

        Members who never saved preferences get the defaults, which are
        stored on first read.

        Raises:
            NotFoundError: If the caller is not a member of the community
        """
        preferences = await self.preference_service.get_preferences(
            UserId(UUID(request.user_id)), CommunityId(UUID(request.community_id))
        )
        return PreferencesResponse(
            community_id=request.community_id, preferences=preferences
        )
