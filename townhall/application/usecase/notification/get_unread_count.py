"""Unread notification count use case."""

from uuid import UUID

from pydantic import BaseModel

from townhall.domain.service import NotificationService
from townhall.domain.value import UserId


class GetUnreadCountRequest(BaseModel):
    """Unread count request."""

    user_id: str  # User ID from authenticated user


class GetUnreadCountResponse(BaseModel):
    """Unread count response."""

    unread_count: int


class GetUnreadCountUseCase:
    """Use case for counting the user's unread notifications."""

    def __init__(self, notification_service: NotificationService) -> None:
        """Initialize unread count use case.

        Args:
            notification_service: Notification domain service
        """
        self.notification_service = notification_service

    async def execute(self, request: GetUnreadCountRequest) -> GetUnreadCountResponse:
        """Execute unread count flow."""
        count = await self.notification_service.unread_count(
            UserId(UUID(request.user_id))
        )
        return GetUnreadCountResponse(unread_count=count)
