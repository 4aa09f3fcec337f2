"""Notification preference domain service."""

from typing import Optional

import logfire

from townhall.domain.error import NotFoundError, ValidationError
from townhall.domain.model import CommunityMembership
from townhall.domain.repository import MembershipRepository
from townhall.domain.value import (
    CategoryTag,
    CommunityId,
    NotificationPreferences,
    UserId,
)

from .base import Service


class PreferenceService(Service):
    """Resolves per-community notification preferences.

    Preferences are stored on the membership record. A member who never saved
    any gets the defaults, which are written back on first read.
    """

    def __init__(self, membership_repository: MembershipRepository) -> None:
        """Initialize preference service.

        Args:
            membership_repository: Membership repository
        """
        self.membership_repository = membership_repository

    async def _get_membership(
        self, user_id: Optional[UserId], community_id: Optional[CommunityId]
    ) -> CommunityMembership:
        if user_id is None or community_id is None:
            raise ValidationError("user_id and community_id are required")

        membership = await self.membership_repository.find_by_user_and_community(
            user_id, community_id
        )
        if not membership:
            logfire.warn(
                "Membership not found",
                user_id=str(user_id),
                community_id=str(community_id),
            )
            raise NotFoundError("Membership", f"{user_id}/{community_id}")
        return membership

    async def get_preferences(
        self, user_id: UserId, community_id: CommunityId
    ) -> NotificationPreferences:
        """Get a member's preferences, persisting the defaults if none exist.

        Args:
            user_id: User ID
            community_id: Community ID

        Returns:
            Stored preferences, or the defaults

        Raises:
            ValidationError: If an ID is missing
            NotFoundError: If the user is not a member of the community
        """
        with logfire.span(
            "preference_service.get_preferences",
            user_id=str(user_id),
            community_id=str(community_id),
        ):
            membership = await self._get_membership(user_id, community_id)
            if membership.notification_preferences is not None:
                return membership.notification_preferences

            defaults = NotificationPreferences()
            await self.membership_repository.update_preferences(
                membership.id, defaults
            )
            logfire.info(
                "Default preferences persisted",
                user_id=str(user_id),
                community_id=str(community_id),
            )
            return defaults

    async def has_preferences(self, user_id: UserId, community_id: CommunityId) -> bool:
        """Whether the member has stored preferences."""
        with logfire.span(
            "preference_service.has_preferences",
            user_id=str(user_id),
            community_id=str(community_id),
        ):
            membership = await self._get_membership(user_id, community_id)
            return membership.notification_preferences is not None

    async def initialize_preferences(
        self, user_id: UserId, community_id: CommunityId
    ) -> NotificationPreferences:
        """Persist the defaults unless preferences already exist.

        Returns:
            The preferences now stored
        """
        return await self.get_preferences(user_id, community_id)

    async def update_preferences(
        self,
        user_id: UserId,
        community_id: CommunityId,
        preferences: NotificationPreferences,
    ) -> NotificationPreferences:
        """Replace a member's preferences.

        Args:
            user_id: User ID
            community_id: Community ID
            preferences: New preferences

        Returns:
            The stored preferences

        Raises:
            NotFoundError: If the user is not a member of the community
        """
        with logfire.span(
            "preference_service.update_preferences",
            user_id=str(user_id),
            community_id=str(community_id),
        ):
            membership = await self._get_membership(user_id, community_id)
            updated = await self.membership_repository.update_preferences(
                membership.id, preferences
            )
            logfire.info(
                "Preferences updated",
                user_id=str(user_id),
                community_id=str(community_id),
            )
            return updated.notification_preferences or preferences

    @staticmethod
    def should_deliver(
        preferences: NotificationPreferences, category_tag: CategoryTag
    ) -> bool:
        """Decide whether a notification for ``category_tag`` goes out.

        Official emergency alerts are always delivered.
        """
        return preferences.allows(category_tag)
