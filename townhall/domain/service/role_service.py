"""Community role domain service."""

from typing import Optional

import logfire

from townhall.domain.error import PermissionDeniedError
from townhall.domain.model import CommunityUserRole
from townhall.domain.repository import RoleRepository
from townhall.domain.value import CommunityId, Permission, UserId

from .base import Service


class RoleService(Service):
    """Domain service for role lookups and permission checks."""

    def __init__(self, role_repository: RoleRepository) -> None:
        """Initialize role service.

        Args:
            role_repository: Role repository
        """
        self.role_repository = role_repository

    async def get_role(
        self, user_id: UserId, community_id: CommunityId
    ) -> Optional[CommunityUserRole]:
        """Get the role a user holds in a community.

        Args:
            user_id: User ID
            community_id: Community ID

        Returns:
            The role, or None if the user holds none
        """
        with logfire.span(
            "role_service.get_role",
            user_id=str(user_id),
            community_id=str(community_id),
        ):
            return await self.role_repository.find_by_user_and_community(
                user_id, community_id
            )

    async def has_permission(
        self, user_id: UserId, community_id: CommunityId, permission: Permission
    ) -> bool:
        """Check whether a user's role grants a permission.

        Users without a role hold no permissions.
        """
        role = await self.get_role(user_id, community_id)
        return role is not None and role.grants(permission)

    async def authorize(
        self,
        actor_id: UserId,
        community_id: CommunityId,
        permission: Permission,
        action: str,
        resource: str,
        resource_id: str,
        owner_id: Optional[UserId] = None,
    ) -> None:
        """Allow the content owner or a holder of ``permission``.

        Args:
            actor_id: User attempting the action
            community_id: Community the content belongs to
            permission: Permission that allows acting on others' content
            action: Action name for the error message
            resource: Resource name for the error message
            resource_id: Resource ID for the error message
            owner_id: Author of the content (None if ownership does not count)

        Raises:
            PermissionDeniedError: If the actor is neither owner nor permitted
        """
        if owner_id is not None and actor_id == owner_id:
            return
        if await self.has_permission(actor_id, community_id, permission):
            return

        logfire.warn(
            "Permission denied",
            action=action,
            resource=resource,
            resource_id=resource_id,
            user_id=str(actor_id),
            permission=permission.value,
        )
        raise PermissionDeniedError(action, resource, resource_id, str(actor_id))
