"""Domain layer DI providers."""

from dishka import Scope, provide

from townhall.config import AuthSettings, ModerationSettings, StoreSettings
from townhall.domain.repository import (
    ActivityLogRepository,
    CommentRepository,
    MembershipRepository,
    NotificationRepository,
    PostRepository,
    RoleRepository,
    TransactionManager,
    VoteRepository,
)
from townhall.domain.service import (
    ActivityLogService,
    CommentService,
    JWTService,
    NotificationService,
    PostService,
    PreferenceService,
    RoleService,
    VoteService,
)
from townhall.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_activity_log_service(
        self, activity_log_repository: ActivityLogRepository
    ) -> ActivityLogService:
        """Provide audit trail domain service."""
        return ActivityLogService(activity_log_repository=activity_log_repository)

    @provide
    def get_role_service(self, role_repository: RoleRepository) -> RoleService:
        """Provide role and permission domain service."""
        return RoleService(role_repository=role_repository)

    @provide
    def get_preference_service(
        self, membership_repository: MembershipRepository
    ) -> PreferenceService:
        """Provide notification preference resolver."""
        return PreferenceService(membership_repository=membership_repository)

    @provide
    def get_notification_service(
        self,
        notification_repository: NotificationRepository,
        membership_repository: MembershipRepository,
        preference_service: PreferenceService,
        transaction_manager: TransactionManager,
        store_settings: StoreSettings,
    ) -> NotificationService:
        """Provide notification domain service."""
        return NotificationService(
            notification_repository=notification_repository,
            membership_repository=membership_repository,
            preference_service=preference_service,
            transaction_manager=transaction_manager,
            store_settings=store_settings,
        )

    @provide
    def get_vote_service(
        self,
        vote_repository: VoteRepository,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        transaction_manager: TransactionManager,
        activity_log_service: ActivityLogService,
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository,
            post_repository=post_repository,
            comment_repository=comment_repository,
            transaction_manager=transaction_manager,
            activity_log_service=activity_log_service,
        )

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        post_repository: PostRepository,
        vote_repository: VoteRepository,
        transaction_manager: TransactionManager,
        role_service: RoleService,
        activity_log_service: ActivityLogService,
        moderation_settings: ModerationSettings,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository,
            post_repository=post_repository,
            vote_repository=vote_repository,
            transaction_manager=transaction_manager,
            role_service=role_service,
            activity_log_service=activity_log_service,
            moderation_settings=moderation_settings,
        )

    @provide
    def get_post_service(
        self,
        post_repository: PostRepository,
        comment_repository: CommentRepository,
        vote_repository: VoteRepository,
        transaction_manager: TransactionManager,
        role_service: RoleService,
        activity_log_service: ActivityLogService,
        notification_service: NotificationService,
        moderation_settings: ModerationSettings,
    ) -> PostService:
        """Provide post domain service."""
        return PostService(
            post_repository=post_repository,
            comment_repository=comment_repository,
            vote_repository=vote_repository,
            transaction_manager=transaction_manager,
            role_service=role_service,
            activity_log_service=activity_log_service,
            notification_service=notification_service,
            moderation_settings=moderation_settings,
        )
