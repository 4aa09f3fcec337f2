"""Application layer DI providers."""

from dishka import Scope, provide

from townhall.application.usecase.comment import (
    CreateCommentUseCase,
    GetCommentsUseCase,
    PurgeCommentUseCase,
    RemoveCommentUseCase,
)
from townhall.application.usecase.notification import (
    DeleteAllNotificationsUseCase,
    DeleteNotificationUseCase,
    GetUnreadCountUseCase,
    ListNotificationsUseCase,
    MarkAllNotificationsUseCase,
    MarkNotificationUseCase,
)
from townhall.application.usecase.post import (
    CreatePostUseCase,
    GetPostUseCase,
    ListPostsUseCase,
    ModeratePostUseCase,
)
from townhall.application.usecase.preference import (
    GetPreferencesUseCase,
    UpdatePreferencesUseCase,
)
from townhall.application.usecase.vote import ApplyVoteUseCase
from townhall.domain.service import (
    CommentService,
    NotificationService,
    PostService,
    PreferenceService,
    VoteService,
)
from townhall.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Post use cases
    @provide(scope=Scope.REQUEST)
    def get_create_post_use_case(self, post_service: PostService) -> CreatePostUseCase:
        """Provide create post use case."""
        return CreatePostUseCase(post_service=post_service)

    @provide(scope=Scope.REQUEST)
    def get_get_post_use_case(
        self, post_service: PostService, vote_service: VoteService
    ) -> GetPostUseCase:
        """Provide get post use case."""
        return GetPostUseCase(post_service=post_service, vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_list_posts_use_case(
        self, post_service: PostService, vote_service: VoteService
    ) -> ListPostsUseCase:
        """Provide list posts use case."""
        return ListPostsUseCase(post_service=post_service, vote_service=vote_service)

    @provide(scope=Scope.REQUEST)
    def get_moderate_post_use_case(
        self, post_service: PostService
    ) -> ModeratePostUseCase:
        """Provide post lifecycle use case."""
        return ModeratePostUseCase(post_service=post_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_create_comment_use_case(
        self, comment_service: CommentService
    ) -> CreateCommentUseCase:
        """Provide create comment use case."""
        return CreateCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_comments_use_case(
        self, comment_service: CommentService, vote_service: VoteService
    ) -> GetCommentsUseCase:
        """Provide get comments use case."""
        return GetCommentsUseCase(
            comment_service=comment_service, vote_service=vote_service
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_comment_use_case(
        self, comment_service: CommentService
    ) -> RemoveCommentUseCase:
        """Provide remove comment use case."""
        return RemoveCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_purge_comment_use_case(
        self, comment_service: CommentService
    ) -> PurgeCommentUseCase:
        """Provide purge comment use case."""
        return PurgeCommentUseCase(comment_service=comment_service)

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_apply_vote_use_case(self, vote_service: VoteService) -> ApplyVoteUseCase:
        """Provide apply vote use case."""
        return ApplyVoteUseCase(vote_service=vote_service)

    # Notification use cases
    @provide(scope=Scope.REQUEST)
    def get_list_notifications_use_case(
        self, notification_service: NotificationService
    ) -> ListNotificationsUseCase:
        """Provide list notifications use case."""
        return ListNotificationsUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_unread_count_use_case(
        self, notification_service: NotificationService
    ) -> GetUnreadCountUseCase:
        """Provide unread count use case."""
        return GetUnreadCountUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_notification_use_case(
        self, notification_service: NotificationService
    ) -> MarkNotificationUseCase:
        """Provide mark notification use case."""
        return MarkNotificationUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_mark_all_notifications_use_case(
        self, notification_service: NotificationService
    ) -> MarkAllNotificationsUseCase:
        """Provide mark all notifications use case."""
        return MarkAllNotificationsUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_notification_use_case(
        self, notification_service: NotificationService
    ) -> DeleteNotificationUseCase:
        """Provide delete notification use case."""
        return DeleteNotificationUseCase(notification_service=notification_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_all_notifications_use_case(
        self, notification_service: NotificationService
    ) -> DeleteAllNotificationsUseCase:
        """Provide delete all notifications use case."""
        return DeleteAllNotificationsUseCase(
            notification_service=notification_service
        )

    # Preference use cases
    @provide(scope=Scope.REQUEST)
    def get_get_preferences_use_case(
        self, preference_service: PreferenceService
    ) -> GetPreferencesUseCase:
        """Provide get preferences use case."""
        return GetPreferencesUseCase(preference_service=preference_service)

    @provide(scope=Scope.REQUEST)
    def get_update_preferences_use_case(
        self, preference_service: PreferenceService
    ) -> UpdatePreferencesUseCase:
        """Provide update preferences use case."""
        return UpdatePreferencesUseCase(preference_service=preference_service)
