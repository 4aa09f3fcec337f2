"""Unit tests for VoteService."""

import asyncio
from uuid import uuid4

import pytest
from sqlalchemy.orm.exc import StaleDataError

from townhall.config import StoreSettings
from townhall.domain.error import ConflictError, NotFoundError, ValidationError
from townhall.domain.repository import (
    ActivityLogRepository,
    CommentRepository,
    PostRepository,
    VoteRepository,
)
from townhall.domain.service import ActivityLogService, VoteService
from townhall.domain.value import (
    ActivityType,
    CommunityId,
    ContentStats,
    TargetType,
    UserId,
    VoteType,
)
from townhall.persistence.repository.inmemory import (
    InMemoryActivityLogRepository,
    InMemoryCommentRepository,
    InMemoryPostRepository,
    InMemoryTransactionManager,
    InMemoryVoteRepository,
)
from tests.conftest import make_comment, make_post
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


class FlakyPostRepository(InMemoryPostRepository):
    """Post repository whose first ``failures`` stat writes lose a race."""

    def __init__(self, failures: int) -> None:
        super().__init__()
        self.failures = failures
        self.attempts = 0

    async def update_stats(self, post_id, stats, expected_version):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise StaleDataError("simulated concurrent write")
        return await super().update_stats(post_id, stats, expected_version)


def build_vote_service(
    post_repo: InMemoryPostRepository, max_attempts: int = 5
) -> tuple[VoteService, InMemoryVoteRepository]:
    """Wire a VoteService by hand around the given post repository."""
    vote_repo = InMemoryVoteRepository()
    comment_repo = InMemoryCommentRepository()
    log_repo = InMemoryActivityLogRepository()
    transaction_manager = InMemoryTransactionManager(
        StoreSettings(transaction_max_attempts=max_attempts, retry_backoff_seconds=0),
        [post_repo, comment_repo, vote_repo, log_repo],
    )
    service = VoteService(
        vote_repository=vote_repo,
        post_repository=post_repo,
        comment_repository=comment_repo,
        transaction_manager=transaction_manager,
        activity_log_service=ActivityLogService(log_repo),
    )
    return service, vote_repo


class TestApplyVoteOnPost:
    """Tests for apply_vote on posts."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "votes, expected_upvotes, expected_downvotes, expected_vote",
        [
            ([VoteType.UPVOTE], 1, 0, VoteType.UPVOTE),
            ([VoteType.DOWNVOTE], 0, 1, VoteType.DOWNVOTE),
            ([VoteType.UPVOTE, VoteType.UPVOTE], 0, 0, None),
            ([VoteType.DOWNVOTE, VoteType.DOWNVOTE], 0, 0, None),
            ([VoteType.UPVOTE, VoteType.DOWNVOTE], 0, 1, VoteType.DOWNVOTE),
            ([VoteType.DOWNVOTE, VoteType.UPVOTE], 1, 0, VoteType.UPVOTE),
            (
                [VoteType.UPVOTE, VoteType.UPVOTE, VoteType.UPVOTE],
                1,
                0,
                VoteType.UPVOTE,
            ),
        ],
    )
    async def test_vote_sequences(
        self, unit_env, votes, expected_upvotes, expected_downvotes, expected_vote
    ):
        """Each sequence of votes by one user ends in the expected counters."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)

        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        # Act
        for vote_type in votes:
            stats = await vote_service.apply_vote(
                TargetType.POST, post.id, user_id, vote_type
            )

        # Assert
        assert stats.upvotes == expected_upvotes
        assert stats.downvotes == expected_downvotes

        stored = await post_repo.find_by_id(post.id)
        assert stored.stats == stats

        vote = await vote_repo.find_by_user_and_target(
            user_id, TargetType.POST, post.id
        )
        if expected_vote is None:
            assert vote is None
        else:
            assert vote.vote_type == expected_vote

    @pytest.mark.asyncio
    async def test_counters_match_vote_records(self, unit_env):
        """Counters equal the number of vote records of each direction."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        vote_repo = await unit_env.get(VoteRepository)

        post = await post_repo.save(make_post())
        users = [UserId(uuid4()) for _ in range(5)]

        sequence = [
            (users[0], VoteType.UPVOTE),
            (users[1], VoteType.UPVOTE),
            (users[2], VoteType.DOWNVOTE),
            (users[3], VoteType.UPVOTE),
            (users[3], VoteType.DOWNVOTE),  # flip
            (users[4], VoteType.UPVOTE),
            (users[4], VoteType.UPVOTE),  # toggle off
        ]

        # Act
        for user_id, vote_type in sequence:
            await vote_service.apply_vote(TargetType.POST, post.id, user_id, vote_type)

        # Assert
        records = await vote_repo.find_by_target(TargetType.POST, post.id)
        ups = sum(1 for v in records if v.vote_type == VoteType.UPVOTE)
        downs = sum(1 for v in records if v.vote_type == VoteType.DOWNVOTE)

        stored = await post_repo.find_by_id(post.id)
        assert (stored.stats.upvotes, stored.stats.downvotes) == (ups, downs)
        assert (ups, downs) == (2, 2)

    @pytest.mark.asyncio
    async def test_two_user_scenario(self, unit_env):
        """Toggles and flips by two users move the counters step by step."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        first, second = UserId(uuid4()), UserId(uuid4())

        steps = [
            (first, VoteType.UPVOTE, (1, 0)),
            (first, VoteType.UPVOTE, (0, 0)),
            (second, VoteType.DOWNVOTE, (0, 1)),
            (first, VoteType.DOWNVOTE, (0, 2)),
            (first, VoteType.DOWNVOTE, (0, 1)),
        ]

        # Act / Assert
        for user_id, vote_type, expected in steps:
            stats = await vote_service.apply_vote(
                TargetType.POST, post.id, user_id, vote_type
            )
            assert (stats.upvotes, stats.downvotes) == expected

    @pytest.mark.asyncio
    async def test_vote_on_missing_post_raises_not_found(self, unit_env):
        """Voting on a post that does not exist raises NotFoundError."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        vote_repo = await unit_env.get(VoteRepository)
        post_id = uuid4()
        user_id = UserId(uuid4())

        # Act & Assert
        with pytest.raises(NotFoundError, match="Post not found"):
            await vote_service.apply_vote(
                TargetType.POST, post_id, user_id, VoteType.UPVOTE
            )

        assert await vote_repo.find_by_target(TargetType.POST, post_id) == []

    @pytest.mark.asyncio
    async def test_vote_with_wrong_community_raises_validation(self, unit_env):
        """A community ID that is not the post's community is rejected."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())

        # Act & Assert
        with pytest.raises(ValidationError):
            await vote_service.apply_vote(
                TargetType.POST,
                post.id,
                UserId(uuid4()),
                VoteType.UPVOTE,
                community_id=CommunityId(uuid4()),
            )

        stored = await post_repo.find_by_id(post.id)
        assert stored.stats == ContentStats()

    @pytest.mark.asyncio
    async def test_vote_records_audit_entry(self, unit_env):
        """Each vote leaves an audit entry with its outcome."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        log_repo = await unit_env.get(ActivityLogRepository)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        # Act
        await vote_service.apply_vote(
            TargetType.POST, post.id, user_id, VoteType.UPVOTE
        )
        await vote_service.apply_vote(
            TargetType.POST, post.id, user_id, VoteType.DOWNVOTE
        )

        # Assert
        entries = await log_repo.find_by_target(post.id)
        assert [e.type for e in entries] == [ActivityType.VOTE, ActivityType.VOTE]
        assert [e.details["outcome"] for e in entries] == ["created", "changed"]
        assert entries[0].community_id == post.community_id


class TestApplyVoteOnComment:
    """Tests for apply_vote on comments."""

    @pytest.mark.asyncio
    async def test_comment_vote_updates_comment_not_post(self, unit_env):
        """Votes on a comment move the comment's counters only."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        comment_repo = await unit_env.get(CommentRepository)

        post = await post_repo.save(make_post())
        comment = await comment_repo.save(make_comment(post))

        # Act
        stats = await vote_service.apply_vote(
            TargetType.COMMENT, comment.id, UserId(uuid4()), VoteType.DOWNVOTE
        )

        # Assert
        assert stats.downvotes == 1
        stored_comment = await comment_repo.find_by_id(comment.id)
        assert stored_comment.stats.downvotes == 1
        stored_post = await post_repo.find_by_id(post.id)
        assert stored_post.stats == ContentStats()

    @pytest.mark.asyncio
    async def test_vote_on_missing_comment_raises_not_found(self, unit_env):
        """Voting on a comment that does not exist raises NotFoundError."""
        vote_service = await unit_env.get(VoteService)

        with pytest.raises(NotFoundError, match="Comment not found"):
            await vote_service.apply_vote(
                TargetType.COMMENT, uuid4(), UserId(uuid4()), VoteType.UPVOTE
            )


class TestVoteRetries:
    """Tests for optimistic retry of votes."""

    @pytest.mark.asyncio
    async def test_vote_succeeds_after_transient_conflicts(self):
        """A vote that loses a race is re-run and applied once."""
        # Arrange
        post_repo = FlakyPostRepository(failures=2)
        vote_service, vote_repo = build_vote_service(post_repo)
        post = await post_repo.save(make_post())
        user_id = UserId(uuid4())

        # Act
        stats = await vote_service.apply_vote(
            TargetType.POST, post.id, user_id, VoteType.UPVOTE
        )

        # Assert
        assert post_repo.attempts == 3
        assert stats.upvotes == 1
        records = await vote_repo.find_by_target(TargetType.POST, post.id)
        assert len(records) == 1

    @pytest.mark.asyncio
    async def test_vote_raises_conflict_when_retries_exhausted(self):
        """Persistent conflicts surface as ConflictError with nothing written."""
        # Arrange
        post_repo = FlakyPostRepository(failures=10)
        vote_service, vote_repo = build_vote_service(post_repo, max_attempts=3)
        post = await post_repo.save(make_post())

        # Act & Assert
        with pytest.raises(ConflictError) as exc_info:
            await vote_service.apply_vote(
                TargetType.POST, post.id, UserId(uuid4()), VoteType.UPVOTE
            )

        assert exc_info.value.attempts == 3
        assert post_repo.attempts == 3
        assert await vote_repo.find_by_target(TargetType.POST, post.id) == []
        stored = await post_repo.find_by_id(post.id)
        assert stored.stats == ContentStats()
        assert stored.version == 1


class TestGetUserVotes:
    """Tests for get_user_votes method."""

    @pytest.mark.asyncio
    async def test_returns_only_voted_items(self, unit_env):
        """Only items the user voted on appear in the mapping."""
        # Arrange
        vote_service = await unit_env.get(VoteService)
        post_repo = await unit_env.get(PostRepository)
        user_id = UserId(uuid4())

        voted = await post_repo.save(make_post())
        not_voted = await post_repo.save(make_post())
        await vote_service.apply_vote(
            TargetType.POST, voted.id, user_id, VoteType.DOWNVOTE
        )

        # Act
        votes = await vote_service.get_user_votes(
            user_id, TargetType.POST, [voted.id, not_voted.id]
        )

        # Assert
        assert votes == {voted.id: VoteType.DOWNVOTE}

    @pytest.mark.asyncio
    async def test_empty_ids_returns_empty_mapping(self, unit_env):
        """No IDs means no lookup and an empty mapping."""
        vote_service = await unit_env.get(VoteService)

        votes = await vote_service.get_user_votes(UserId(uuid4()), TargetType.POST, [])
        assert votes == {}


class TestConcurrentVotes:
    """Tests for votes issued at the same time."""

    @pytest.mark.asyncio
    async def test_concurrent_votes_keep_counters_consistent(self):
        """Interleaved votes and flips never lose an update."""
        # Arrange
        post_repo = InMemoryPostRepository()
        vote_service, vote_repo = build_vote_service(post_repo)
        post = await post_repo.save(make_post())
        users = [UserId(uuid4()) for _ in range(50)]

        # Act
        await asyncio.gather(
            *(
                vote_service.apply_vote(
                    TargetType.POST, post.id, user_id, VoteType.UPVOTE
                )
                for user_id in users
            )
        )
        await asyncio.gather(
            *(
                vote_service.apply_vote(
                    TargetType.POST, post.id, user_id, VoteType.DOWNVOTE
                )
                for user_id in users[:20]
            )
        )

        # Assert
        stored = await post_repo.find_by_id(post.id)
        assert (stored.stats.upvotes, stored.stats.downvotes) == (30, 20)
        records = await vote_repo.find_by_target(TargetType.POST, post.id)
        assert len(records) == 50
        downs = [v for v in records if v.vote_type == VoteType.DOWNVOTE]
        assert len(downs) == 20
