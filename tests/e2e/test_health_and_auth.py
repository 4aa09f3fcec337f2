"""End-to-end tests for health, authentication and error responses."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from townhall.config import Settings
from townhall.interface.api.app import create_app
from townhall.util.di.container import setup_di
from townhall.util.jwt import create_token
from tests.di import build_test_container


@pytest.fixture
def client():
    """Create test client with test container."""
    app_instance = create_app()
    test_container = build_test_container()
    setup_di(app_instance, test_container)
    return TestClient(app_instance)


@pytest.fixture
def auth_cookies():
    """Auth cookie for a fresh user."""
    return {"auth_token": create_token(str(uuid4()), Settings().auth)}


class TestHealth:
    """Tests for the health endpoint."""

    def test_health_check(self, client):
        """Should report a healthy service."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuthentication:
    """Test that endpoints require a valid auth cookie."""

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", f"/communities/{uuid4()}/posts"),
            ("get", f"/posts/{uuid4()}"),
            ("get", f"/posts/{uuid4()}/comments"),
            ("get", "/notifications"),
            ("get", "/notifications/unread-count"),
            ("delete", "/notifications"),
            ("get", f"/communities/{uuid4()}/notification-preferences"),
        ],
    )
    def test_requires_auth_cookie(self, client, method, path):
        """Should return 401 when not authenticated."""
        response = getattr(client, method)(path)

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_invalid_token_is_rejected(self, client):
        """Should return 401 with an invalid token."""
        response = client.post(
            f"/posts/{uuid4()}/vote",
            json={"vote_type": "upvote"},
            cookies={"auth_token": "invalid-token"},
        )

        assert response.status_code == 401


class TestErrorResponses:
    """Domain errors surface as HTTP status codes."""

    def test_unknown_post_returns_404(self, client, auth_cookies):
        """Should return 404 for a post that does not exist."""
        post_id = uuid4()

        response = client.get(f"/posts/{post_id}", cookies=auth_cookies)

        assert response.status_code == 404
        assert response.json()["detail"] == f"Post not found: {post_id}"

    def test_malformed_id_returns_422(self, client, auth_cookies):
        """Should reject IDs that are not UUIDs."""
        response = client.get("/posts/not-a-uuid", cookies=auth_cookies)

        assert response.status_code == 422

    def test_vote_on_unknown_comment_returns_404(self, client, auth_cookies):
        """Should return 404 when voting on a missing comment."""
        response = client.post(
            f"/comments/{uuid4()}/vote",
            json={"vote_type": "downvote"},
            cookies=auth_cookies,
        )

        assert response.status_code == 404

    def test_preferences_without_membership_returns_404(self, client, auth_cookies):
        """Non-members have no preferences to read."""
        response = client.get(
            f"/communities/{uuid4()}/notification-preferences", cookies=auth_cookies
        )

        assert response.status_code == 404
