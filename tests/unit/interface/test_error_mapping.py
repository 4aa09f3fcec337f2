"""Unit tests for mapping domain errors onto HTTP responses."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from townhall.domain.error import (
    ConflictError,
    DomainError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from townhall.interface.error import register_error_handlers, status_code_for


@pytest.mark.parametrize(
    "error, expected",
    [
        (NotFoundError("Post", "123"), 404),
        (PermissionDeniedError("pin", "post", "123", "u1"), 403),
        (ValidationError("Cannot pin a post that is archived"), 422),
        (ConflictError("apply_vote", 5), 409),
        (DomainError("something else"), 400),
    ],
)
def test_status_code_for(error, expected):
    """Each domain error maps to its HTTP status."""
    assert status_code_for(error) == expected


def test_handler_renders_detail():
    """Raised domain errors become JSON responses with a detail message."""
    # Arrange
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/missing")
    async def missing():
        raise NotFoundError("Post", "abc")

    @app.get("/busy")
    async def busy():
        raise ConflictError("apply_vote", 5)

    client = TestClient(app)

    # Act
    missing_response = client.get("/missing")
    busy_response = client.get("/busy")

    # Assert
    assert missing_response.status_code == 404
    assert missing_response.json() == {"detail": "Post not found: abc"}
    assert busy_response.status_code == 409
    assert "after 5 attempts" in busy_response.json()["detail"]
