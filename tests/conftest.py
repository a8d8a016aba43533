"""Shared test fixtures."""

from datetime import datetime, timezone
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from src.skill_service.main import app
from src.skill_service.models.protocol import TIMESTAMP_FORMAT


@pytest.fixture
def client() -> TestClient:
    """Test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for freshness checks."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_envelope() -> Callable[..., dict[str, Any]]:
    """Build a raw skill request envelope with a fresh timestamp."""

    def _make(
        request_type: str = "IntentRequest",
        intent: dict[str, Any] | None = None,
        timestamp: str | None = None,
        application_id: str = "amzn1.ask.skill.test",
        attributes: dict[str, Any] | None = None,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        user: dict[str, Any] = {"userId": "amzn1.ask.account.user"}
        if access_token is not None:
            user["accessToken"] = access_token

        request: dict[str, Any] = {
            "type": request_type,
            "requestId": "amzn1.echo-api.request.1",
            "timestamp": timestamp or datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT),
            "locale": "en-US",
        }
        if intent is not None:
            request["intent"] = intent

        return {
            "version": "1.0",
            "session": {
                "new": True,
                "sessionId": "amzn1.echo-api.session.1",
                "application": {"applicationId": application_id},
                "attributes": attributes or {},
                "user": user,
            },
            "request": request,
        }

    return _make
