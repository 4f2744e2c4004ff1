"""
Pytest fixtures and factories for prstatus testing.

Provides common fixtures for testing the status pipeline without network
access.
"""

from collections.abc import Generator
from datetime import datetime, timedelta
from typing import Any

import pytest

from prstatus.config import ActionConfig
from prstatus.testing.mock import MockGitHubClient, MockWebhookClient
from prstatus.types.pulls import PullRequestSnapshot, RequestedReviewer, Review

_REVIEW_EPOCH = datetime(2024, 1, 15, 10, 0, 0)


# ============================================================================
# Factories
# ============================================================================


def create_mock_pull_request(
    owner: str = "octo",
    repo: str = "app",
    number: int = 1,
    title: str = "Test PR",
    **kwargs: Any,
) -> PullRequestSnapshot:
    """
    Create a PullRequestSnapshot with customizable fields.

    Args:
        owner: Repository owner
        repo: Repository name
        number: Pull request number
        title: Pull request title
        **kwargs: Additional fields to override (draft, merged, labels)

    Returns:
        PullRequestSnapshot object
    """
    return PullRequestSnapshot(owner=owner, repo=repo, number=number, title=title, **kwargs)


def create_mock_review(
    reviewer_id: int,
    state: str,
    minutes: int = 0,
    **kwargs: Any,
) -> Review:
    """
    Create a Review submitted ``minutes`` after a fixed epoch.

    Args:
        reviewer_id: Reviewer user id
        state: Review state
        minutes: Offset of submitted_at from the epoch
        **kwargs: Additional fields to override

    Returns:
        Review object
    """
    defaults: dict[str, Any] = {
        "review_id": reviewer_id * 1000 + minutes,
        "reviewer_login": f"user{reviewer_id}",
        "reviewer_type": "User",
        "submitted_at": _REVIEW_EPOCH + timedelta(minutes=minutes),
    }
    defaults.update(kwargs)
    return Review(reviewer_id=reviewer_id, state=state, **defaults)


def create_mock_requested_reviewer(
    reviewer_id: int, reviewer_type: str = "User"
) -> RequestedReviewer:
    """Create a RequestedReviewer."""
    return RequestedReviewer(
        reviewer_id=reviewer_id,
        login=f"user{reviewer_id}",
        reviewer_type=reviewer_type,
    )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockGitHubClient, None, None]:
    """
    Provide a MockGitHubClient for testing.

    Example:
        ```python
        def test_my_feature(mock_client):
            mock_client.pulls.add_pull_request(create_mock_pull_request(title="AB-1"))
            ...
            assert mock_client.was_called("pulls.get")
        ```
    """
    client = MockGitHubClient()
    yield client
    client.reset()


@pytest.fixture
def mock_webhooks() -> MockWebhookClient:
    """Provide a MockWebhookClient that records every post."""
    return MockWebhookClient()


@pytest.fixture
def action_config() -> ActionConfig:
    """Provide an ActionConfig with default inputs and a dummy token."""
    return ActionConfig(token="test-token")


@pytest.fixture
def sample_pull_request() -> PullRequestSnapshot:
    """Provide an open, non-draft pull request referencing ABC-12."""
    return create_mock_pull_request(
        number=12,
        title="ABC-12: hotfix",
        labels=["bug", "urgent"],
    )
