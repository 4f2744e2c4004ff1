"""prstatus testing utilities.

Provides mock clients and fixtures for testing code built on the status
pipeline.
"""

from prstatus.testing.fixtures import (
    create_mock_pull_request,
    create_mock_requested_reviewer,
    create_mock_review,
)
from prstatus.testing.mock import (
    MockCall,
    MockGitHubClient,
    MockPost,
    MockWebhookClient,
)

__all__ = [
    # Mock clients
    "MockGitHubClient",
    "MockWebhookClient",
    "MockCall",
    "MockPost",
    # Helper functions
    "create_mock_pull_request",
    "create_mock_review",
    "create_mock_requested_reviewer",
]
