"""Shared fixtures for the prstatus test suite."""

from prstatus.testing.fixtures import (  # noqa: F401
    action_config,
    mock_client,
    mock_webhooks,
    sample_pull_request,
)
