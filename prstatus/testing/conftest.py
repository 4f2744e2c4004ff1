"""
Pytest plugin for prstatus testing fixtures.

Re-exports the fixtures from fixtures.py so they can be discovered by pytest.
To use them, add this to your top-level conftest.py:

    pytest_plugins = ["prstatus.testing.conftest"]
"""

from prstatus.testing.fixtures import (
    action_config,
    mock_client,
    mock_webhooks,
    sample_pull_request,
)

__all__ = [
    "action_config",
    "mock_client",
    "mock_webhooks",
    "sample_pull_request",
]
