"""
prstatus async GitHub client.

Provides the async interface to the parts of the GitHub REST API the status
engine reads: pull requests, their commits, reviews and requested reviewers.
"""

import os
from typing import Any

import httpx

from prstatus.async_clients import AsyncPullsClient, AsyncReviewsClient
from prstatus.exceptions import ConfigurationError
from prstatus.transport import AsyncHTTPTransport, RetryConfig


class AsyncGitHubClient:
    """
    Async client for the GitHub REST API.

    Aggregates the async resource clients and handles authentication.
    Uses httpx for async HTTP operations.

    Example:
        ```python
        import asyncio
        from prstatus import AsyncGitHubClient

        async def main():
            async with AsyncGitHubClient(token="ghp_...") as client:
                pr = await client.pulls.get("octo", "app", 42)
                page = await client.reviews.list("octo", "app", 42)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the async GitHub client.

        Args:
            token: GitHub token (GITHUB_TOKEN or a personal access token)
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
            http_transport: Optional httpx transport, mainly for tests
        """
        if not token:
            raise ConfigurationError("A GitHub token is required")

        self.base_url = base_url
        self.timeout = timeout

        self._transport = AsyncHTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
            http_transport=http_transport,
        )

        self.pulls = AsyncPullsClient(self._transport)
        self.reviews = AsyncReviewsClient(self._transport)

    @classmethod
    def from_env(
        cls,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
    ) -> "AsyncGitHubClient":
        """
        Create an async client from environment variables.

        Environment variables:
            GITHUB_TOKEN: Token used for API calls (required)
            GITHUB_API_URL: Base URL for API (optional, set by GitHub Actions on GHES)

        Raises:
            ConfigurationError: If GITHUB_TOKEN is missing
        """
        token = os.environ.get("GITHUB_TOKEN")
        base_url = os.environ.get("GITHUB_API_URL", cls.DEFAULT_BASE_URL)

        if not token:
            raise ConfigurationError("GITHUB_TOKEN environment variable not set")

        return cls(
            token=token,
            base_url=base_url,
            timeout=timeout,
            retry_config=retry_config,
        )

    @property
    def transport(self) -> AsyncHTTPTransport:
        """Get the underlying async HTTP transport (for advanced use cases)."""
        return self._transport

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "AsyncGitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
