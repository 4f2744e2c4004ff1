"""Async webhook client.

Sends status notifications as single JSON POSTs. Failures are logged and
reported to the caller, never raised.
"""

import asyncio
from typing import Any

import httpx

from prstatus.logging import get_logger, redact_url
from prstatus.transport import USER_AGENT, RetryConfig

logger = get_logger("webhook")


class AsyncWebhookClient:
    """Async client for posting JSON notifications to webhook URLs."""

    DEFAULT_TIMEOUT = 10.0

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
        http_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the webhook client.

        Args:
            timeout: Request timeout in seconds (default: 10.0)
            retry_config: Retry behavior; the default makes a single attempt
            http_transport: Optional httpx transport (e.g. httpx.MockTransport in tests)
        """
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Content-Type": "application/json", "User-Agent": USER_AGENT},
            transport=http_transport,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncWebhookClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def post(self, url: str, payload: dict[str, Any]) -> bool:
        """
        POST a JSON payload to a webhook URL.

        Args:
            url: Destination URL
            payload: JSON-serializable body

        Returns:
            True if the endpoint answered with a 2xx status
        """
        for attempt in range(self.retry_config.max_retries + 1):
            try:
                response = await self._client.post(url, json=payload)
            except httpx.InvalidURL as e:
                logger.warning("Webhook URL %s is invalid: %s", redact_url(url), e)
                return False
            except httpx.HTTPError as e:
                logger.warning(
                    "Webhook request to %s failed: %s", redact_url(url), type(e).__name__
                )
                status_code = None
            else:
                if response.is_success:
                    return True
                status_code = response.status_code
                logger.warning(
                    "Webhook %s answered HTTP %d", redact_url(url), status_code
                )

            if attempt >= self.retry_config.max_retries:
                break
            if status_code is not None and status_code not in self.retry_config.retry_on:
                break
            await asyncio.sleep(
                min(self.retry_config.backoff_factor ** attempt, self.retry_config.max_backoff)
            )

        return False
