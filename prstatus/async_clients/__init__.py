"""prstatus async resource clients."""

from prstatus.async_clients.pulls import AsyncPullsClient
from prstatus.async_clients.reviews import AsyncReviewsClient
from prstatus.async_clients.webhooks import AsyncWebhookClient

__all__ = [
    "AsyncPullsClient",
    "AsyncReviewsClient",
    "AsyncWebhookClient",
]
