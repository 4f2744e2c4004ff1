"""
Webhook routing.

Issue identifiers are grouped by status, then by destination: a route
matches an identifier when its prefix is ``*`` or a literal prefix of the
identifier. Each destination gets at most one notification per status.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from prstatus.exceptions import ConfigurationError
from prstatus.logging import get_logger, log_webhook_delivery, redact_url
from prstatus.types.pulls import PullRequestSnapshot
from prstatus.types.status import PullRequestStatus

if TYPE_CHECKING:
    from prstatus.async_clients.webhooks import AsyncWebhookClient

logger = get_logger()

WILDCARD = "*"


@dataclass(frozen=True)
class WebhookRoute:
    """An issue identifier prefix mapped to a destination URL."""

    prefix: str
    url: str

    def matches(self, issue_id: str) -> bool:
        return self.prefix == WILDCARD or issue_id.startswith(self.prefix)


@dataclass
class WebhookDelivery:
    """Record of one notification sent by the router."""

    url: str
    status: PullRequestStatus
    issues: list[str]
    delivered: bool


def parse_webhook_routes(raw: str) -> list[WebhookRoute]:
    """
    Parse newline-separated ``prefix:url`` entries.

    The entry is split on its first colon, so URLs keep their scheme. Blank
    lines are skipped.

    Raises:
        ConfigurationError: If an entry has no prefix or no valid http(s) URL
    """
    routes: list[WebhookRoute] = []
    for line in raw.splitlines():
        entry = line.strip()
        if not entry:
            continue

        prefix, sep, url = entry.partition(":")
        prefix, url = prefix.strip(), url.strip()
        if not sep or not prefix:
            raise ConfigurationError(
                f"Webhook entry {redact_url(entry)!r} must look like PREFIX:URL"
            )
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(
                f"Webhook entry for prefix {prefix!r} has an invalid URL: {e}"
            ) from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise ConfigurationError(
                f"Webhook entry for prefix {prefix!r} has no http(s) URL"
            )
        routes.append(WebhookRoute(prefix=prefix, url=url))
    return routes


def group_by_status(
    index: Mapping[str, PullRequestStatus],
) -> dict[PullRequestStatus, list[str]]:
    """Invert an issue status index into status batches, in index order."""
    batches: dict[PullRequestStatus, list[str]] = {}
    for issue_id, status in index.items():
        batches.setdefault(status, []).append(issue_id)
    return batches


def group_by_destination(
    issue_ids: Iterable[str], routes: Iterable[WebhookRoute]
) -> dict[str, list[str]]:
    """
    Map each destination URL to the identifiers routed to it.

    An identifier matching several routes goes to each of their URLs; routes
    sharing a URL are merged into one destination.
    """
    routes = list(routes)
    destinations: dict[str, list[str]] = {}
    for issue_id in issue_ids:
        for route in routes:
            if not route.matches(issue_id):
                continue
            matched = destinations.setdefault(route.url, [])
            if issue_id not in matched:
                matched.append(issue_id)
    return destinations


def build_payload(
    status: PullRequestStatus,
    issue_ids: list[str],
    snapshot: PullRequestSnapshot,
) -> dict[str, Any]:
    """Build the JSON body sent to a webhook."""
    return {
        "issues": list(issue_ids),
        "pullRequest": {
            "status": status.name,
            "title": snapshot.title,
            "labels": list(snapshot.labels),
        },
    }


class WebhookRouter:
    """Dispatches issue statuses to their webhook destinations."""

    def __init__(
        self, webhooks: "AsyncWebhookClient", routes: Iterable[WebhookRoute]
    ) -> None:
        self.webhooks = webhooks
        self.routes = tuple(routes)

    async def dispatch(
        self,
        index: Mapping[str, PullRequestStatus],
        snapshot: PullRequestSnapshot,
    ) -> list[WebhookDelivery]:
        """
        Send one notification per (status, destination) pair.

        Args:
            index: Final status per issue identifier
            snapshot: The pull request that triggered the run; its title and
                labels are included in every payload

        Returns:
            One WebhookDelivery per call made
        """
        if not self.routes:
            logger.info("No webhook routes configured, nothing to send")
            return []

        deliveries: list[WebhookDelivery] = []
        for status, issue_ids in group_by_status(index).items():
            destinations = group_by_destination(issue_ids, self.routes)
            if not destinations:
                logger.info("No route matches %s issues %s", status.name, issue_ids)
                continue

            for url, matched in destinations.items():
                payload = build_payload(status, matched, snapshot)
                delivered = await self.webhooks.post(url, payload)
                log_webhook_delivery(url, status.name, len(matched), delivered)
                deliveries.append(
                    WebhookDelivery(
                        url=url, status=status, issues=matched, delivered=delivered
                    )
                )
        return deliveries
