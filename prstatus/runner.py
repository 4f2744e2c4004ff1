"""
One run of the status pipeline.

Extracts the issue identifiers of the triggering pull request, resolves its
status, reconciles it with pull requests in additional repositories and
notifies the configured webhooks.
"""

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from prstatus.async_client import AsyncGitHubClient
from prstatus.async_clients.webhooks import AsyncWebhookClient
from prstatus.config import ActionConfig
from prstatus.exceptions import ConfigurationError, PRStatusError
from prstatus.extract import extract_issue_ids, merge_issue_ids
from prstatus.logging import get_logger
from prstatus.reconcile import CrossRepoReconciler
from prstatus.resolver import resolve_status
from prstatus.reviewers import ReviewStateCollector
from prstatus.router import WebhookDelivery, WebhookRouter
from prstatus.transport import RetryConfig
from prstatus.types.pulls import PullRequestResult, PullRequestSnapshot
from prstatus.types.status import PullRequestStatus

logger = get_logger()


@dataclass
class RunResult:
    """Everything a run computed. ``base`` is None when no issue was found."""

    base: PullRequestResult | None
    index: dict[str, PullRequestStatus] = field(default_factory=dict)
    deliveries: list[WebhookDelivery] = field(default_factory=list)


def load_event_pull_request(path: str) -> tuple[str, str, int]:
    """
    Read the triggering pull request coordinates from a GitHub event payload.

    Args:
        path: Path of the event JSON (GITHUB_EVENT_PATH)

    Returns:
        ``(owner, repo, number)``

    Raises:
        ConfigurationError: If the file is unreadable or not a pull request event
    """
    try:
        with open(path, encoding="utf-8") as f:
            event: Any = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigurationError(f"Cannot read event payload {path!r}: {e}") from e

    if not isinstance(event, dict):
        raise ConfigurationError(f"Event payload {path!r} is not a JSON object")

    pull_request = event.get("pull_request")
    if not pull_request:
        raise ConfigurationError("The triggering event has no pull_request payload")

    try:
        base_repo = pull_request["base"]["repo"]
        return base_repo["owner"]["login"], base_repo["name"], int(pull_request["number"])
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Malformed pull_request payload: {e}") from e


async def collect_issue_ids(
    client: AsyncGitHubClient,
    config: ActionConfig,
    snapshot: PullRequestSnapshot,
) -> list[str]:
    """Extract issue identifiers from commit messages and the title, as enabled."""
    from_commits: list[str] = []
    if not config.ignore_commits:
        messages = [
            message
            async for message in client.pulls.iter_commit_messages(
                snapshot.owner,
                snapshot.repo,
                snapshot.number,
                per_page=config.commits_page_size,
            )
        ]
        logger.info("Read %d commit message(s)", len(messages))
        from_commits = extract_issue_ids(messages, config.commit_pattern)

    from_title: list[str] = []
    if not config.ignore_title:
        from_title = extract_issue_ids([snapshot.title], config.title_pattern)

    return merge_issue_ids(from_commits, from_title)


async def run(
    config: ActionConfig,
    client: AsyncGitHubClient,
    webhooks: AsyncWebhookClient,
    owner: str,
    repo: str,
    number: int,
) -> RunResult:
    """
    Run the pipeline for one pull request.

    Args:
        config: Validated configuration
        client: GitHub client
        webhooks: Webhook client
        owner: Owner of the triggering repository
        repo: Name of the triggering repository
        number: Triggering pull request number

    Returns:
        RunResult with the final index and the webhook deliveries made

    Raises:
        UpstreamFetchError: If any GitHub call fails
    """
    snapshot = await client.pulls.get(owner, repo, number)
    logger.info("Processing %s: %s", snapshot.key, snapshot.title)

    issue_ids = await collect_issue_ids(client, config, snapshot)
    if not issue_ids:
        logger.info("No issue identifiers found in %s, nothing to report", snapshot.key)
        return RunResult(base=None)
    logger.info("Issue identifiers: %s", ", ".join(issue_ids))

    collector = ReviewStateCollector(client)
    reviewers = await collector.collect(snapshot.owner, snapshot.repo, snapshot.number)
    status = resolve_status(
        snapshot,
        reviewers,
        issue_ids,
        config.approval_threshold,
        config.force_changes_requested,
    )
    base = PullRequestResult(
        snapshot=snapshot, issue_ids=issue_ids, reviewers=reviewers, status=status
    )
    logger.info(
        "%s resolved as %s (%d reviewer(s), threshold %s)",
        snapshot.key,
        status.name if status else None,
        len(reviewers),
        config.approval_threshold,
    )

    reconciler = CrossRepoReconciler(
        client,
        config.title_pattern,
        config.approval_threshold,
        config.force_changes_requested,
        collector=collector,
    )
    index = await reconciler.reconcile(
        base, config.additional_repositories, config.additional_repositories_pr_limit
    )

    router = WebhookRouter(webhooks, config.webhook_routes)
    deliveries = await router.dispatch(index, snapshot)

    return RunResult(base=base, index=index, deliveries=deliveries)


async def main(environ: Mapping[str, str] | None = None) -> int:
    """
    Entry point for the action: load everything from the environment and run once.

    Returns:
        Process exit code, 0 on success (including the no-issue case)
    """
    if environ is None:
        environ = os.environ

    try:
        config = ActionConfig.from_env(environ)
        event_path = environ.get("GITHUB_EVENT_PATH")
        if not event_path:
            raise ConfigurationError("GITHUB_EVENT_PATH environment variable not set")
        owner, repo, number = load_event_pull_request(event_path)

        retry_config = RetryConfig(max_retries=config.max_retries)
        async with AsyncGitHubClient(
            token=config.token, base_url=config.api_url, retry_config=retry_config
        ) as client, AsyncWebhookClient(retry_config=retry_config) as webhooks:
            await run(config, client, webhooks, owner, repo, number)
    except PRStatusError as e:
        logger.error("%s", e)
        return 1

    return 0
