"""prstatus - pull request review status sync for issue trackers."""

from prstatus.async_client import AsyncGitHubClient
from prstatus.async_clients.webhooks import AsyncWebhookClient
from prstatus.config import ActionConfig
from prstatus.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    NotFoundError,
    PartialDataWarning,
    PRStatusError,
    RateLimitedError,
    ServerError,
    UpstreamFetchError,
    ValidationError,
)
from prstatus.extract import IssuePattern, extract_issue_ids, parse_pattern
from prstatus.logging import configure_logging, get_logger
from prstatus.reconcile import CrossRepoReconciler
from prstatus.resolver import ApprovalThreshold, resolve_status
from prstatus.reviewers import ReviewStateCollector
from prstatus.router import WebhookRoute, WebhookRouter, parse_webhook_routes
from prstatus.runner import RunResult, run
from prstatus.transport import AsyncHTTPTransport, RetryConfig
from prstatus.types import (
    PullRequestResult,
    PullRequestSnapshot,
    PullRequestStatus,
    RepositoryRef,
    ReviewerState,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Clients
    "AsyncGitHubClient",
    "AsyncWebhookClient",
    # Configuration
    "ActionConfig",
    # Pipeline
    "IssuePattern",
    "parse_pattern",
    "extract_issue_ids",
    "ReviewStateCollector",
    "ApprovalThreshold",
    "resolve_status",
    "CrossRepoReconciler",
    "WebhookRoute",
    "WebhookRouter",
    "parse_webhook_routes",
    "RunResult",
    "run",
    # Types
    "PullRequestStatus",
    "PullRequestSnapshot",
    "PullRequestResult",
    "RepositoryRef",
    "ReviewerState",
    # Exceptions
    "PRStatusError",
    "ConfigurationError",
    "UpstreamFetchError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "PartialDataWarning",
    # Transport
    "AsyncHTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
