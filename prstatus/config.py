"""
Action configuration.

Inputs are read the way GitHub Actions passes them to a container or
composite step: as ``INPUT_<NAME>`` environment variables, with the input
name upper-cased and spaces replaced by underscores. Everything is parsed
and validated here, before any network call is made.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from prstatus.exceptions import ConfigurationError
from prstatus.extract import DEFAULT_ISSUE_PATTERN, IssuePattern, parse_pattern
from prstatus.resolver import ApprovalThreshold
from prstatus.router import WebhookRoute, parse_webhook_routes
from prstatus.types.pulls import RepositoryRef

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PR_LIMIT = 30
DEFAULT_COMMITS_PAGE_SIZE = 100

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")


def _input_key(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(environ: Mapping[str, str], name: str, default: str = "") -> str:
    """Read an action input, stripped; empty or unset returns the default."""
    value = environ.get(_input_key(name), "").strip()
    return value or default


def get_boolean_input(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    """Read a YAML 1.2 core-schema boolean input."""
    value = get_input(environ, name)
    if not value:
        return default
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Input {name!r} must be one of true|True|TRUE|false|False|FALSE, got {value!r}"
    )


def get_int_input(
    environ: Mapping[str, str], name: str, default: int, minimum: int = 0
) -> int:
    value = get_input(environ, name)
    if not value:
        return default
    try:
        number = int(value)
    except ValueError:
        raise ConfigurationError(f"Input {name!r} must be an integer, got {value!r}") from None
    if number < minimum:
        raise ConfigurationError(f"Input {name!r} must be at least {minimum}, got {number}")
    return number


def parse_repositories(raw: str) -> list[RepositoryRef]:
    """
    Parse a comma-separated ``owner/repo`` list.

    Raises:
        ConfigurationError: If an entry is not exactly ``owner/repo``
    """
    repositories: list[RepositoryRef] = []
    for entry in raw.split(","):
        entry = entry.strip()
        if not entry:
            continue
        owner, sep, name = entry.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ConfigurationError(f"Repository {entry!r} must look like owner/repo")
        ref = RepositoryRef(owner=owner, name=name)
        if ref not in repositories:
            repositories.append(ref)
    return repositories


@dataclass
class ActionConfig:
    """
    Validated configuration for one run.

    Attributes:
        token: GitHub token
        ignore_title: Do not scan the pull request title
        ignore_commits: Do not scan commit messages
        approval_threshold: Approvals needed for APPROVED
        force_changes_requested: Any CHANGES_REQUESTED review wins over the threshold
        commit_pattern: Issue pattern for commit messages
        title_pattern: Issue pattern for titles (also used for other repositories)
        webhook_routes: Prefix to URL routes
        additional_repositories: Repositories to reconcile against
        additional_repositories_pr_limit: Open pull requests to inspect per repository
        commits_page_size: Page size when listing commits
        max_retries: Retries for GitHub API and webhook calls
        api_url: GitHub REST API base URL
    """

    token: str
    ignore_title: bool = False
    ignore_commits: bool = False
    approval_threshold: ApprovalThreshold = field(
        default_factory=lambda: ApprovalThreshold(1)
    )
    force_changes_requested: bool = False
    commit_pattern: IssuePattern = field(
        default_factory=lambda: parse_pattern(DEFAULT_ISSUE_PATTERN)
    )
    title_pattern: IssuePattern = field(
        default_factory=lambda: parse_pattern(DEFAULT_ISSUE_PATTERN)
    )
    webhook_routes: list[WebhookRoute] = field(default_factory=list)
    additional_repositories: list[RepositoryRef] = field(default_factory=list)
    additional_repositories_pr_limit: int = DEFAULT_PR_LIMIT
    commits_page_size: int = DEFAULT_COMMITS_PAGE_SIZE
    max_retries: int = 0
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ActionConfig":
        """
        Load and validate the configuration from action inputs.

        Args:
            environ: Environment mapping (default: os.environ)

        Returns:
            Validated ActionConfig

        Raises:
            ConfigurationError: If an input is missing or malformed
        """
        if environ is None:
            environ = os.environ

        token = get_input(environ, "github_token") or environ.get("GITHUB_TOKEN", "")
        if not token:
            raise ConfigurationError("GITHUB_TOKEN is required")

        return cls(
            token=token,
            ignore_title=get_boolean_input(environ, "ignore-title"),
            ignore_commits=get_boolean_input(environ, "ignore-commits"),
            approval_threshold=ApprovalThreshold.parse(
                get_input(environ, "approval-threshold", "1")
            ),
            force_changes_requested=get_boolean_input(environ, "force-changes-requested"),
            commit_pattern=parse_pattern(
                get_input(environ, "find-regex-commits", DEFAULT_ISSUE_PATTERN)
            ),
            title_pattern=parse_pattern(
                get_input(environ, "find-regex-title", DEFAULT_ISSUE_PATTERN)
            ),
            webhook_routes=parse_webhook_routes(get_input(environ, "webhook-urls")),
            additional_repositories=parse_repositories(
                get_input(environ, "additional-repositories")
            ),
            additional_repositories_pr_limit=get_int_input(
                environ, "additional-repositories-pull-request-limit", DEFAULT_PR_LIMIT
            ),
            commits_page_size=get_int_input(
                environ, "commits-page-size", DEFAULT_COMMITS_PAGE_SIZE, minimum=1
            ),
            max_retries=get_int_input(environ, "max-retries", 0),
            api_url=environ.get("GITHUB_API_URL", "").strip() or DEFAULT_API_URL,
        )
