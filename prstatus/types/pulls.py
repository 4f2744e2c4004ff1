"""Pull request-related data models."""

from dataclasses import dataclass, field
from datetime import datetime

from prstatus.types.status import PullRequestStatus


@dataclass(frozen=True)
class RepositoryRef:
    """An ``owner/name`` repository reference."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name


@dataclass
class PullRequestSnapshot:
    """The minimal pull request state needed to resolve a status."""

    owner: str
    repo: str
    number: int
    title: str
    draft: bool = False
    merged: bool = False
    labels: list[str] = field(default_factory=list)

    @property
    def key(self) -> str:
        """Identity of the pull request across repositories."""
        return f"{self.owner}/{self.repo}#{self.number}"


@dataclass
class Review:
    """A submitted pull request review."""

    review_id: int
    reviewer_id: int
    reviewer_login: str
    reviewer_type: str  # "User", "Bot", "Organization"
    state: str
    submitted_at: datetime | None = None


@dataclass
class RequestedReviewer:
    """A reviewer whose review was requested but not yet submitted."""

    reviewer_id: int
    login: str
    reviewer_type: str


@dataclass
class ReviewPage:
    """One page of reviews and whether the page cap was hit."""

    reviews: list[Review]
    possibly_truncated: bool = False


@dataclass
class PullRequestResult:
    """Outcome of resolving one pull request."""

    snapshot: PullRequestSnapshot
    issue_ids: list[str]
    reviewers: dict[int, str]
    status: PullRequestStatus | None
