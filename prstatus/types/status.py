"""Pull request status and reviewer state values."""

from enum import IntEnum


class PullRequestStatus(IntEnum):
    """
    Discrete pull request status, ordered by progress.

    Lower values are less progressed, so ``min()`` over statuses yields the
    most severe one.
    """

    DRAFT = 1
    CHANGES_REQUESTED = 2
    IN_REVIEW = 3
    APPROVED = 4
    MERGED = 5


class ReviewerState:
    """Known GitHub review states. Other provider strings pass through as-is."""

    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    PENDING = "PENDING"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"


def most_severe(
    current: PullRequestStatus, other: PullRequestStatus
) -> PullRequestStatus:
    """Return the less progressed of two statuses."""
    return PullRequestStatus(min(current, other))
