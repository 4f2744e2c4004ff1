"""prstatus type definitions.

This module exports all data model types used by the package.
"""

from prstatus.types.pulls import (
    PullRequestResult,
    PullRequestSnapshot,
    RepositoryRef,
    RequestedReviewer,
    Review,
    ReviewPage,
)
from prstatus.types.status import PullRequestStatus, ReviewerState, most_severe

__all__ = [
    # Status values
    "PullRequestStatus",
    "ReviewerState",
    "most_severe",
    # Pull request types
    "PullRequestSnapshot",
    "PullRequestResult",
    "RepositoryRef",
    "Review",
    "RequestedReviewer",
    "ReviewPage",
]
