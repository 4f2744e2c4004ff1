"""
Reviewer state collection.

Reduces the reviews and review requests of one pull request to a single
state per reviewer, keyed by the reviewer's numeric GitHub id.
"""

import warnings
from datetime import datetime
from typing import TYPE_CHECKING

from prstatus.exceptions import PartialDataWarning
from prstatus.logging import get_logger
from prstatus.types.pulls import Review
from prstatus.types.status import ReviewerState

if TYPE_CHECKING:
    from prstatus.async_client import AsyncGitHubClient

logger = get_logger()

BOT_TYPE = "Bot"
USER_TYPE = "User"


def _review_order(review: Review) -> tuple[bool, datetime]:
    # Reviews without a timestamp (a viewer's own pending review) sort last
    return (review.submitted_at is None, review.submitted_at or datetime.min)


def reduce_reviews(reviews: list[Review]) -> dict[int, str]:
    """
    Reduce reviews to the latest state per reviewer.

    Bot reviews are dropped. Reviews are stable-sorted by submission time
    before reduction so the latest state wins whatever order the API used.
    """
    reviewers: dict[int, str] = {}
    human_reviews = [r for r in reviews if r.reviewer_type != BOT_TYPE]
    for review in sorted(human_reviews, key=_review_order):
        reviewers[review.reviewer_id] = review.state
    return reviewers


class ReviewStateCollector:
    """Fetches reviews and review requests and reduces them to reviewer states."""

    def __init__(self, client: "AsyncGitHubClient") -> None:
        self.client = client

    async def collect(self, owner: str, repo: str, number: int) -> dict[int, str]:
        """
        Collect the current state of every reviewer of a pull request.

        Submitted reviews are reduced first. Requested reviewers who have not
        submitted anything are then added as PENDING; a reviewer who already
        submitted a review keeps that state.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            Mapping of reviewer id to review state
        """
        page = await self.client.reviews.list(owner, repo, number)
        if page.possibly_truncated:
            message = (
                f"{owner}/{repo}#{number} has at least {len(page.reviews)} reviews; "
                "only the first page was read and reviewer counts may be low"
            )
            logger.warning(message)
            warnings.warn(message, PartialDataWarning, stacklevel=2)

        reviewers = reduce_reviews(page.reviews)

        requested = await self.client.reviews.list_requested_reviewers(owner, repo, number)
        for reviewer in requested:
            if reviewer.reviewer_type != USER_TYPE:
                continue
            reviewers.setdefault(reviewer.reviewer_id, ReviewerState.PENDING)

        logger.debug("Reviewers of %s/%s#%d: %s", owner, repo, number, reviewers)
        return reviewers
