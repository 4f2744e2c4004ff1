"""Async Reviews resource client."""

from datetime import datetime
from typing import TYPE_CHECKING, Any

from prstatus.types.pulls import RequestedReviewer, Review, ReviewPage

if TYPE_CHECKING:
    from prstatus.transport import AsyncHTTPTransport

REVIEWS_PAGE_SIZE = 100


class AsyncReviewsClient:
    """Async client for pull request review operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async reviews client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def list_requested_reviewers(
        self, owner: str, repo: str, number: int
    ) -> list[RequestedReviewer]:
        """
        List users whose review is requested but not yet submitted.

        Team review requests are not returned.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            List of RequestedReviewer objects
        """
        data = await self.transport.request(
            method="GET",
            path=f"/repos/{owner}/{repo}/pulls/{number}/requested_reviewers",
        )

        return [
            RequestedReviewer(
                reviewer_id=user["id"],
                login=user.get("login", ""),
                reviewer_type=user.get("type", "User"),
            )
            for user in data.get("users", [])
        ]

    async def list(self, owner: str, repo: str, number: int) -> ReviewPage:
        """
        List reviews for a pull request.

        Only the first page (up to 100 reviews) is fetched. A full page is
        flagged as possibly truncated.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            ReviewPage of Review objects in API order
        """
        data = await self.transport.request(
            method="GET",
            path=f"/repos/{owner}/{repo}/pulls/{number}/reviews",
            params={"per_page": REVIEWS_PAGE_SIZE},
        )

        reviews = [self._parse_review(review) for review in data if review.get("user")]
        return ReviewPage(
            reviews=reviews,
            possibly_truncated=len(data) >= REVIEWS_PAGE_SIZE,
        )

    def _parse_review(self, data: dict[str, Any]) -> Review:
        """Parse review data from API response."""
        user = data["user"]
        submitted_at = None
        if data.get("submitted_at"):
            submitted_at = datetime.fromisoformat(data["submitted_at"].rstrip("Z"))

        return Review(
            review_id=data["id"],
            reviewer_id=user["id"],
            reviewer_login=user.get("login", ""),
            reviewer_type=user.get("type", "User"),
            state=data["state"],
            submitted_at=submitted_at,
        )
