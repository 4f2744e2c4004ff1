"""Async Pull requests resource client."""

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any

from prstatus.types.pulls import PullRequestSnapshot

if TYPE_CHECKING:
    from prstatus.transport import AsyncHTTPTransport

# GitHub caps per_page at 100 for every listing endpoint
MAX_PAGE_SIZE = 100


class AsyncPullsClient:
    """Async client for pull request operations."""

    def __init__(self, transport: "AsyncHTTPTransport") -> None:
        """
        Initialize the async pulls client.

        Args:
            transport: Async HTTP transport for making requests
        """
        self.transport = transport

    async def get(self, owner: str, repo: str, number: int) -> PullRequestSnapshot:
        """
        Get a pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number

        Returns:
            PullRequestSnapshot with draft/merged flags and label names
        """
        data = await self.transport.request(
            method="GET",
            path=f"/repos/{owner}/{repo}/pulls/{number}",
        )
        return self._parse_pull_request(data, owner, repo)

    async def list(self, owner: str, repo: str, limit: int) -> list[PullRequestSnapshot]:
        """
        List open pull requests, most recently updated first.

        Args:
            owner: Repository owner
            repo: Repository name
            limit: Maximum number of pull requests to return; pages of up
                to 100 are requested until it is reached

        Returns:
            List of PullRequestSnapshot objects
        """
        per_page = min(limit, MAX_PAGE_SIZE)
        pulls: list[PullRequestSnapshot] = []
        page = 1
        while len(pulls) < limit:
            data = await self.transport.request(
                method="GET",
                path=f"/repos/{owner}/{repo}/pulls",
                params={
                    "state": "open",
                    "sort": "updated",
                    "direction": "desc",
                    "per_page": per_page,
                    "page": page,
                },
            )
            pulls.extend(self._parse_pull_request(pr, owner, repo) for pr in data)

            if len(data) < per_page:
                break
            page += 1

        return pulls[:limit]

    async def iter_commit_messages(
        self,
        owner: str,
        repo: str,
        number: int,
        per_page: int = MAX_PAGE_SIZE,
    ) -> AsyncIterator[str]:
        """
        Iterate over the commit messages of a pull request, page by page.

        Stops when a page comes back shorter than ``per_page``.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Pull request number
            per_page: Page size (1-100)

        Yields:
            Commit messages, oldest first
        """
        per_page = max(1, min(per_page, MAX_PAGE_SIZE))
        page = 1
        while True:
            commits = await self.transport.request(
                method="GET",
                path=f"/repos/{owner}/{repo}/pulls/{number}/commits",
                params={"page": page, "per_page": per_page},
            )
            for commit in commits:
                yield commit["commit"]["message"]

            if len(commits) < per_page:
                return
            page += 1

    def _parse_pull_request(
        self, data: dict[str, Any], owner: str, repo: str
    ) -> PullRequestSnapshot:
        """Parse pull request data from API response."""
        base_repo = (data.get("base") or {}).get("repo") or {}
        merged = data.get("merged")
        if merged is None:
            # Listing responses omit "merged"; merged_at is always present
            merged = data.get("merged_at") is not None

        return PullRequestSnapshot(
            owner=(base_repo.get("owner") or {}).get("login", owner),
            repo=base_repo.get("name", repo),
            number=data["number"],
            title=data.get("title") or "",
            draft=bool(data.get("draft", False)),
            merged=bool(merged),
            labels=[label["name"] for label in data.get("labels", [])],
        )
