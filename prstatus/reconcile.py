"""
Cross-repository reconciliation.

Issue identifiers tracked by the triggering pull request may also be
referenced by open pull requests in other repositories. The final status of
an identifier is the least progressed status among all of them.
"""

from collections.abc import Iterable
from typing import TYPE_CHECKING

from prstatus.extract import IssuePattern, extract_issue_ids
from prstatus.logging import get_logger
from prstatus.resolver import ApprovalThreshold, resolve_status
from prstatus.reviewers import ReviewStateCollector
from prstatus.types.pulls import PullRequestResult, PullRequestSnapshot, RepositoryRef
from prstatus.types.status import PullRequestStatus, most_severe

if TYPE_CHECKING:
    from prstatus.async_client import AsyncGitHubClient

logger = get_logger()


class CrossRepoReconciler:
    """
    Merges issue statuses across repositories.

    One instance serves one run: it owns the memo of pull requests already
    resolved, so a pull request referencing several tracked identifiers is
    resolved once.
    """

    def __init__(
        self,
        client: "AsyncGitHubClient",
        title_pattern: IssuePattern,
        threshold: ApprovalThreshold,
        force_changes_requested: bool = False,
        collector: ReviewStateCollector | None = None,
    ) -> None:
        self.client = client
        self.title_pattern = title_pattern
        self.threshold = threshold
        self.force_changes_requested = force_changes_requested
        self.collector = collector or ReviewStateCollector(client)
        self._resolved: dict[str, PullRequestStatus | None] = {}

    async def reconcile(
        self,
        base: PullRequestResult,
        repositories: Iterable[RepositoryRef],
        pr_limit: int,
    ) -> dict[str, PullRequestStatus]:
        """
        Build the issue status index for a run.

        Args:
            base: Resolved result of the triggering pull request
            repositories: Additional repositories, scanned in order
            pr_limit: Open pull requests to inspect per repository

        Returns:
            Issue identifier to most severe status. Only identifiers of the
            base pull request appear.
        """
        if base.status is None:
            return {}

        index = {issue_id: base.status for issue_id in base.issue_ids}
        self._resolved[base.snapshot.key] = base.status

        for repository in repositories:
            await self._scan_repository(repository, pr_limit, index)

        return index

    async def _scan_repository(
        self,
        repository: RepositoryRef,
        pr_limit: int,
        index: dict[str, PullRequestStatus],
    ) -> None:
        pulls = await self.client.pulls.list(repository.owner, repository.name, pr_limit)
        logger.info("Scanning %d open pull request(s) in %s", len(pulls), repository)

        for snapshot in pulls:
            tracked = [
                issue_id
                for issue_id in extract_issue_ids([snapshot.title], self.title_pattern)
                if issue_id in index
            ]
            if not tracked:
                continue

            status = await self._resolve(snapshot, tracked)
            if status is None:
                continue

            for issue_id in tracked:
                merged = most_severe(index[issue_id], status)
                if merged != index[issue_id]:
                    logger.info(
                        "%s: %s -> %s (from %s)",
                        issue_id,
                        index[issue_id].name,
                        merged.name,
                        snapshot.key,
                    )
                index[issue_id] = merged

    async def _resolve(
        self, snapshot: PullRequestSnapshot, issue_ids: list[str]
    ) -> PullRequestStatus | None:
        if snapshot.key in self._resolved:
            return self._resolved[snapshot.key]

        reviewers = await self.collector.collect(
            snapshot.owner, snapshot.repo, snapshot.number
        )
        status = resolve_status(
            snapshot,
            reviewers,
            issue_ids,
            self.threshold,
            self.force_changes_requested,
        )
        self._resolved[snapshot.key] = status
        logger.debug("Resolved %s as %s", snapshot.key, status.name if status else None)
        return status
