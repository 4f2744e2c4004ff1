"""
Pull request status resolution.

Turns a pull request snapshot and its reviewer states into one
``PullRequestStatus``. Resolution is a pure function of its inputs.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from prstatus.exceptions import ConfigurationError
from prstatus.types.pulls import PullRequestSnapshot
from prstatus.types.status import PullRequestStatus, ReviewerState


@dataclass(frozen=True)
class ApprovalThreshold:
    """
    How many approvals a pull request needs.

    Either an absolute count of APPROVED reviews or a percentage of every
    reviewer involved (submitted and still requested).
    """

    value: float
    is_percentage: bool = False

    @classmethod
    def parse(cls, raw: str) -> "ApprovalThreshold":
        """
        Parse ``"2"`` or ``"50%"``.

        Raises:
            ConfigurationError: If the value is not a number, is negative,
                or is a percentage above 100
        """
        text = raw.strip()
        is_percentage = text.endswith("%")
        number = text[:-1].strip() if is_percentage else text

        try:
            value = float(number) if is_percentage else int(number)
        except ValueError:
            raise ConfigurationError(
                f"Invalid approval threshold {raw!r}: expected N or N%"
            ) from None

        if not math.isfinite(value) or value < 0:
            raise ConfigurationError(f"Approval threshold {raw!r} must be a non-negative number")
        if is_percentage and value > 100:
            raise ConfigurationError(f"Approval threshold {raw!r} exceeds 100%")

        return cls(value=value, is_percentage=is_percentage)

    def is_met(self, approvals: int, total_reviewers: int) -> bool:
        """Check the threshold. A percentage of zero reviewers is never met."""
        if not self.is_percentage:
            return approvals >= self.value
        if total_reviewers == 0:
            return False
        return approvals / total_reviewers * 100 >= self.value

    def __str__(self) -> str:
        if self.is_percentage:
            return f"{self.value:g}%"
        return str(int(self.value))


def count_states(reviewers: Mapping[int, str]) -> tuple[int, int]:
    """Return ``(approvals, changes_requested)`` over distinct reviewers."""
    approvals = sum(1 for state in reviewers.values() if state == ReviewerState.APPROVED)
    changes = sum(
        1 for state in reviewers.values() if state == ReviewerState.CHANGES_REQUESTED
    )
    return approvals, changes


def resolve_status(
    snapshot: PullRequestSnapshot,
    reviewers: Mapping[int, str],
    issue_ids: Sequence[str],
    threshold: ApprovalThreshold,
    force_changes_requested: bool = False,
) -> PullRequestStatus | None:
    """
    Resolve the status of one pull request.

    First match wins: merged, draft, forced changes-requested, approval
    threshold met, any changes requested, otherwise in review.

    Args:
        snapshot: Pull request flags
        reviewers: Reviewer id to latest state, including PENDING requests
        issue_ids: Issue identifiers the pull request references
        threshold: Approval threshold
        force_changes_requested: Any CHANGES_REQUESTED overrides the threshold

    Returns:
        The status, or None when the pull request references no issue
    """
    if not issue_ids:
        return None

    if snapshot.merged:
        return PullRequestStatus.MERGED
    if snapshot.draft:
        return PullRequestStatus.DRAFT

    approvals, changes = count_states(reviewers)

    if force_changes_requested and changes > 0:
        return PullRequestStatus.CHANGES_REQUESTED

    if threshold.is_met(approvals, len(reviewers)):
        return PullRequestStatus.APPROVED
    if changes > 0:
        return PullRequestStatus.CHANGES_REQUESTED
    return PullRequestStatus.IN_REVIEW
