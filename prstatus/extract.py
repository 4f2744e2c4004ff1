"""
Issue identifier extraction.

Issue identifiers (``ABC-123`` style keys) are pulled out of commit messages
and pull request titles with configurable patterns. Patterns are written the
way GitHub Actions users write JavaScript regex literals, ``/PATTERN/FLAGS``,
and are compiled once when the configuration is loaded.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

from prstatus.exceptions import ConfigurationError

DEFAULT_ISSUE_PATTERN = r"/[A-Za-z]{2,4}-\d+/g"

# JavaScript flag letters. "g" and "u" carry no meaning here: matching is
# always global and str patterns are always Unicode.
_FLAG_MAP = {
    "g": 0,
    "u": 0,
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}


@dataclass(frozen=True)
class IssuePattern:
    """A validated, compiled issue identifier pattern."""

    source: str
    flags: str
    regex: re.Pattern[str]

    def __str__(self) -> str:
        return f"/{self.source}/{self.flags}"


def parse_pattern(value: str) -> IssuePattern:
    """
    Parse a delimited pattern string into a compiled IssuePattern.

    Args:
        value: Pattern like ``/[A-Z]{2,4}-\\d+/gi``

    Returns:
        IssuePattern holding the source, flags and compiled regex

    Raises:
        ConfigurationError: If the delimiters are missing, a flag is not
            supported, or the pattern does not compile
    """
    value = value.strip()
    closing = value.rfind("/")
    if not value.startswith("/") or closing <= 0:
        raise ConfigurationError(
            f"Pattern {value!r} must be written as /PATTERN/FLAGS"
        )

    source = value[1:closing]
    flags = value[closing + 1:]
    if not source:
        raise ConfigurationError(f"Pattern {value!r} is empty")

    re_flags = 0
    for flag in flags:
        if flag not in _FLAG_MAP:
            raise ConfigurationError(
                f"Unsupported flag {flag!r} in pattern {value!r}"
            )
        re_flags |= _FLAG_MAP[flag]

    try:
        regex = re.compile(source, re_flags)
    except re.error as e:
        raise ConfigurationError(f"Invalid pattern {value!r}: {e}") from e

    return IssuePattern(source=source, flags=flags, regex=regex)


def extract_issue_ids(texts: Iterable[str], pattern: IssuePattern) -> list[str]:
    """
    Find issue identifiers in a sequence of texts.

    Every non-overlapping match of every text is collected, then duplicates
    are dropped keeping the first occurrence.

    Args:
        texts: Commit messages, titles, or any other strings
        pattern: Compiled issue pattern

    Returns:
        Issue identifiers in first-seen order
    """
    found: dict[str, None] = {}
    for text in texts:
        for match in pattern.regex.finditer(text):
            found.setdefault(match.group(0), None)
    return list(found)


def merge_issue_ids(*groups: Iterable[str]) -> list[str]:
    """Concatenate identifier groups, dropping duplicates in first-seen order."""
    return list(dict.fromkeys(issue_id for group in groups for issue_id in group))
