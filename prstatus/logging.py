"""
prstatus logging utilities.

Provides configurable logging for run progress, GitHub API requests/responses
and webhook deliveries. Ensures no sensitive data (tokens, webhook secrets) is
logged.
"""

import logging
import re
from typing import Any
from urllib.parse import urlsplit

# Create package loggers
_root_logger = logging.getLogger("prstatus")
_http_logger = logging.getLogger("prstatus.http")
_webhook_logger = logging.getLogger("prstatus.webhook")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # GitHub tokens (classic, fine-grained, app installation)
    (re.compile(r"\b(ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{20,}\b"), "[TOKEN_REDACTED]"),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}\b"), "[TOKEN_REDACTED]"),
    # Authorization header values
    (re.compile(r"(Bearer|token)\s+[A-Za-z0-9_\-.]+", re.IGNORECASE), r"\1 [REDACTED]"),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = {"authorization", "secret", "token", "password", "api_key"}


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    webhook_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure prstatus logging.

    Args:
        level: Default log level for all prstatus loggers (default: INFO)
        http_level: Log level for GitHub API request/response logging (default: same as level)
        webhook_level: Log level for webhook deliveries (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from prstatus.logging import configure_logging

        # Show every GitHub API call
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _root_logger.setLevel(level)
    _root_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)
    _webhook_logger.setLevel(webhook_level if webhook_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a prstatus logger.

    Args:
        name: Logger name suffix (e.g., "http", "webhook"). If None, returns the main logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _root_logger
    return logging.getLogger(f"prstatus.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask sensitive data in a string.

    Replaces GitHub tokens, authorization header values and other secret
    patterns with redacted placeholders.
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def redact_url(url: str) -> str:
    """
    Reduce a URL to scheme and host for logging.

    Webhook URLs commonly embed secrets in the path or query string
    (Slack, Jira automation, Zapier), so only the origin is kept.

    Args:
        url: Full URL

    Returns:
        URL like "https://hooks.example.com/..." or "[INVALID_URL]"
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return "[INVALID_URL]"
    if not parts.scheme or not parts.netloc:
        return "[INVALID_URL]"
    host = parts.hostname or parts.netloc
    if parts.path.strip("/") or parts.query:
        return f"{parts.scheme}://{host}/..."
    return f"{parts.scheme}://{host}"


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Set of keys to mask (default: authorization, secret, token, password, api_key)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if key_lower in sensitive_keys or any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    params: dict[str, Any] | None = None,
) -> None:
    """
    Log a GitHub API request at DEBUG level with sensitive data masked.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request URL or path
        headers: Request headers (optional)
        params: Query parameters (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if headers:
        log_parts.append(f"headers={safe_log_dict(headers)}")

    if params:
        log_parts.append(f"params={safe_log_dict(params)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
    item_count: int | None = None,
) -> None:
    """
    Log a GitHub API response at DEBUG level.

    Args:
        status_code: HTTP status code
        url: Request URL or path
        elapsed_ms: Request duration in milliseconds (optional)
        item_count: Number of items when the body is a list (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if item_count is not None:
        log_parts.append(f"items={item_count}")

    _http_logger.debug(" | ".join(log_parts))


def log_webhook_delivery(
    url: str,
    status: str,
    issue_count: int,
    delivered: bool,
    status_code: int | None = None,
) -> None:
    """
    Log the outcome of one webhook POST.

    Successful deliveries are logged at INFO, failed ones at WARNING.
    """
    target = redact_url(url)
    if delivered:
        _webhook_logger.info(
            "Delivered %s for %d issue(s) to %s", status, issue_count, target
        )
    else:
        _webhook_logger.warning(
            "Webhook delivery of %s for %d issue(s) to %s failed (status=%s)",
            status,
            issue_count,
            target,
            status_code,
        )


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "redact_url",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_webhook_delivery",
]
