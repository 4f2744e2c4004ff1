#!/usr/bin/env python3
"""
Basic prstatus usage example.

Runs the status pipeline against in-memory mock clients, so no token or
network access is needed.
Run with: python examples/python/basic_usage.py
"""

import asyncio

from prstatus import (
    ActionConfig,
    ConfigurationError,
    PRStatusError,
    RepositoryRef,
    parse_pattern,
    parse_webhook_routes,
    run,
)
from prstatus.testing import (
    MockGitHubClient,
    MockWebhookClient,
    create_mock_pull_request,
    create_mock_requested_reviewer,
    create_mock_review,
)

print("=== prstatus Basic Usage Example ===\n")

# 1. Configuration errors
print("1. Testing configuration errors...")
try:
    parse_pattern("ABC-\\d+")
except PRStatusError as e:
    print(f"   Caught {type(e).__name__}: {e.message}")
    assert isinstance(e, ConfigurationError)

print("\n   OK: Malformed patterns rejected\n")

# 2. Build a scenario
print("2. Building a two-repository scenario...")
client = MockGitHubClient()
client.pulls.add_pull_request(
    create_mock_pull_request(number=12, title="ABC-12: checkout flow", labels=["feature"]),
    commits=["ABC-12 add cart", "ABC-13 payment hook"],
)
client.reviews.configure_reviews("octo", "app", 12, [create_mock_review(1, "APPROVED")])

client.pulls.add_pull_request(
    create_mock_pull_request(repo="backend", number=4, title="ABC-13 payment API"),
)
client.reviews.configure_requested_reviewers(
    "octo", "backend", 4, [create_mock_requested_reviewer(2)]
)
print("   octo/app#12 is approved, octo/backend#4 still waits for a reviewer")

config = ActionConfig(
    token="example-token",
    webhook_routes=parse_webhook_routes("ABC:https://hooks.example.com/abc"),
    additional_repositories=[RepositoryRef("octo", "backend")],
)
print(f"   Approval threshold: {config.approval_threshold}")

# 3. Run the pipeline
print("\n3. Running the pipeline...")
webhooks = MockWebhookClient()
result = asyncio.run(run(config, client, webhooks, "octo", "app", 12))

for issue_id, status in result.index.items():
    print(f"   {issue_id}: {status.name}")

for post in webhooks.posts:
    print(f"   POST {post.url} {post.payload}")

assert result.index["ABC-12"].name == "APPROVED"
assert result.index["ABC-13"].name == "IN_REVIEW"

print("\n   OK: Pipeline finished\n")
print("=== All examples completed successfully! ===")
