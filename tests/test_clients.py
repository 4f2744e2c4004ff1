"""
Tests for the async GitHub resource clients against canned API responses.
"""

import asyncio
from datetime import datetime

import httpx
import pytest

from prstatus.async_client import AsyncGitHubClient
from prstatus.exceptions import ConfigurationError, NotFoundError


def pr_json(number: int, title: str, **overrides) -> dict:
    data = {
        "number": number,
        "title": title,
        "draft": False,
        "merged_at": None,
        "labels": [{"name": "bug"}],
        "base": {"repo": {"name": "app", "owner": {"login": "octo"}}},
    }
    data.update(overrides)
    return data


def review_json(review_id: int, user_id: int, state: str, submitted_at: str | None) -> dict:
    return {
        "id": review_id,
        "user": {"id": user_id, "login": f"user{user_id}", "type": "User"},
        "state": state,
        "submitted_at": submitted_at,
    }


class FakeGitHub:
    """Routes requests by path and records them."""

    def __init__(self, routes: dict) -> None:
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        body = self.routes.get(request.url.path)
        if body is None:
            return httpx.Response(404, json={"message": "Not Found"})
        if callable(body):
            body = body(request)
        return httpx.Response(200, json=body)


def run_with(fake: FakeGitHub, fn):
    async def go():
        async with AsyncGitHubClient(
            token="test-token", http_transport=httpx.MockTransport(fake)
        ) as client:
            return await fn(client)

    return asyncio.run(go())


class TestPulls:
    def test_get_parses_flags_and_labels(self) -> None:
        fake = FakeGitHub({
            "/repos/octo/app/pulls/5": pr_json(
                5, "AB-1: feature", draft=True, merged=True, labels=[{"name": "a"}, {"name": "b"}]
            ),
        })

        snapshot = run_with(fake, lambda c: c.pulls.get("octo", "app", 5))

        assert snapshot.key == "octo/app#5"
        assert snapshot.title == "AB-1: feature"
        assert snapshot.draft is True
        assert snapshot.merged is True
        assert snapshot.labels == ["a", "b"]

    def test_merged_falls_back_to_merged_at(self) -> None:
        fake = FakeGitHub({
            "/repos/octo/app/pulls": [
                pr_json(1, "open"),
                pr_json(2, "merged", merged_at="2024-01-15T10:00:00Z"),
            ],
        })

        pulls = run_with(fake, lambda c: c.pulls.list("octo", "app", 10))

        assert [p.merged for p in pulls] == [False, True]

    def test_list_requests_recently_updated_open_pulls(self) -> None:
        fake = FakeGitHub({
            "/repos/octo/app/pulls": [pr_json(n, f"PR {n}") for n in range(1, 6)],
        })

        pulls = run_with(fake, lambda c: c.pulls.list("octo", "app", 3))

        params = fake.requests[0].url.params
        assert params["state"] == "open"
        assert params["sort"] == "updated"
        assert params["direction"] == "desc"
        assert params["per_page"] == "3"
        assert [p.number for p in pulls] == [1, 2, 3]

    @pytest.mark.parametrize("limit,expected,pages", [(150, 150, 2), (250, 180, 2), (200, 180, 2)])
    def test_list_pages_past_one_hundred(self, limit: int, expected: int, pages: int) -> None:
        open_pulls = [pr_json(n, f"PR {n}") for n in range(1, 181)]

        def listing(request: httpx.Request) -> list:
            page = int(request.url.params["page"])
            per_page = int(request.url.params["per_page"])
            return open_pulls[(page - 1) * per_page : page * per_page]

        fake = FakeGitHub({"/repos/octo/app/pulls": listing})

        pulls = run_with(fake, lambda c: c.pulls.list("octo", "app", limit))

        assert len(pulls) == expected
        assert [p.number for p in pulls] == list(range(1, expected + 1))
        assert [r.url.params["page"] for r in fake.requests] == [str(n) for n in range(1, pages + 1)]
        assert {r.url.params["per_page"] for r in fake.requests} == {"100"}

    def test_list_with_zero_limit_makes_no_request(self) -> None:
        fake = FakeGitHub({})

        assert run_with(fake, lambda c: c.pulls.list("octo", "app", 0)) == []
        assert fake.requests == []

    def test_commit_pages_are_read_until_a_short_page(self) -> None:
        def commits(request: httpx.Request) -> list:
            page = int(request.url.params["page"])
            count = 2 if page < 3 else 1
            return [
                {"commit": {"message": f"AB-{page}{i} change"}} for i in range(count)
            ]

        fake = FakeGitHub({"/repos/octo/app/pulls/5/commits": commits})

        async def collect(client):
            return [
                m async for m in client.pulls.iter_commit_messages("octo", "app", 5, per_page=2)
            ]

        messages = run_with(fake, collect)

        assert messages == ["AB-10 change", "AB-11 change", "AB-20 change", "AB-21 change", "AB-30 change"]
        assert [r.url.params["page"] for r in fake.requests] == ["1", "2", "3"]

    def test_missing_pull_request_raises(self) -> None:
        with pytest.raises(NotFoundError):
            run_with(FakeGitHub({}), lambda c: c.pulls.get("octo", "app", 99))


class TestReviews:
    def test_list_parses_reviews(self) -> None:
        fake = FakeGitHub({
            "/repos/octo/app/pulls/5/reviews": [
                review_json(10, 1, "APPROVED", "2024-01-15T10:00:00Z"),
                review_json(11, 2, "PENDING", None),
                {"id": 12, "user": None, "state": "COMMENTED", "submitted_at": None},
            ],
        })

        page = run_with(fake, lambda c: c.reviews.list("octo", "app", 5))

        assert page.possibly_truncated is False
        assert [(r.reviewer_id, r.state) for r in page.reviews] == [(1, "APPROVED"), (2, "PENDING")]
        assert page.reviews[0].submitted_at == datetime(2024, 1, 15, 10, 0, 0)
        assert page.reviews[1].submitted_at is None
        assert fake.requests[0].url.params["per_page"] == "100"

    def test_full_page_is_flagged_as_possibly_truncated(self) -> None:
        fake = FakeGitHub({
            "/repos/octo/app/pulls/5/reviews": [
                review_json(i, i, "COMMENTED", "2024-01-15T10:00:00Z") for i in range(100)
            ],
        })

        page = run_with(fake, lambda c: c.reviews.list("octo", "app", 5))

        assert page.possibly_truncated is True

    def test_requested_reviewers_ignore_teams(self) -> None:
        fake = FakeGitHub({
            "/repos/octo/app/pulls/5/requested_reviewers": {
                "users": [
                    {"id": 3, "login": "carol", "type": "User"},
                    {"id": 4, "login": "ci", "type": "Bot"},
                ],
                "teams": [{"id": 9, "slug": "core"}],
            },
        })

        requested = run_with(fake, lambda c: c.reviews.list_requested_reviewers("octo", "app", 5))

        assert [(r.reviewer_id, r.login, r.reviewer_type) for r in requested] == [
            (3, "carol", "User"),
            (4, "ci", "Bot"),
        ]


class TestClientConfiguration:
    def test_empty_token_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            AsyncGitHubClient(token="")

    def test_from_env_requires_token(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)

        with pytest.raises(ConfigurationError):
            AsyncGitHubClient.from_env()

    def test_from_env_reads_api_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GITHUB_TOKEN", "t")
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3")

        client = AsyncGitHubClient.from_env()

        assert client.base_url == "https://ghe.example.com/api/v3"
        asyncio.run(client.close())
