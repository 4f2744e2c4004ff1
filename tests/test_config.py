"""
Tests for loading action inputs.
"""

import pytest

from prstatus.config import (
    DEFAULT_PR_LIMIT,
    ActionConfig,
    get_boolean_input,
    parse_repositories,
)
from prstatus.exceptions import ConfigurationError
from prstatus.resolver import ApprovalThreshold
from prstatus.router import WebhookRoute
from prstatus.types.pulls import RepositoryRef


def test_defaults() -> None:
    config = ActionConfig.from_env({"GITHUB_TOKEN": "t"})

    assert config.token == "t"
    assert config.ignore_title is False
    assert config.ignore_commits is False
    assert config.approval_threshold == ApprovalThreshold(1)
    assert config.force_changes_requested is False
    assert str(config.commit_pattern) == r"/[A-Za-z]{2,4}-\d+/g"
    assert str(config.title_pattern) == r"/[A-Za-z]{2,4}-\d+/g"
    assert config.webhook_routes == []
    assert config.additional_repositories == []
    assert config.additional_repositories_pr_limit == DEFAULT_PR_LIMIT
    assert config.commits_page_size == 100
    assert config.max_retries == 0
    assert config.api_url == "https://api.github.com"


def test_all_inputs() -> None:
    environ = {
        "INPUT_GITHUB_TOKEN": "input-token",
        "GITHUB_TOKEN": "env-token",
        "INPUT_IGNORE-TITLE": "true",
        "INPUT_IGNORE-COMMITS": "False",
        "INPUT_APPROVAL-THRESHOLD": "75%",
        "INPUT_FORCE-CHANGES-REQUESTED": "TRUE",
        "INPUT_FIND-REGEX-COMMITS": r"/PROJ-\d+/",
        "INPUT_FIND-REGEX-TITLE": r"/[a-z]+-\d+/i",
        "INPUT_WEBHOOK-URLS": "PROJ:https://hooks.example.com/p\n*:https://hooks.example.com/all",
        "INPUT_ADDITIONAL-REPOSITORIES": "octo/backend, octo/frontend,",
        "INPUT_ADDITIONAL-REPOSITORIES-PULL-REQUEST-LIMIT": "5",
        "INPUT_MAX-RETRIES": "2",
        "GITHUB_API_URL": "https://ghe.example.com/api/v3",
    }

    config = ActionConfig.from_env(environ)

    assert config.token == "input-token"
    assert config.ignore_title is True
    assert config.ignore_commits is False
    assert config.approval_threshold == ApprovalThreshold(75.0, is_percentage=True)
    assert config.force_changes_requested is True
    assert config.commit_pattern.source == r"PROJ-\d+"
    assert config.title_pattern.regex.match("proj-1")
    assert config.webhook_routes == [
        WebhookRoute("PROJ", "https://hooks.example.com/p"),
        WebhookRoute("*", "https://hooks.example.com/all"),
    ]
    assert config.additional_repositories == [
        RepositoryRef("octo", "backend"),
        RepositoryRef("octo", "frontend"),
    ]
    assert config.additional_repositories_pr_limit == 5
    assert config.max_retries == 2
    assert config.api_url == "https://ghe.example.com/api/v3"


def test_missing_token_raises() -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        ActionConfig.from_env({})
    assert "GITHUB_TOKEN" in str(exc_info.value)


@pytest.mark.parametrize(
    "name,value",
    [
        ("INPUT_IGNORE-TITLE", "yes"),
        ("INPUT_APPROVAL-THRESHOLD", "most"),
        ("INPUT_FIND-REGEX-COMMITS", r"PROJ-\d+"),
        ("INPUT_FIND-REGEX-TITLE", r"/(unclosed/"),
        ("INPUT_WEBHOOK-URLS", "no-separator"),
        ("INPUT_WEBHOOK-URLS", "*:http://[::1"),
        ("INPUT_ADDITIONAL-REPOSITORIES", "just-a-name"),
        ("INPUT_ADDITIONAL-REPOSITORIES-PULL-REQUEST-LIMIT", "ten"),
        ("INPUT_ADDITIONAL-REPOSITORIES-PULL-REQUEST-LIMIT", "-1"),
        ("INPUT_COMMITS-PAGE-SIZE", "0"),
    ],
)
def test_malformed_inputs_raise(name: str, value: str) -> None:
    with pytest.raises(ConfigurationError):
        ActionConfig.from_env({"GITHUB_TOKEN": "t", name: value})


@pytest.mark.parametrize(
    "value,expected",
    [("true", True), ("True", True), ("TRUE", True), ("false", False), ("FALSE", False), ("", False)],
)
def test_boolean_inputs(value: str, expected: bool) -> None:
    assert get_boolean_input({"INPUT_FLAG": value}, "flag") is expected


def test_input_names_with_spaces() -> None:
    assert get_boolean_input({"INPUT_MY_FLAG": "true"}, "my flag") is True


class TestParseRepositories:
    def test_deduplicates_and_trims(self) -> None:
        assert parse_repositories(" a/b ,a/b, c/d") == [RepositoryRef("a", "b"), RepositoryRef("c", "d")]

    @pytest.mark.parametrize("raw", ["a", "/b", "a/", "a/b/c"])
    def test_malformed(self, raw: str) -> None:
        with pytest.raises(ConfigurationError):
            parse_repositories(raw)

    def test_full_name(self) -> None:
        assert str(RepositoryRef("octo", "app")) == "octo/app"
