"""Shared fixtures: in-memory stand-ins for git and the code host."""

import logging
from typing import Any, Dict, List, Optional

import pytest

from commit_to_pr.errors import CommandError
from commit_to_pr.platforms.base import CodeHostClient, VersionControlInspector
from commit_to_pr.resolver import PRResolver
from commit_to_pr.tools import PRTools


class FakeVersionControlInspector(VersionControlInspector):
    """Answers from a fixed mapping of directory -> origin URL."""

    def __init__(self, remotes: Optional[Dict[Optional[str], Optional[str]]] = None):
        self.remotes = remotes or {}
        self.calls: List[tuple] = []

    def is_working_tree(self, cwd: Optional[str] = None) -> bool:
        self.calls.append(("is_working_tree", cwd))
        return cwd in self.remotes

    def get_remote_url(self, cwd: Optional[str] = None, remote: str = "origin") -> Optional[str]:
        self.calls.append(("get_remote_url", cwd, remote))
        return self.remotes.get(cwd)


class FakeCodeHostClient(CodeHostClient):
    """Serves canned search results, commit messages and PR payloads.

    A commit missing from `commit_messages` behaves like an unknown ref.
    """

    def __init__(
        self,
        search_results: Optional[Dict[str, List[int]]] = None,
        commit_messages: Optional[Dict[str, str]] = None,
        pulls: Optional[Dict[int, Dict[str, Any]]] = None,
        search_error: Optional[Exception] = None,
    ):
        self.search_results = search_results or {}
        self.commit_messages = commit_messages or {}
        self.pulls = pulls or {}
        self.search_error = search_error
        self.calls: List[tuple] = []

    def search_pulls(self, query: str, repo: str) -> List[int]:
        self.calls.append(("search_pulls", query, repo))
        if self.search_error is not None:
            raise self.search_error
        return list(self.search_results.get(query, []))

    def get_commit_message(self, repo: str, ref: str) -> str:
        self.calls.append(("get_commit_message", repo, ref))
        if ref not in self.commit_messages:
            raise CommandError(
                f"gh: No commit found for SHA: {ref} (HTTP 422)",
                command=["gh", "api", f"repos/{repo}/commits/{ref}"],
                returncode=1,
                stderr=f"No commit found for SHA: {ref}",
            )
        return self.commit_messages[ref]

    def get_pull_details(self, pr_number: int, repo: str) -> Dict[str, Any]:
        self.calls.append(("get_pull_details", pr_number, repo))
        if pr_number not in self.pulls:
            raise CommandError(
                f"GraphQL: Could not resolve to a PullRequest with the number of {pr_number}.",
                command=["gh", "pr", "view", str(pr_number)],
                returncode=1,
            )
        return self.pulls[pr_number]

    def called(self, method: str) -> bool:
        return any(call[0] == method for call in self.calls)


def make_pr_payload(number: int = 42, **overrides: Any) -> Dict[str, Any]:
    payload = {
        "number": number,
        "title": "Add widget caching",
        "body": "Caches widgets between requests.",
        "state": "MERGED",
        "url": f"https://github.com/acme/widgets/pull/{number}",
        "author": {"login": "octocat"},
        "createdAt": "2024-03-01T10:00:00Z",
        "mergedAt": "2024-03-02T12:30:00Z",
        "baseRefName": "main",
        "headRefName": "feature/cache",
        "labels": [{"name": "enhancement"}, {"name": "backend"}],
        "reviews": [
            {"author": {"login": "hubot"}, "state": "COMMENTED", "submittedAt": "2024-03-01T11:00:00Z"},
            {"author": {"login": "monalisa"}, "state": "APPROVED", "submittedAt": "2024-03-02T09:00:00Z"},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def pr_payload() -> Dict[str, Any]:
    return make_pr_payload()


@pytest.fixture
def vcs() -> FakeVersionControlInspector:
    return FakeVersionControlInspector({"/work/widgets": "git@github.com:acme/widgets.git"})


@pytest.fixture
def code_host(pr_payload) -> FakeCodeHostClient:
    return FakeCodeHostClient(pulls={42: pr_payload})


@pytest.fixture
def resolver(code_host, vcs) -> PRResolver:
    return PRResolver(code_host, vcs)


@pytest.fixture
def tools(resolver) -> PRTools:
    return PRTools(resolver)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to a test's captured stderr."""
    yield
    logger = logging.getLogger("commit_to_pr")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
