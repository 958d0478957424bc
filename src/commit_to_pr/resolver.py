"""Resolve a commit reference or PR number into full pull request details."""

import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from commit_to_pr.config import DEFAULT_GH_HOST
from commit_to_pr.errors import CommandError, RepositoryNotFoundError
from commit_to_pr.logging_config import get_logger
from commit_to_pr.models import PRDetails
from commit_to_pr.platforms.base import CodeHostClient, VersionControlInspector

logger = get_logger(__name__)

MERGE_COMMIT_PATTERN = re.compile(r"Merge pull request #(\d+)")
SQUASH_COMMIT_PATTERN = re.compile(r"\(#(\d+)\)$", re.MULTILINE)


def parse_repo_from_remote(remote_url: str, host: str = DEFAULT_GH_HOST) -> Optional[str]:
    """Extract 'owner/name' from a git remote URL.

    Accepts SSH (git@host:owner/name.git, ssh://git@host/owner/name) and
    HTTPS (https://host/owner/name.git) remotes, with or without the .git
    suffix.

    Args:
        remote_url: URL as printed by `git remote get-url`
        host: Code-host name the remote must point at

    Returns:
        'owner/name', or None if the URL does not point at the host
    """
    pattern = re.compile(
        rf"(?:^|[@/]){re.escape(host)}(?::\d+)?[:/]"
        r"(?P<owner>[^/:\s]+)/(?P<name>[^/\s]+?)(?:\.git)?/?$",
        re.IGNORECASE,
    )
    match = pattern.search(remote_url.strip())
    if not match:
        return None
    return f"{match.group('owner')}/{match.group('name')}"


class ResolutionStrategy(ABC):
    """One step of the chain that maps a commit reference to a PR number."""

    name = "strategy"

    @abstractmethod
    def find(self, commit: str, repo: str) -> Optional[int]:
        """Return the PR number for the commit, or None if this strategy has no answer."""
        pass


class SearchPullsStrategy(ResolutionStrategy):
    """Ask the code host which PRs mention the commit; the first match wins."""

    name = "search"

    def __init__(self, code_host: CodeHostClient):
        self._code_host = code_host

    def find(self, commit: str, repo: str) -> Optional[int]:
        numbers = self._code_host.search_pulls(commit, repo)
        if not numbers:
            return None
        if len(numbers) > 1:
            logger.debug(
                "Multiple PRs matched commit, using the first",
                extra={"context": {"commit": commit, "repository": repo, "numbers": numbers}},
            )
        return numbers[0]


class CommitMessageStrategy(ResolutionStrategy):
    """Read the PR number from a merge or squash commit message."""

    name = "commit_message"

    def __init__(self, code_host: CodeHostClient):
        self._code_host = code_host

    def find(self, commit: str, repo: str) -> Optional[int]:
        try:
            message = self._code_host.get_commit_message(repo, commit)
        except CommandError as e:
            logger.debug(
                "Commit message unavailable",
                extra={"context": {"commit": commit, "repository": repo, "error": str(e)}},
            )
            return None
        return extract_pr_number(message)


def extract_pr_number(message: str) -> Optional[int]:
    """Find a PR number in a commit message.

    "Merge pull request #N" takes priority over a "(#N)" squash suffix at
    the end of a line.
    """
    for pattern in (MERGE_COMMIT_PATTERN, SQUASH_COMMIT_PATTERN):
        match = pattern.search(message)
        if match:
            return int(match.group(1))
    return None


class PRResolver:
    """Turns a repository hint plus a commit or PR number into PRDetails."""

    def __init__(
        self,
        code_host: CodeHostClient,
        vcs: VersionControlInspector,
        strategies: Optional[Sequence[ResolutionStrategy]] = None,
        host: str = DEFAULT_GH_HOST,
    ):
        self._code_host = code_host
        self._vcs = vcs
        self._host = host
        if strategies is None:
            strategies = [SearchPullsStrategy(code_host), CommitMessageStrategy(code_host)]
        self._strategies = list(strategies)

    @property
    def code_host(self) -> CodeHostClient:
        return self._code_host

    @property
    def strategies(self) -> Sequence[ResolutionStrategy]:
        return tuple(self._strategies)

    def resolve_repo(self, repo: Optional[str] = None, cwd: Optional[str] = None) -> str:
        """Return the repository to query.

        Args:
            repo: Explicit 'owner/name', returned verbatim when given
            cwd: Directory whose origin remote is used otherwise

        Raises:
            RepositoryNotFoundError: If no repo was given and none can be
                                     detected from the working directory
        """
        if repo:
            return repo

        if not self._vcs.is_working_tree(cwd):
            raise RepositoryNotFoundError()

        remote_url = self._vcs.get_remote_url(cwd)
        detected = parse_repo_from_remote(remote_url, self._host) if remote_url else None
        if not detected:
            logger.debug(
                "origin remote does not point at the code host",
                extra={"context": {"cwd": cwd, "remote_url": remote_url, "host": self._host}},
            )
            raise RepositoryNotFoundError()

        logger.debug(
            "Repository detected from git remote",
            extra={"context": {"cwd": cwd, "repository": detected}},
        )
        return detected

    def resolve_pr_number(self, commit: str, repo: str) -> Optional[int]:
        """Try each strategy in order; None means no strategy found a PR."""
        for strategy in self._strategies:
            pr_number = strategy.find(commit, repo)
            if pr_number is not None:
                logger.info(
                    "Resolved PR from commit",
                    extra={"context": {
                        "commit": commit,
                        "repository": repo,
                        "pr_number": pr_number,
                        "strategy": strategy.name,
                    }},
                )
                return pr_number
        logger.info(
            "No PR found for commit",
            extra={"context": {"commit": commit, "repository": repo}},
        )
        return None

    def get_details(self, pr_number: int, repo: str) -> PRDetails:
        """Fetch and normalize full PR metadata."""
        return PRDetails.from_gh_payload(self._code_host.get_pull_details(pr_number, repo))
