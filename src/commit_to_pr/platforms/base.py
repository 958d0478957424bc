"""Abstract interfaces for the local version-control and code-host integrations."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class VersionControlInspector(ABC):
    """Read-only view of the local version-control state.

    Implementations never raise for a directory that is not a repository;
    they answer "not applicable" instead.
    """

    @abstractmethod
    def is_working_tree(self, cwd: Optional[str] = None) -> bool:
        """Check whether a directory lies inside a working tree.

        Args:
            cwd: Directory to inspect (defaults to the process working directory)

        Returns:
            True if the directory is inside a repository, False otherwise
        """
        pass

    @abstractmethod
    def get_remote_url(self, cwd: Optional[str] = None, remote: str = "origin") -> Optional[str]:
        """Read the URL of a remote.

        Args:
            cwd: Directory to inspect (defaults to the process working directory)
            remote: Remote name

        Returns:
            The remote URL, or None if the remote is not configured
        """
        pass


class CodeHostClient(ABC):
    """Interface for code-hosting platform lookups used to resolve pull requests.

    Implementations propagate failures of the underlying service as
    CommandError so the caller can report them.
    """

    @abstractmethod
    def search_pulls(self, query: str, repo: str) -> List[int]:
        """Search pull requests in any state whose text matches a query.

        Args:
            query: Free-text search, typically a commit SHA or ref
            repo: Repository in 'owner/name' format

        Returns:
            Matching pull request numbers in the order the platform returns them

        Raises:
            CommandError: If the lookup fails or its output cannot be parsed
        """
        pass

    @abstractmethod
    def get_commit_message(self, repo: str, ref: str) -> str:
        """Fetch the full message of a commit.

        Args:
            repo: Repository in 'owner/name' format
            ref: Commit SHA, branch name or any other git reference

        Returns:
            The raw commit message

        Raises:
            CommandError: If the commit cannot be fetched
        """
        pass

    @abstractmethod
    def get_pull_details(self, pr_number: int, repo: str) -> Dict[str, Any]:
        """Fetch full pull request metadata in one request.

        Args:
            pr_number: Pull request number
            repo: Repository in 'owner/name' format

        Returns:
            Dictionary with the keys number, title, body, state, url, author,
            createdAt, mergedAt, baseRefName, headRefName, labels, reviews.
            Optional keys may be missing or None.

        Raises:
            CommandError: If the lookup fails or its output cannot be parsed
        """
        pass

    def get_platform_name(self) -> str:
        """Return the name of this platform (for logging/tracing)."""
        return self.__class__.__name__.replace("CLIClient", "").replace("Client", "").lower()
