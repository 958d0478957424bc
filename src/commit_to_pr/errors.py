"""Exception hierarchy for the commit-to-PR tool."""

from typing import List, Optional


class CommitToPRError(Exception):
    """Base class for all errors raised while serving a tool call."""


class InvalidArgumentError(CommitToPRError, ValueError):
    """Raised when a tool argument has the wrong type or value."""


class ConfigurationError(CommitToPRError):
    """Raised when the server or a call is not configured well enough to proceed."""


class RepositoryNotFoundError(ConfigurationError):
    """Raised when no repository was given and none can be detected from git."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(
            message
            or "No repository specified and not in a git repository. "
            "Please provide the 'repo' parameter in owner/repo format, "
            "or the 'cwd' parameter pointing to a git repository."
        )


class UnknownToolError(CommitToPRError):
    """Raised when a call names a tool this server does not provide."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class CommandError(CommitToPRError, RuntimeError):
    """Raised when an external CLI command fails.

    Attributes:
        command: The argv that was executed
        returncode: Exit status, or None if the command never ran
        stderr: Error output captured from the command
    """

    def __init__(
        self,
        message: str,
        command: List[str],
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class CommandOutputError(CommandError):
    """Raised when an external CLI command succeeds but its output cannot be parsed."""
