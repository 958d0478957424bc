"""Tool registry and call dispatcher for the commit-to-PR server.

PRTools owns the single get_pr tool. Every failure inside a call is turned
into an error-flagged ToolResponse so the server keeps serving.
"""

import json
from typing import Any, Dict, List, Optional

from commit_to_pr.errors import UnknownToolError
from commit_to_pr.logging_config import get_logger
from commit_to_pr.models import (
    CommitLookup,
    DirectLookup,
    GetPRRequest,
    ToolDescriptor,
    ToolResponse,
    parse_get_pr_arguments,
)
from commit_to_pr.resolver import PRResolver
from commit_to_pr.tracing_config import custom_span

logger = get_logger(__name__)

GET_PR_TOOL = ToolDescriptor(
    name="get_pr",
    description=(
        "Get PR details by commit hash or PR number. Extracts PR number from git "
        "commits (merge commits, squash commits) and returns full PR details "
        "including title, description, author, status, and reviews. Auto-detects "
        "repository from working directory."
    ),
    input_schema={
        "type": "object",
        "properties": {
            "commit": {
                "type": "string",
                "description": (
                    "Git commit hash (full or short), branch name, or any git "
                    "reference. Use this OR pr_number."
                ),
            },
            "pr_number": {
                "type": "number",
                "description": "PR number to look up directly. Use this OR commit.",
            },
            "repo": {
                "type": "string",
                "description": (
                    "GitHub repository in owner/repo format. If not provided, "
                    "auto-detects from cwd."
                ),
            },
            "cwd": {
                "type": "string",
                "description": (
                    "Working directory path to auto-detect the GitHub repository "
                    "from git remote."
                ),
            },
        },
    },
)

MISSING_TARGET_MESSAGE = "Either 'commit' or 'pr_number' must be provided."


def format_error(error: BaseException) -> str:
    """Render an exception as the text of an error response."""
    return f"Error: {str(error) or error.__class__.__name__}"


class PRTools:
    """Tools for resolving pull requests from commits.

    This class wraps a PRResolver to provide the get_pr tool with
    consistent error handling.
    """

    def __init__(self, resolver: PRResolver):
        """Initialize PRTools with a resolver.

        Args:
            resolver: A PRResolver wired to a code-host client and a
                      version-control inspector
        """
        self._resolver = resolver
        self._handlers = {
            GET_PR_TOOL.name: self.get_pr,
        }

    @property
    def resolver(self) -> PRResolver:
        """Get the underlying resolver."""
        return self._resolver

    def list_tools(self) -> List[ToolDescriptor]:
        """Return the descriptors of every tool this registry serves."""
        return [GET_PR_TOOL]

    def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> ToolResponse:
        """Dispatch a tool call by name.

        Args:
            name: Tool name requested by the host
            arguments: Loosely typed argument object

        Returns:
            The tool's response. Exceptions never escape; they come back as an
            error-flagged response whose text starts with 'Error: '.
        """
        try:
            handler = self._handlers.get(name)
            if handler is None:
                raise UnknownToolError(name)
            return handler(arguments)
        except Exception as e:
            logger.error(
                "Tool call failed",
                extra={"context": {"tool": name, "arguments": arguments, "error": str(e)}},
                exc_info=True,
            )
            return ToolResponse.error(format_error(e))

    def get_pr(self, arguments: Optional[Dict[str, Any]]) -> ToolResponse:
        """Fetch pull request details by commit reference or PR number.

        Args:
            arguments: Dictionary with optional keys commit, pr_number, repo
                       and cwd. pr_number takes precedence over commit.

        Returns:
            ToolResponse holding the PR details as indented JSON, or an
            error-flagged response when no target was given or no PR is
            associated with the commit

        Raises:
            InvalidArgumentError: If an argument has the wrong type
            ConfigurationError: If the repository cannot be determined
            CommandError: If a code-host lookup fails
        """
        request = parse_get_pr_arguments(arguments)
        if request is None:
            return ToolResponse.error(MISSING_TARGET_MESSAGE)

        with custom_span("tool.get_pr", {"request": type(request).__name__}) as span:
            repo = self._resolver.resolve_repo(request.repo, request.cwd)
            span.set_attribute("repository", repo)

            pr_number = self._resolve_pr_number(request, repo)
            if pr_number is None:
                return ToolResponse.error(
                    f"No PR found for commit: {request.commit} in {repo}. "
                    "This commit may not be associated with any pull request."
                )
            span.set_attribute("pr_number", pr_number)

            details = self._resolver.get_details(pr_number, repo)
            logger.info(
                "PR details fetched",
                extra={"context": {"repository": repo, "pr_number": details.number}},
            )
            return ToolResponse.text(json.dumps(details.to_dict(), indent=2, ensure_ascii=False))

    def _resolve_pr_number(self, request: GetPRRequest, repo: str) -> Optional[int]:
        if isinstance(request, DirectLookup):
            return request.pr_number
        if isinstance(request, CommitLookup):
            return self._resolver.resolve_pr_number(request.commit, repo)
        raise TypeError(f"Unsupported request type: {type(request).__name__}")
