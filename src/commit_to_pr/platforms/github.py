"""GitHub code-host client using the GitHub CLI."""

import json
import os
import re
import subprocess
from typing import Any, Dict, List, Optional

from commit_to_pr.errors import CommandError, CommandOutputError
from commit_to_pr.logging_config import get_logger
from commit_to_pr.platforms.base import CodeHostClient
from commit_to_pr.tracing_config import traced

logger = get_logger(__name__)

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")

PR_DETAIL_FIELDS = (
    "number",
    "title",
    "body",
    "state",
    "url",
    "author",
    "createdAt",
    "mergedAt",
    "baseRefName",
    "headRefName",
    "labels",
    "reviews",
)


class GitHubCLIClient(CodeHostClient):
    """GitHub implementation backed by the gh CLI.

    Authentication is whatever `gh auth` has been configured with; this
    client never handles tokens itself.
    """

    def __init__(self, gh_path: str = "gh", timeout: Optional[float] = None):
        """Initialize the client.

        Args:
            gh_path: Path or name of the gh executable
            timeout: Optional timeout in seconds for each gh invocation
        """
        self._gh_path = gh_path
        self._timeout = timeout

    def _get_subprocess_env(self) -> Dict[str, str]:
        env = os.environ.copy()
        env["NO_COLOR"] = "1"
        env["CLICOLOR"] = "0"
        return env

    def _run(self, args: List[str]) -> str:
        """Run a gh command and return its cleaned stdout.

        Raises:
            CommandError: If gh cannot be started, times out or exits non-zero
        """
        cmd = [self._gh_path, *args]
        logger.debug("Running gh command", extra={"context": {"command": cmd}})

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                env=self._get_subprocess_env(),
                timeout=self._timeout,
            )
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise CommandError(
                f"Command failed: {' '.join(cmd)}\n{stderr}".rstrip(),
                command=cmd,
                returncode=e.returncode,
                stderr=stderr,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise CommandError(
                f"Command timed out after {self._timeout}s: {' '.join(cmd)}",
                command=cmd,
            ) from e
        except OSError as e:
            raise CommandError(
                f"Could not run {self._gh_path}: {e}",
                command=cmd,
            ) from e

        return ANSI_ESCAPE.sub("", result.stdout).strip()

    def _run_json(self, args: List[str]) -> Any:
        output = self._run(args)
        try:
            return json.loads(output)
        except json.JSONDecodeError as e:
            cmd = [self._gh_path, *args]
            raise CommandOutputError(
                f"Unexpected output from {' '.join(cmd)}: {e}",
                command=cmd,
                returncode=0,
            ) from e

    @traced("github.search_pulls")
    def search_pulls(self, query: str, repo: str) -> List[int]:
        """Search PRs in any state matching a query via `gh pr list --search`."""
        results = self._run_json([
            "pr", "list",
            "--search", query,
            "--state", "all",
            "--json", "number",
            "--repo", repo,
        ])
        if not isinstance(results, list):
            raise CommandOutputError(
                f"Unexpected output from gh pr list: expected a list, got {type(results).__name__}",
                command=[self._gh_path, "pr", "list"],
                returncode=0,
            )

        numbers = [item["number"] for item in results if isinstance(item, dict) and "number" in item]
        logger.debug(
            "PR search results",
            extra={"context": {"query": query, "repository": repo, "numbers": numbers}},
        )
        return numbers

    @traced("github.get_commit_message")
    def get_commit_message(self, repo: str, ref: str) -> str:
        """Fetch a commit message through the REST API passthrough `gh api`."""
        return self._run([
            "api", f"repos/{repo}/commits/{ref}",
            "--jq", ".commit.message",
        ])

    @traced("github.get_pull_details")
    def get_pull_details(self, pr_number: int, repo: str) -> Dict[str, Any]:
        """Fetch PR metadata via `gh pr view --json`."""
        pr_data = self._run_json([
            "pr", "view", str(pr_number),
            "--repo", repo,
            "--json", ",".join(PR_DETAIL_FIELDS),
        ])
        if not isinstance(pr_data, dict):
            raise CommandOutputError(
                f"Unexpected output from gh pr view: expected an object, got {type(pr_data).__name__}",
                command=[self._gh_path, "pr", "view", str(pr_number)],
                returncode=0,
            )

        logger.debug("PR metadata response", extra={"context": {"metadata": pr_data}})
        return pr_data
