"""Local version-control inspection using the git CLI."""

import subprocess
from typing import List, Optional

from commit_to_pr.logging_config import get_logger
from commit_to_pr.platforms.base import VersionControlInspector
from commit_to_pr.tracing_config import traced

logger = get_logger(__name__)


class GitCLIInspector(VersionControlInspector):
    """VersionControlInspector backed by the git executable.

    Every failure (not a repository, missing remote, missing directory,
    git not installed) is reported as "not applicable".
    """

    def __init__(self, git_path: str = "git", timeout: Optional[float] = None):
        self._git_path = git_path
        self._timeout = timeout

    def _run(self, args: List[str], cwd: Optional[str]) -> Optional[str]:
        cmd = [self._git_path, *args]
        logger.debug("Running git command", extra={"context": {"command": cmd, "cwd": cwd}})
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                cwd=cwd,
                timeout=self._timeout,
            )
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            logger.debug(
                "git command not applicable",
                extra={"context": {"command": cmd, "cwd": cwd, "error": str(e)}},
            )
            return None
        return result.stdout.strip()

    @traced("git.is_working_tree")
    def is_working_tree(self, cwd: Optional[str] = None) -> bool:
        return self._run(["rev-parse", "--git-dir"], cwd) is not None

    @traced("git.get_remote_url")
    def get_remote_url(self, cwd: Optional[str] = None, remote: str = "origin") -> Optional[str]:
        return self._run(["remote", "get-url", remote], cwd) or None
