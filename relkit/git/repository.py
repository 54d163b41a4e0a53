"""Git repository queries.

Only the configured remote URL is read; relkit never mutates the repository.

Usage:
    repo = Repository(Path("/path/to/repo"))
    match repo.remote_url("origin"):
        case Ok(url):
            print(url)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import ProcessError
from relkit.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = ["GitError", "Repository"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """A git working tree rooted at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def remote_url(self, name: str = "origin") -> Result[str, GitError]:
        """Return the URL configured for remote ``name``.

        ``git config --get`` exits 1 when the key is unset; that surfaces as a
        GitError with an explicit message rather than an empty string.
        """
        key = f"remote.{name}.url"
        result = self._run(["config", "--get", key])
        match result:
            case Err(e):
                message = e.stderr.strip() or f"{key} is not set"
                return Err(
                    GitError(
                        command=f"config --get {key}",
                        message=message,
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                url = stdout.strip()
                if not url:
                    return Err(GitError(command=f"config --get {key}", message=f"{key} is empty"))
                return Ok(url)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
