"""Git adapter.

Usage:
    from relkit.git import Repository

    url = Repository(Path(".")).remote_url("origin")
"""

from relkit.git.repository import GitError, Repository

__all__ = ["GitError", "Repository"]
