"""Repository and credential resolution through the GitHub CLI."""

import json
import logging
import shutil
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)

GH_INSTALL_URL = "https://cli.github.com/"


class ContextError(Exception):
    """Raised when the target repository cannot be resolved."""


class AuthError(ContextError):
    """Raised when the GitHub CLI is missing or not authenticated."""


@dataclass(frozen=True)
class Repository:
    """A GitHub repository, identified by owner and name."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        """Return the `owner/name` form."""
        return f"{self.owner}/{self.name}"


def gh_installed(gh_command: str = "gh") -> bool:
    """Check if the gh executable is available in PATH."""
    return shutil.which(gh_command) is not None


def gh_authenticated(gh_command: str = "gh") -> bool:
    """Check if `gh auth status` reports a logged-in account."""
    result = subprocess.run(
        [gh_command, "auth", "status"],
        capture_output=True,
        text=True,
    )
    return result.returncode == 0


def ensure_authenticated(gh_command: str = "gh") -> None:
    """Raise AuthError unless gh is installed and logged in."""
    if not gh_installed(gh_command):
        raise AuthError(
            "GitHub CLI (gh) is not installed or not in PATH\n"
            f"Please install it from: {GH_INSTALL_URL}"
        )
    if not gh_authenticated(gh_command):
        raise AuthError("Not authenticated with GitHub CLI\nPlease run: gh auth login")


def resolve_repository(gh_command: str = "gh") -> Repository:
    """Resolve the GitHub repository of the current directory.

    Raises:
        AuthError: If gh is missing or not authenticated.
        ContextError: If the directory is not a GitHub repository checkout.
    """
    ensure_authenticated(gh_command)

    cmd = [gh_command, "repo", "view", "--json", "owner,name"]
    logger.debug("+ %s", " ".join(cmd))
    result = subprocess.run(
        cmd,
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        detail = (result.stderr or "").strip()
        raise ContextError(
            "Cannot determine the current repository"
            + (f": {detail}" if detail else "")
            + "\nRun this command inside a git repository with a GitHub remote."
        )

    try:
        data = json.loads(result.stdout)
        owner = data["owner"]["login"]
        name = data["name"]
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        raise ContextError(f"Unexpected output from gh repo view: {e}") from e

    if not owner or not name:
        raise ContextError("gh repo view returned an empty owner or name")
    return Repository(owner=owner, name=name)
