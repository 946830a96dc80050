"""Thin wrapper around `gh api` for GitHub REST calls."""

import json
import logging
import subprocess
from typing import Any

logger = logging.getLogger(__name__)

# https://docs.github.com/en/rest/overview/api-versions
GITHUB_API_ACCEPT = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"


class ApiError(Exception):
    """Raised when a `gh api` call fails."""

    def __init__(
        self, endpoint: str, message: str, returncode: int | None = None
    ) -> None:
        self.endpoint = endpoint
        self.message = message
        self.returncode = returncode
        super().__init__(f"{endpoint}: {message}")


class ParseError(ApiError):
    """Raised when a `gh api` response is not the expected JSON document."""


class GhApi:
    """Authenticated GitHub REST handle backed by the GitHub CLI.

    Authentication is delegated to `gh`, so every request runs with the
    credentials of the current `gh auth` session.
    """

    def __init__(self, gh_command: str = "gh") -> None:
        """Initialize with the name (or path) of the gh executable."""
        self._gh = gh_command

    def build_command(self, endpoint: str, method: str = "GET") -> list[str]:
        """Build the argv for a single `gh api` request."""
        cmd = [
            self._gh,
            "api",
            "-H",
            f"Accept: {GITHUB_API_ACCEPT}",
            "-H",
            f"X-GitHub-Api-Version: {GITHUB_API_VERSION}",
        ]
        if method != "GET":
            cmd.extend(["-X", method])
        cmd.append(endpoint)
        return cmd

    def request(self, endpoint: str, method: str = "GET") -> str:
        """Run one request and return its raw stdout.

        Raises:
            ApiError: If gh cannot be started or exits with a non-zero code.
        """
        cmd = self.build_command(endpoint, method)
        logger.debug("+ %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise ApiError(endpoint, f"cannot run {self._gh}: {e}") from e

        if result.returncode != 0:
            message = (result.stderr or "").strip() or f"exit code {result.returncode}"
            raise ApiError(endpoint, message, result.returncode)
        return result.stdout or ""

    def get_json(self, endpoint: str) -> Any:
        """GET an endpoint and decode the JSON body."""
        raw = self.request(endpoint).strip()
        if not raw:
            raise ParseError(endpoint, "empty response")
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(endpoint, f"invalid JSON response: {e}") from e

    def delete(self, endpoint: str) -> None:
        """DELETE an endpoint; the response body is ignored."""
        self.request(endpoint, method="DELETE")
