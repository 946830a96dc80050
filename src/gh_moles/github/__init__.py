"""GitHub access through the GitHub CLI."""

from gh_moles.github.api import ApiError, GhApi, ParseError
from gh_moles.github.context import (
    AuthError,
    ContextError,
    Repository,
    ensure_authenticated,
    gh_authenticated,
    gh_installed,
    resolve_repository,
)

__all__ = [
    "ApiError",
    "AuthError",
    "ContextError",
    "GhApi",
    "ParseError",
    "Repository",
    "ensure_authenticated",
    "gh_authenticated",
    "gh_installed",
    "resolve_repository",
]
