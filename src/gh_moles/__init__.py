"""gh-moles - GitHub CLI extension with tools for GitHub repositories."""

__version__ = "0.1.0"
