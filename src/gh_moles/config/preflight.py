"""Preflight checks to validate environment."""

from gh_moles.console import console
from gh_moles.github.context import GH_INSTALL_URL, gh_authenticated, gh_installed


def check_gh_installed(gh_command: str = "gh") -> bool:
    """Validate the GitHub CLI is available in PATH."""
    if gh_installed(gh_command):
        console.print(
            f"[green]✓[/green] GitHub CLI found ([cyan]{gh_command}[/cyan])"
        )
        return True
    console.print(
        f"[red]✗[/red] GitHub CLI ({gh_command}) is not installed - "
        f"[dim]{GH_INSTALL_URL}[/dim]"
    )
    return False


def check_gh_auth(gh_command: str = "gh") -> bool:
    """Validate the GitHub CLI has a logged-in account."""
    if gh_authenticated(gh_command):
        console.print("[green]✓[/green] Authenticated with GitHub")
        return True
    console.print("[red]✗[/red] Not authenticated with GitHub CLI")
    console.print("[dim]Please run: gh auth login[/dim]")
    return False


def run_all_checks(gh_command: str = "gh") -> bool:
    """Run all preflight checks.

    Authentication is only checked once gh itself was found.
    """
    console.print("[bold]Running preflight checks...[/bold]\n")

    all_passed = check_gh_installed(gh_command) and check_gh_auth(gh_command)

    if all_passed:
        console.print("\n[bold green]All preflight checks passed![/bold green]")
    else:
        console.print("\n[bold red]Some preflight checks failed.[/bold red]")

    return all_passed
