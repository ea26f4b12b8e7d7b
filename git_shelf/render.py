"""Rich UI helpers for terminal output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from .markers import marker_key
from .models import ShelfPlan

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

USAGE = """\
[bold]git shelf[/bold] - park uncommitted changes on a per-branch shelf branch

[bold]Usage:[/bold]
  git shelf [-u [italic]REMOTE[/italic] | --use-remote [italic]REMOTE[/italic]] [-v] [-n]
  git shelf (-h | --help | help)

Commits every change in the working tree and pushes it to
[italic]REMOTE[/italic]:shelf/[italic]<user.email>[/italic]/[italic]<branch>[/italic].
Shelving the same branch again amends the shelf commit and force-pushes it.

[bold]Options:[/bold]
  -u, --use-remote [italic]REMOTE[/italic]   Remote to push the shelf to (default: origin).
  -v, --verbose             Log every git command.
  -n, --dry-run             Check everything, print what would run, change nothing.
  --version                 Show the git-shelf version and exit.
  -h, --help                Show this message and exit.
"""


def info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {message}")


def success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]✗[/red] {message}", style="red")


def usage() -> None:
    console.print(USAGE)


def show_relocation(plan: ShelfPlan) -> None:
    info(
        f"Shelf for [bold]{escape(plan.target.ref)}[/bold] lives on "
        f"[bold]{escape(plan.remote)}[/bold], using it instead of {escape(plan.requested_remote)}."
    )


def show_dry_run(plan: ShelfPlan, commit_message: str) -> None:
    """List the mutating git commands a real run would execute."""
    amend = " --amend" if plan.amend else ""
    force = " --force" if plan.amend else ""
    console.print("[bold]Dry run, nothing was changed. Would run:[/bold]")
    for line in (
        "git add --all",
        f"git commit{amend} --no-gpg-sign -m {commit_message}",
        f"git push{force} {plan.remote} {plan.refspec}",
        f"git config --local --bool {marker_key(plan.target.ref)} true",
    ):
        console.print(f"  {escape(line)}")
