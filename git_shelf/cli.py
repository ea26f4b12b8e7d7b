"""Typer-based CLI for git-shelf."""

from __future__ import annotations

import logging
from typing import Optional

import typer
from rich.markup import escape

from . import __version__, render
from .config import Config, get_default_remote, resolve_repo_path
from .exceptions import EnvironmentUnavailable, GitCommandError, ShelfError, UsageError
from .models import ShelfOutcome, ShelfResult
from .shelf import ShelfService

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)

# Click's own help handling exits 0 and rejects unknown options one at a time;
# both are done here instead.
CONTEXT_SETTINGS = {
    "help_option_names": [],
    "allow_extra_args": True,
    "ignore_unknown_options": True,
}


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", force=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"git-shelf {__version__}")
        raise typer.Exit()


@app.command(context_settings=CONTEXT_SETTINGS)
def shelf(
    ctx: typer.Context,
    use_remote: Optional[str] = typer.Option(
        None,
        "-u",
        "--use-remote",
        help="Remote to push the shelf to (default: origin).",
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log every git command."),
    dry_run: bool = typer.Option(False, "-n", "--dry-run", help="Print what would run without changing anything."),
    show_help: bool = typer.Option(False, "-h", "--help", help="Show usage and exit."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the git-shelf version and exit.",
    ),
) -> None:
    """Park uncommitted changes on a per-branch shelf branch."""
    _ = version  # handled via callback
    configure_logging(verbose)
    if show_help or "help" in ctx.args:
        render.usage()
        raise typer.Exit(1)

    try:
        repo_path = resolve_repo_path()
    except EnvironmentUnavailable as exc:
        logger.debug("Nothing to do: %s", exc)
        raise typer.Exit(0) from exc

    service = ShelfService(repo_path)
    try:
        check_arguments(ctx.args, use_remote, service)
        requested = use_remote or get_default_remote()
        plan = service.plan(requested)
        if plan.relocated:
            render.show_relocation(plan)
        result = service.execute(plan, dry_run=dry_run)
    except UsageError as exc:
        for problem in exc.problems:
            render.error(problem)
        raise typer.Exit(2) from exc
    except GitCommandError as exc:
        detail = exc.stderr.strip()
        _fail(f"{exc}: {detail}" if detail else str(exc))
    except ShelfError as exc:
        _fail(str(exc))
    raise typer.Exit(report(result))


def check_arguments(extra_args: list[str], use_remote: str | None, service: ShelfService) -> None:
    """Collect every argument problem, then raise them together."""

    problems: list[str] = []
    for arg in extra_args:
        if arg.startswith("-"):
            problems.append(f"Unknown option: {escape(arg)}")
        else:
            problems.append(f"Unexpected argument: {escape(arg)}")
    if use_remote is not None:
        if not use_remote.strip():
            problems.append("--use-remote requires a remote name")
        elif not service.remote_exists(use_remote):
            problems.append(f"Remote '{escape(use_remote)}' could not be resolved")
    if problems:
        raise UsageError(problems)


def report(result: ShelfResult) -> int:
    """Print the outcome of a shelf run and return the exit status for it."""

    plan = result.plan
    ref = escape(plan.target.ref)
    destination = escape(f"{plan.remote}/{plan.identifier}")
    if result.outcome is ShelfOutcome.DRY_RUN:
        render.show_dry_run(plan, Config.commit_message)
    elif result.outcome is ShelfOutcome.NOTHING_TO_SHELF:
        render.warning("Nothing to shelf.")
    elif result.outcome is ShelfOutcome.PUSH_FAILED:
        render.error(f"Push to {escape(plan.remote)} failed; {ref} was not marked as shelved.")
    elif result.ok:
        verb = "Updated shelf" if plan.amend else "Shelved"
        render.success(f"{verb} {ref} at {destination}")
    else:
        render.error(f"Shelf pushed to {destination} but the local marker for {ref} could not be written.")
    return result.returncode


def _fail(message: str, code: int = 1) -> None:
    render.error(escape(message))
    raise typer.Exit(code)


if __name__ == "__main__":
    app()
