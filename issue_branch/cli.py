"""Main CLI entry point for issue-branch."""

import traceback
from pathlib import Path
from typing import Annotated

from cyclopts import App, CycloptsError, Parameter
from rich.markup import escape

from .config import CONFIG_FILENAME, ConfigError, load_config
from .core import ExitCode, console, err_console, run
from .git import GitGateway
from .github import GitHubIssueClient

app = App(
    help="Check out the git branch for a GitHub issue, creating it if needed.\n\n"
    f"Reads OWNER, REPO and TOKEN from a {CONFIG_FILENAME} file in the current directory.",
    version_flags=["--version"],
)


@app.default
def main(
    issue: str,
    *,
    config: Annotated[Path | None, Parameter(name=["-c", "--config"])] = None,
    dry_run: bool = False,
    verbose: bool = False,
):
    """Switch to an issue branch: issue-branch ISSUE [--config FILE] [--dry-run]

    Looks the issue up on GitHub, then checks out the one local or
    remote-tracking branch that mentions its number, or creates a new
    branch named after the issue title.

    Exit codes: 0 branch checked out or created, 1 issue closed,
    2 several branches match, 3 GitHub/git/config error, 64 bad issue id.

    Parameters
    ----------
    issue : str
        Issue number, #number or issue URL
    config : Path
        Config file to read (default: ./.issue-branch)
    dry_run : bool
        Print the git command instead of running it
    verbose : bool
        Print extra detail and tracebacks
    """
    try:
        branch_config = load_config(config)
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        raise SystemExit(int(ExitCode.ERROR))

    if branch_config is None:
        console.print(
            f"[yellow]No {CONFIG_FILENAME} file in {Path.cwd()}, nothing to do.[/yellow]",
            soft_wrap=True,
        )
        raise SystemExit(int(ExitCode.SUCCESS))

    if verbose:
        console.print(
            f"[dim]Using {branch_config.owner}/{branch_config.repo} "
            f"via {branch_config.api_url}[/dim]",
            soft_wrap=True,
        )

    try:
        code = run(
            issue,
            issues=GitHubIssueClient.from_config(branch_config),
            vcs=GitGateway(dry_run=dry_run),
            verbose=verbose,
        )
    except Exception as e:
        err_console.print(f"[red]Unexpected error: {escape(str(e))}[/red]", soft_wrap=True)
        if verbose:
            err_console.print(f"[dim]{escape(traceback.format_exc())}[/dim]")
        raise SystemExit(int(ExitCode.ERROR))

    raise SystemExit(int(code))


def entrypoint(tokens: list[str] | None = None):
    """Console script entry point.

    Argument errors exit with ExitCode.USAGE so they cannot be mistaken
    for an ambiguous branch match.
    """
    try:
        app(tokens, exit_on_error=False, print_error=False)
    except CycloptsError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        err_console.print(
            escape("Usage: issue-branch ISSUE [--config FILE] [--dry-run] [--verbose]"),
            soft_wrap=True,
        )
        raise SystemExit(int(ExitCode.USAGE))


if __name__ == "__main__":
    entrypoint()
