"""Core decision logic for issue-branch.

Fetches the issue, then either refuses (closed issue, ambiguous match),
checks out the one matching branch, or creates a new slugified branch.
"""

import subprocess
from enum import IntEnum

from rich.console import Console
from rich.markup import escape

from .branches import branches_for
from .git import VcsGateway
from .github import FetchError, Issue, IssueClient
from .identifier import extract_issue_number
from .slug import slugify

console = Console()
err_console = Console(stderr=True)


class ExitCode(IntEnum):
    SUCCESS = 0
    CLOSED = 1
    AMBIGUOUS = 2
    ERROR = 3
    USAGE = 64


def run(
    issue_id: str,
    *,
    issues: IssueClient,
    vcs: VcsGateway,
    verbose: bool = False,
) -> ExitCode:
    """Switch to the branch for an issue, creating it if needed.

    Parameters
    ----------
    issue_id : str
        Issue number, ``#number`` or issue URL
    issues : IssueClient
        Source of issue metadata
    vcs : VcsGateway
        Git working tree to list and switch branches in
    verbose : bool
        Print extra detail (dimmed)

    Returns
    -------
    ExitCode
        SUCCESS after a checkout or branch creation, CLOSED for a closed
        issue, AMBIGUOUS when several branches match, ERROR when GitHub or
        git fail, USAGE for an unparseable identifier.
    """
    number = extract_issue_number(issue_id)
    if not number:
        err_console.print(
            f"[red]Error: '{escape(issue_id)}' is not an issue number or issue URL[/red]",
            soft_wrap=True,
        )
        return ExitCode.USAGE

    try:
        issue = issues.get_issue(int(number))
    except FetchError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        if e.body:
            err_console.print(escape(e.body), soft_wrap=True, highlight=False)
        return ExitCode.ERROR

    if issue.is_closed:
        err_console.print(
            f"[yellow]Issue #{number} is closed (closed at {issue.closed_at.isoformat()})[/yellow]",
            soft_wrap=True,
        )
        err_console.print(issue.url, soft_wrap=True, highlight=False)
        return ExitCode.CLOSED

    try:
        return _switch_to_issue_branch(issue, number, vcs, verbose)
    except subprocess.CalledProcessError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        if e.stderr:
            err_console.print(escape(e.stderr.strip()), soft_wrap=True, highlight=False)
        return ExitCode.ERROR


def _switch_to_issue_branch(
    issue: Issue, number: str, vcs: VcsGateway, verbose: bool
) -> ExitCode:
    branches = vcs.list_branches()
    matches = branches_for(number, branches)
    if verbose:
        console.print(
            f"[dim]{len(matches)} of {len(branches)} branches mention #{number}[/dim]"
        )

    if len(matches) > 1:
        err_console.print(
            f"[yellow]Several branches match issue #{number}, check one out by name:[/yellow]"
        )
        for branch in matches:
            err_console.print(f"  {escape(branch)}", soft_wrap=True, highlight=False)
        return ExitCode.AMBIGUOUS

    if matches:
        branch = matches[0]
        console.print(f"[cyan]{escape(branch)}[/cyan]", soft_wrap=True)
        vcs.checkout(branch)
        console.print(f"[green]Checked out existing branch for #{number}[/green]")
        return ExitCode.SUCCESS

    branch = slugify(issue.title, number)
    console.print(f"[cyan]{escape(branch)}[/cyan]", soft_wrap=True)
    vcs.create_branch(branch)
    console.print(f"[green]Created branch for #{number}: {escape(issue.title)}[/green]", soft_wrap=True)
    return ExitCode.SUCCESS
