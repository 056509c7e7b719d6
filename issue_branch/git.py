"""Git operations for issue-branch."""

import shlex
import subprocess
from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.markup import escape

console = Console()


class VcsGateway(Protocol):
    def list_branches(self) -> list[str]: ...

    def checkout(self, branch: str) -> None: ...

    def create_branch(self, branch: str) -> None: ...


def parse_branch_list(output: str) -> list[str]:
    """Parse ``git branch -a`` output into branch names.

    Drops the current/worktree markers, symbolic refs such as
    ``remotes/origin/HEAD -> origin/main`` and detached HEAD lines.
    """
    branches = []
    for line in output.split("\n"):
        branch = line.strip().lstrip("* ").lstrip("+ ").strip()
        if not branch or branch.startswith("(") or " -> " in branch:
            continue
        branches.append(branch)
    return branches


class GitGateway:
    """Run git in a working tree.

    Parameters
    ----------
    repo_root : Path | None
        Directory to run git in (default: current directory)
    dry_run : bool
        Echo branch-changing commands without running them
    """

    def __init__(self, repo_root: Path | None = None, dry_run: bool = False):
        self.repo_root = repo_root
        self.dry_run = dry_run

    def list_branches(self) -> list[str]:
        """List local and remote-tracking branches."""
        result = subprocess.run(
            ["git", "branch", "-a"],
            capture_output=True,
            text=True,
            check=True,
            cwd=self.repo_root,
        )
        return parse_branch_list(result.stdout)

    def checkout(self, branch: str) -> None:
        self._run(["git", "checkout", branch])

    def create_branch(self, branch: str) -> None:
        self._run(["git", "checkout", "-b", branch])

    def _run(self, cmd: list[str]) -> None:
        console.print(f"[dim]$ {escape(shlex.join(cmd))}[/dim]", soft_wrap=True)
        if self.dry_run:
            return
        subprocess.run(cmd, check=True, cwd=self.repo_root)
