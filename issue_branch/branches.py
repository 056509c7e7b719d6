"""Heuristic matching of branch names against an issue number."""

import re
from collections.abc import Iterable


def branches_for(issue_id: str | int, branches: Iterable[str]) -> list[str]:
    """Return the branches that mention ``issue_id`` as a whole token.

    The id must be bounded by non-word characters or the ends of the name,
    so ``241`` does not match ``fix-2415``. Input order is preserved.
    """
    issue_id = str(issue_id).strip()
    if not issue_id:
        return []

    pattern = re.compile(rf"\b{re.escape(issue_id)}\b")
    matches = []
    for branch in branches:
        branch = branch.strip()
        if pattern.search(branch):
            matches.append(branch)
    return matches
