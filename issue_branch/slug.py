"""Branch-name slugs built from an issue title and number.

The transliteration table is the one shipped by ``text-unidecode``, the
same table python-slugify uses: accented Latin letters lose their accents,
other scripts are romanised (so output for non-Latin titles is best effort).
"""

import re

from text_unidecode import unidecode

SEPARATOR = "-"


def _normalize(title: str, issue_id: str | int) -> str:
    """Run every normalisation rule up to, not including, hyphen cleanup.

    Order matters: hyphens are folded into underscores before symbols are
    dropped, so a word made only of symbols leaves a doubled separator
    behind that the final pass has to clean up.
    """
    text = f"{title}{SEPARATOR}{issue_id}".strip()
    text = unidecode(text).lower()
    text = re.sub(r"\s+", "_", text)
    text = text.replace("-", "_")
    text = re.sub(r"_+", "_", text)
    text = re.sub(r"[^a-z0-9_]", "", text)
    return text.replace("_", "-")


def slugify(title: str, issue_id: str | int) -> str:
    """Build the branch slug for an issue.

    Examples
    --------
    >>> slugify("Rework reputation to handle faction conflict", "5738")
    'rework-reputation-to-handle-faction-conflict-5738'
    >>> slugify("!!! Crash & burn", "12")
    'crash-burn-12'
    """
    slug = re.sub(r"-+", "-", _normalize(title, issue_id))
    return slug.strip("-")


def legacy_slugify(title: str, issue_id: str | int) -> str:
    """Slug as produced by the first releases.

    Only one level of doubled hyphens is collapsed and edge hyphens are
    kept, so ``"a & & b"`` gives ``a--b-<id>``. Not used to name branches;
    it is kept only so tests can pin where new slugs differ from the names
    older branches still carry.
    """
    return _normalize(title, issue_id).replace("--", "-")
