"""Issue identifier parsing.

Accepts the forms people paste from GitHub: a bare number, ``#number``
or the issue URL.
"""

import re

_ISSUE_NUMBER = re.compile(r"^#?(\d+)$")
_ISSUE_URL = re.compile(r"^https?://[^/\s]+/[^/\s]+/[^/\s]+/issues/(\d+)/?(?:[#?].*)?$")


def extract_issue_number(identifier: str) -> str:
    """Extract the issue number from various formats.

    Handles:
    - Plain: "2415" -> "2415"
    - Hash prefix: "#2415" -> "2415"
    - URL: "https://github.com/org/repo/issues/2415" -> "2415"

    Leading zeros are dropped, so "#0241" gives "241" like GitHub does.
    Returns an empty string when nothing looks like an issue number.
    """
    identifier = identifier.strip()
    match = _ISSUE_NUMBER.match(identifier) or _ISSUE_URL.match(identifier)
    return str(int(match.group(1))) if match else ""
