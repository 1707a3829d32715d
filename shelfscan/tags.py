#!/usr/bin/env python3
"""
Tag checks shared by the movie and TV verifiers

Plex reads metadata IDs and editions from {curly} tags only. The same tag in
[square] brackets is silently ignored, so flag it.
"""

import os
import re
from pathlib import Path

from shelfscan.constants import CURLY_TAG_PREFIXES
from shelfscan.models import PathLike, ValidationOutcome

MISPLACED_TAG_RE = re.compile(
    r'\[(' + '|'.join(f'{prefix}-' for prefix in CURLY_TAG_PREFIXES) + r').*?\]',
    re.IGNORECASE
)


def check_bracket_tags(path: PathLike, outcome: ValidationOutcome) -> bool:
    """
    Check the last path segment for [tmdb-...], [tvdb-...], [imdb-...] or
    [edition-...] tags that should be in {...}.

    Every offending tag is reported, not just the first.

    Args:
        path: File or folder path; only its final segment is inspected
        outcome: Outcome that receives one diagnostic per misplaced tag

    Returns:
        True if no misplaced tags were found
    """
    name = Path(path).name
    is_file = os.path.isfile(path) or bool(Path(name).suffix)
    kind = 'file' if is_file else 'folder'

    found = False
    for match in MISPLACED_TAG_RE.finditer(name):
        outcome.fail(f"Tag '{match.group(0)}' in {kind} should probably be in {{...}}")
        found = True

    return not found
