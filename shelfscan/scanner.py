#!/usr/bin/env python3
"""
Library scan driver: find media files, pick a grammar, verify each file

Read-only. Never renames or moves anything.
"""

import os
import re
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from shelfscan.constants import MEDIA_EXTENSIONS, MEDIA_TYPE_ALIASES, SKIPPED_FOLDERS
from shelfscan.models import ContentType, PathLike, ValidationOutcome
from shelfscan.movie_verifier import MovieVerifier
from shelfscan.show_verifier import ShowVerifier
from shelfscan import report

logger = logging.getLogger(__name__)

TV_EPISODE_RE = re.compile(r'S\d{1,2}E\d{1,2}', re.IGNORECASE)


@dataclass
class ScanStats:
    """Tally of a library scan"""
    valid: int = 0
    invalid: int = 0
    outcomes: List[ValidationOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.valid + self.invalid


def find_media_files(folder: PathLike, extensions: Iterable[str] = MEDIA_EXTENSIONS) -> List[str]:
    """
    Recursively collect media files under folder.

    Subfolders are walked before the files of the folder itself, names in
    sorted order. 'Plex Versions' folders are skipped, and symlinked folders
    are not followed. OSError propagates.
    """
    wanted = {ext.lower() for ext in extensions}
    skipped = {name.lower() for name in SKIPPED_FOLDERS}

    with os.scandir(folder) as it:
        entries = sorted(it, key=lambda e: e.name)

    files: List[str] = []
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if entry.name.lower() in skipped:
                logger.debug(f"Skipping {entry.path}")
                continue
            files.extend(find_media_files(entry.path, extensions))

    for entry in entries:
        if entry.is_file() and Path(entry.name).suffix.lower() in wanted:
            files.append(entry.path)

    return files


def guess_content_type(files: Iterable[PathLike]) -> ContentType:
    """Any SxxEyy in a path means TV; everything else is treated as movies"""
    for file_path in files:
        if TV_EPISODE_RE.search(os.fspath(file_path)):
            return ContentType.EPISODIC
    return ContentType.MOVIE


def parse_content_type(text: str) -> ContentType:
    """
    Parse a media-type override ('movie', 'films', 'tv', 'shows', 'television').

    Only the first two letters count. Raises ValueError on anything else.
    """
    key = text.lower()[:2]
    if key not in MEDIA_TYPE_ALIASES:
        raise ValueError(f"Unknown media type override '{text}'. Use 'movie' or 'tv'.")
    return ContentType(MEDIA_TYPE_ALIASES[key])


def verify_file(
    file_path: PathLike,
    content_type: ContentType,
    library_root: PathLike,
    movie_verifier: Optional[MovieVerifier] = None,
    show_verifier: Optional[ShowVerifier] = None,
) -> ValidationOutcome:
    """Verify one file with the grammar selected for the run"""
    if content_type is ContentType.MOVIE:
        return (movie_verifier or MovieVerifier()).verify(file_path, library_root)
    return (show_verifier or ShowVerifier()).verify(file_path)


def run_scan(
    files: Iterable[PathLike],
    content_type: ContentType,
    library_root: PathLike,
    show_passes: bool = False,
    keep_outcomes: bool = False,
) -> ScanStats:
    """
    Verify every file in order, printing diagnostics as each file finishes.

    Args:
        files: Media files, typically from find_media_files()
        content_type: Grammar for the whole run
        library_root: Scan root; movie files directly inside it skip folder checks
        show_passes: Also print a block for every file that passes
        keep_outcomes: Keep every outcome on the stats (needed for the CSV report)

    Returns:
        ScanStats with counts, plus the outcomes when keep_outcomes is set
    """
    movie_verifier = MovieVerifier()
    show_verifier = ShowVerifier()
    stats = ScanStats()

    for file_path in files:
        outcome = verify_file(file_path, content_type, library_root, movie_verifier, show_verifier)
        report.print_diagnostics(outcome)
        if keep_outcomes:
            stats.outcomes.append(outcome)

        if outcome.valid:
            stats.valid += 1
            if show_passes:
                report.print_pass(outcome)
        else:
            stats.invalid += 1

    return stats
