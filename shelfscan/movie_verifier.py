#!/usr/bin/env python3
"""
Movie file verification against the Plex movie naming grammar

Checks run in strict order and stop at the first failure, so a failing
movie gets exactly one diagnostic:

  1. Extras subdirectory (Trailers/, Featurettes/, ...) → valid, stop
  2. Inline extra suffix (-trailer, -deleted, ...) → valid, stop
  3. {...} tags must match between folder and filename (not in root)
  4. Core grammar: 'Title (YYYY)' once {...} and [...] tags are removed
  5. Title / year diagnostics
  6. Trailing text must be a split part: ' - pt1', ' - CD2', ...
  7. Year range 1900..next year
  8. Folder name must match the filename base (not in root)
  9. No [tmdb-...]/[imdb-...]/[edition-...] tags in square brackets
"""

import os
import re
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from shelfscan.constants import (
    EARLIEST_MOVIE_YEAR, EXTRA_SUBDIRECTORIES, INLINE_EXTRA_SUFFIXES, SPLIT_PART_TOKENS
)
from shelfscan.models import PathLike, ValidationOutcome
from shelfscan.tags import check_bracket_tags

logger = logging.getLogger(__name__)

_SPLIT_ALTERNATION = '|'.join(rf'{token}\d+' for token in SPLIT_PART_TOKENS)


class MovieVerifier:
    """Verify movie files against Plex naming rules"""

    BRACKET_BLOCK_RE = re.compile(r'\s*\[[^\]]*\]')
    CURLY_BLOCK_RE = re.compile(r'\{.*?\}')
    TAG_BLOCK_RE = re.compile(r'(\{.*?\}|\[.*?\])')

    # Title, year, and anything after the year
    CORE_RE = re.compile(r'^(?P<title>.+?) ?\((?P<year>\d{4})\)(?P<after>.*)$', re.IGNORECASE)
    YEAR_RE = re.compile(r'^\d{4}$')
    SPLIT_RE = re.compile(rf'^- ({_SPLIT_ALTERNATION})$', re.IGNORECASE)

    # Folder comparison ignores [tags], {edition-*} and a trailing split
    FOLDER_IGNORED_RE = re.compile(r'(\[.*?\]|\{edition-.*?\})', re.IGNORECASE)
    TRAILING_SPLIT_RE = re.compile(rf' - ({_SPLIT_ALTERNATION})$', re.IGNORECASE)

    def __init__(self, current_year: Optional[int] = None):
        # Pinned for tests; otherwise read from the clock on every check
        self.current_year = current_year

    def verify(self, file_path: PathLike, library_root: PathLike) -> ValidationOutcome:
        """
        Verify one movie file.

        Args:
            file_path: Path to the movie file
            library_root: Root folder of the scan; files directly inside it
                          skip the folder-consistency checks

        Returns:
            ValidationOutcome with at most one diagnostic
        """
        outcome = ValidationOutcome(path=str(file_path))
        path = Path(file_path)
        folder_path = os.path.dirname(os.fspath(file_path))
        parent_folder = os.path.basename(folder_path)
        stem = path.stem

        # 1. Extras in a dedicated subdirectory
        clean_folder = self.strip_brackets(parent_folder)
        if any(clean_folder.lower() == extra.lower() for extra in EXTRA_SUBDIRECTORIES):
            logger.debug(f"Extras folder, skipping: {file_path}")
            return outcome

        # 2. Inline extras
        if any(stem.lower().endswith(suffix) for suffix in INLINE_EXTRA_SUFFIXES):
            logger.debug(f"Inline extra, skipping: {file_path}")
            return outcome

        in_root = self.is_in_root(folder_path, library_root)

        # 3. {...} blocks must appear on both sides ({edition-*} exempt)
        if not in_root and not self._check_curly_parity(stem, parent_folder, outcome):
            return outcome

        # 4. Core name with all tags removed
        core_name = self.TAG_BLOCK_RE.sub('', stem).strip()
        core_match = self.CORE_RE.match(core_name)
        if not core_match:
            outcome.fail("Invalid naming format. Expected 'Movie Name (YYYY){optional split}'")
            return outcome

        title = core_match.group('title').strip()
        year_str = core_match.group('year').strip()
        after_year = core_match.group('after').strip()

        # 5. Title / year diagnostics
        if not title:
            outcome.fail("Missing or malformed title before year.")
            return outcome
        if not self.YEAR_RE.match(year_str):
            outcome.fail(f"Year must be 4 digits. Found '{year_str}'.")
            return outcome

        # 6. Split / additional text
        if after_year:
            if not after_year.startswith('-'):
                outcome.fail(f"Additional text after year is technically invalid: '{after_year}'")
                return outcome
            if not self.SPLIT_RE.match(after_year):
                outcome.fail("Split/part tag format incorrect. Expected ' - pt1', ' - CD2', etc.")
                return outcome

        # 7. Year range
        latest_year = self._latest_year()
        year = int(year_str)
        if year < EARLIEST_MOVIE_YEAR or year > latest_year:
            outcome.fail(
                f"Invalid year '{year_str}'. Must be between {EARLIEST_MOVIE_YEAR} and {latest_year}"
            )
            return outcome

        # 8. Folder consistency
        if not in_root:
            folder_base = self.FOLDER_IGNORED_RE.sub('', parent_folder).strip()
            file_base = self.FOLDER_IGNORED_RE.sub('', stem).strip()
            file_base = self.TRAILING_SPLIT_RE.sub('', file_base).strip()

            if file_base.lower() != folder_base.lower():
                outcome.fail(
                    f"Folder name '{parent_folder}' does not match the filename base "
                    f"(ignoring optional split, {{edition-*}}, and [tags])."
                )
                return outcome

        # 9. Tags in [...] that belong in {...}
        check_bracket_tags(file_path, outcome)
        return outcome

    def _check_curly_parity(self, stem: str, parent_folder: str, outcome: ValidationOutcome) -> bool:
        """Every non-edition {...} block must exist in both folder and filename"""
        for block in self.CURLY_BLOCK_RE.findall(stem):
            if block.lower().startswith('{edition-'):
                continue
            if block.lower() not in parent_folder.lower():
                return outcome.fail(f"Block '{block}' in filename must also exist in folder")

        for block in self.CURLY_BLOCK_RE.findall(parent_folder):
            if block.lower().startswith('{edition-'):
                continue
            if block.lower() not in stem.lower():
                return outcome.fail(f"Block '{block}' in folder must also exist in filename")

        return True

    def _latest_year(self) -> int:
        current = self.current_year if self.current_year is not None else datetime.now().year
        return current + 1

    @staticmethod
    def is_in_root(folder_path: PathLike, library_root: PathLike) -> bool:
        """Case-insensitive comparison of two absolute folder paths, trailing separators ignored"""
        def _normalize(p: PathLike) -> str:
            return os.path.abspath(os.fspath(p)).rstrip('\\/').lower()
        return _normalize(folder_path) == _normalize(library_root)

    def strip_brackets(self, name: str) -> str:
        """Remove [bracketed] sections from a name. Plex ignores them."""
        if not name:
            return ''
        return self.BRACKET_BLOCK_RE.sub('', name)


def verify_movie(file_path: PathLike, library_root: PathLike) -> ValidationOutcome:
    """Verify one movie file with a default MovieVerifier"""
    return MovieVerifier().verify(file_path, library_root)
