#!/usr/bin/env python3
"""
TV episode verification against the Plex show naming grammar

Expected layout:
  Show Name (YYYY) {tvdb-ID}/Season 01/Show Name - S01E01 - Title.ext
  Show Name/Specials/Show Name - S00E01.ext
  Daily Show/Season 2020/Daily Show - 2020-01-31 - Guest.ext

Unlike movies, every check runs and every failure is reported. The only
early exit is a file that is not inside a Show/Season folder pair.
"""

import os
import re
import logging
from pathlib import Path
from typing import Optional

from shelfscan.constants import SHOW_ID_AGENTS, SPECIALS_FOLDER, ZERO_SEASON_FOLDERS
from shelfscan.models import PathLike, ShowType, ValidationOutcome
from shelfscan.tags import check_bracket_tags

logger = logging.getLogger(__name__)


class ShowVerifier:
    """Verify TV episode files against Plex naming rules"""

    # Sibling filenames that mark a season as date-based
    DATE_MARKERS = [
        re.compile(r'\d{4}-\d{2}-\d{2}'),
        re.compile(r'\d{2}-\d{2}-\d{4}'),
    ]

    # Year and ID are both optional, so nearly any non-empty name passes
    SHOW_FOLDER_RE = re.compile(
        r'^.+( \(\d{4}\))?( \{(' + '|'.join(SHOW_ID_AGENTS) + r')-\d+\})?$'
    )
    SEASON_FOLDER_RE = re.compile(r'^(Season \d+|Specials)$', re.IGNORECASE)
    SEASON_NUMBER_RE = re.compile(r'Season (\d+)', re.IGNORECASE)

    # Show Name - YYYY-MM-DD - Optional Info (dashes, periods or spaces)
    DATE_EPISODE_RE = re.compile(
        r'^.+ - (\d{4}[-\. ]\d{2}[-\. ]\d{2}|\d{2}[-\. ]\d{2}[-\. ]\d{4})( - .+)?$'
    )
    MAIN_EPISODE_RE = re.compile(r'[sS](\d{1,4})[eE](\d{1,4})')
    MULTI_EPISODE_RE = re.compile(r'-[eE](\d{2})')
    MULTI_EPISODE_TAIL_RE = re.compile(r'^-[eE]\d{4}')

    FEATURETTE_SUFFIX = '-featurette'

    def verify(self, file_path: PathLike) -> ValidationOutcome:
        """
        Verify one episode file.

        Returns:
            ValidationOutcome carrying a diagnostic for every failed check
        """
        outcome = ValidationOutcome(path=str(file_path))
        stem = Path(file_path).stem

        # Featurettes are ignored
        if stem.lower().endswith(self.FEATURETTE_SUFFIX):
            logger.debug(f"Featurette, skipping: {file_path}")
            return outcome

        season_dir, show_dir = self._locate_folders(file_path)
        if season_dir is None or show_dir is None:
            outcome.fail("File is not in a valid TV folder structure (Show/Season).")
            return outcome

        show_type = self._detect_for_file(season_dir, outcome)
        if show_type is None:
            return outcome
        logger.debug(f"{season_dir}: {show_type.value}-based")

        season_folder = season_dir.name

        self._check_show_folder(show_dir, outcome)
        self._check_season_folder(season_folder, outcome)
        self._check_episode_filename(stem, show_type, outcome)
        check_bracket_tags(file_path, outcome)

        if show_type is ShowType.SEASON_BASED:
            self._check_season_number(stem, season_folder, outcome)

        return outcome

    def detect_show_type(self, season_dir: PathLike) -> ShowType:
        """
        Classify a season folder by the names of the files inside it.

        Any file whose name carries a YYYY-MM-DD or DD-MM-YYYY date makes the
        whole season date-based. Raises OSError if the folder can't be listed.
        """
        for entry in sorted(os.scandir(season_dir), key=lambda e: e.name):
            if not entry.is_file():
                continue
            name = Path(entry.name).stem
            if any(marker.search(name) for marker in self.DATE_MARKERS):
                return ShowType.DATE_BASED
        return ShowType.SEASON_BASED

    def _detect_for_file(self, season_dir: Path, outcome: ValidationOutcome) -> Optional[ShowType]:
        """detect_show_type with listing failures turned into a diagnostic"""
        if not season_dir.is_dir():
            outcome.fail("Cannot detect season folder or folder does not exist.")
            return None
        try:
            return self.detect_show_type(season_dir)
        except OSError as e:
            logger.error(f"Cannot list {season_dir}: {e}")
            outcome.fail(f"Cannot list season folder: {e}")
            return None

    @staticmethod
    def _locate_folders(file_path: PathLike):
        """Return (season folder, show folder); either is None when missing"""
        absolute = Path(os.path.abspath(os.fspath(file_path)))
        season_dir = absolute.parent
        if season_dir == absolute or not season_dir.name:
            return None, None
        show_dir = season_dir.parent
        if show_dir == season_dir:
            return season_dir, None
        return season_dir, show_dir

    def _check_show_folder(self, show_dir: Path, outcome: ValidationOutcome) -> bool:
        """Show Name (YYYY) {tvdb-ID}, year and ID optional"""
        folder_name = show_dir.name
        if not self.SHOW_FOLDER_RE.match(folder_name):
            return outcome.fail(
                f"Show folder name '{folder_name}' is invalid. Expected format: "
                f"'Show Name (YYYY)' optionally with ' {{tmdb | tvdb | imdb - ID}}'. Year is optional."
            )
        return True

    def _check_season_folder(self, season_folder: str, outcome: ValidationOutcome) -> bool:
        """Season XX or Specials"""
        if not self.SEASON_FOLDER_RE.match(season_folder):
            return outcome.fail(
                f"Season folder name '{season_folder}' is invalid. "
                f"Expected: 'Season X' (any number of digits) or 'Specials'."
            )
        return True

    def _check_episode_filename(self, stem: str, show_type: ShowType, outcome: ValidationOutcome) -> bool:
        """Season-based SxxEyy (with optional -Ezz) or date-based naming"""
        if show_type is ShowType.DATE_BASED:
            if not self.DATE_EPISODE_RE.match(stem):
                return outcome.fail(
                    "Invalid date-based episode filename. Expected format: "
                    "'Show Name - YYYY-MM-DD - Optional Info.ext' or "
                    "'Show Name - DD-MM-YYYY - Optional Info.ext'."
                )
            return True

        main_episode = self.MAIN_EPISODE_RE.search(stem)
        if not main_episode:
            return outcome.fail("Invalid main episode number. Expected format 'SXXEYY'.")

        # A dash straight after SxxEyy must start a multi-episode marker
        if '-' in stem and not self.MULTI_EPISODE_RE.search(stem):
            remaining = stem[main_episode.end():]
            if remaining.startswith('-') and not self.MULTI_EPISODE_TAIL_RE.match(remaining):
                return outcome.fail("Invalid multi-episode format. Expected '-eZZ' after main episode number.")

        # Split parts are not checked: 'pt1' can be part of a legitimate title
        return True

    def _check_season_number(self, stem: str, season_folder: str, outcome: ValidationOutcome) -> bool:
        """Season in SxxEyy must agree with the season folder"""
        match = self.MAIN_EPISODE_RE.search(stem)
        if not match:
            return True
        season_from_file = int(match.group(1))

        if season_folder.lower() == SPECIALS_FOLDER.lower():
            if season_from_file != 0:
                return outcome.fail(
                    f"Mismatched season number. Folder is '{SPECIALS_FOLDER}', "
                    f"but filename says 'S{season_from_file:02d}'."
                )
            return True

        folder_match = self.SEASON_NUMBER_RE.search(season_folder)
        if not folder_match:
            return True
        season_from_folder = int(folder_match.group(1))

        if season_from_file == 0:
            if season_folder.lower() not in (name.lower() for name in ZERO_SEASON_FOLDERS):
                return outcome.fail(
                    f"Filename has S00, but folder '{season_folder}' is not a valid zero-season folder."
                )
        elif season_from_file != season_from_folder:
            return outcome.fail(
                f"Mismatched season number. Folder says '{season_folder}', "
                f"but filename says 'S{season_from_file:02d}'."
            )
        return True


def verify_episode(file_path: PathLike) -> ValidationOutcome:
    """Verify one episode file with a default ShowVerifier"""
    return ShowVerifier().verify(file_path)
