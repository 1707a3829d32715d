#!/usr/bin/env python3
"""
Test suite for shelfscan/show_verifier.py: Plex TV naming rules

Show-type detection lists the season folder, so episodes are created on
disk under tmp_path.
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from shelfscan.models import ShowType, ValidationOutcome
from shelfscan.show_verifier import ShowVerifier, verify_episode


@pytest.fixture
def verifier():
    return ShowVerifier()


def make_episode(base: Path, show: str, season: str, filename: str, siblings=()) -> str:
    """Create TV/<show>/<season>/<filename> (plus siblings) and return the episode path"""
    season_dir = base / "TV" / show / season
    season_dir.mkdir(parents=True, exist_ok=True)
    for sibling in siblings:
        (season_dir / sibling).touch()
    episode = season_dir / filename
    episode.touch()
    return str(episode)


class TestEndToEnd:

    def test_season_based_episode(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show (2020)", "Season 01", "Show - S01E01.mkv",
                            siblings=["Show - S01E02.mkv"])
        outcome = verifier.verify(path)
        assert outcome.valid is True
        assert outcome.diagnostics == []

    def test_episode_with_title_and_id(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show (2020) {tvdb-12345}", "Season 2",
                            "Show (2020) - s02e10 - The Finale.mp4")
        assert verifier.verify(path).valid is True

    def test_idempotent(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 4", "Show - S03E05 [tvdb-1].mkv")
        first = verifier.verify(path)
        second = verifier.verify(path)
        assert first == second
        assert len(first.diagnostics) == 2

    def test_verify_episode_function(self, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 1", "Show - S01E01.mkv")
        assert verify_episode(path).valid is True


class TestShowTypeDetection:
    """Any dated sibling makes the season date-based"""

    def test_season_based(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 1", "Show - S01E01.mkv",
                            siblings=["Show - S01E02.mkv"])
        assert verifier.detect_show_type(Path(path).parent) is ShowType.SEASON_BASED

    @pytest.mark.parametrize("sibling", ["News - 2020-01-31.mkv", "News - 31-01-2020.mkv"])
    def test_date_based(self, verifier, tmp_path, sibling):
        path = make_episode(tmp_path, "News", "Season 2020", "News - 2020-02-01.mkv",
                            siblings=[sibling])
        assert verifier.detect_show_type(Path(path).parent) is ShowType.DATE_BASED

    def test_dotted_date_not_a_marker(self, verifier, tmp_path):
        path = make_episode(tmp_path, "News", "Season 1", "News - 2020.01.31.mkv")
        assert verifier.detect_show_type(Path(path).parent) is ShowType.SEASON_BASED

    def test_subfolders_ignored(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 1", "Show - S01E01.mkv")
        (Path(path).parent / "2020-01-01").mkdir()
        assert verifier.detect_show_type(Path(path).parent) is ShowType.SEASON_BASED

    def test_detection_repeated_for_every_file(self, verifier, tmp_path):
        """A dated file added between calls switches the same verifier to the date grammar"""
        path = make_episode(tmp_path, "Show", "Season 1", "Show - S01E01.mkv")
        assert verifier.verify(path).valid is True

        (Path(path).parent / "Show - 2020-01-01.mkv").touch()
        outcome = verifier.verify(path)
        assert outcome.valid is False
        assert outcome.messages[0].startswith("Invalid date-based episode filename.")

    def test_missing_season_folder(self, verifier, tmp_path):
        path = tmp_path / "TV" / "Show" / "Season 1" / "Show - S01E01.mkv"
        outcome = verifier.verify(str(path))
        assert outcome.valid is False
        assert outcome.messages == ["Cannot detect season folder or folder does not exist."]

    def test_listing_error_reported(self, verifier, tmp_path, monkeypatch):
        path = make_episode(tmp_path, "Show", "Season 1", "Show - S01E01.mkv")

        def _denied(season_dir):
            raise PermissionError("denied")

        monkeypatch.setattr(verifier, "detect_show_type", _denied)
        outcome = verifier.verify(path)
        assert outcome.valid is False
        assert outcome.messages == ["Cannot list season folder: denied"]


class TestFolderStructure:

    def test_no_parent_folder(self, verifier):
        outcome = verifier.verify("/Show - S01E01.mkv")
        assert outcome.valid is False
        assert outcome.messages == ["File is not in a valid TV folder structure (Show/Season)."]

    def test_locate_folders(self):
        season, show = ShowVerifier._locate_folders("/TV/Show/Season 1/Show - S01E01.mkv")
        assert season == Path("/TV/Show/Season 1")
        assert show == Path("/TV/Show")

    def test_featurette_skips_everything(self, verifier):
        outcome = verifier.verify("/Show - Making Of-Featurette.mkv")
        assert outcome.valid is True
        assert outcome.diagnostics == []


class TestFolderNames:

    def test_show_folder_is_permissive(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Anything at all {bogus} (20)", "Season 1", "Show - S01E01.mkv")
        assert verifier.verify(path).valid is True

    def test_empty_show_folder_name(self, verifier):
        outcome = ValidationOutcome(path="/Season 1/Show - S01E01.mkv")
        assert verifier._check_show_folder(Path("/"), outcome) is False
        assert outcome.messages[0].startswith("Show folder name '' is invalid.")

    @pytest.mark.parametrize("season", ["Season 1", "season 07", "Season 2024", "Specials", "SPECIALS"])
    def test_valid_season_folders(self, verifier, season):
        outcome = ValidationOutcome(path="x")
        assert verifier._check_season_folder(season, outcome) is True

    @pytest.mark.parametrize("season", ["Series 1", "Season1", "Season 1 Extras", "S01"])
    def test_invalid_season_folders(self, verifier, season):
        outcome = ValidationOutcome(path="x")
        assert verifier._check_season_folder(season, outcome) is False
        assert outcome.messages == [
            f"Season folder name '{season}' is invalid. "
            f"Expected: 'Season X' (any number of digits) or 'Specials'."
        ]


class TestEpisodeFilename:

    def test_missing_episode_marker(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 1", "Show - Episode One.mkv")
        outcome = verifier.verify(path)
        assert outcome.messages == ["Invalid main episode number. Expected format 'SXXEYY'."]

    def test_multi_episode(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 1", "Show - S01E01-E02.mkv")
        assert verifier.verify(path).valid is True

    def test_bad_multi_episode(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 1", "Show - S01E01-Part2.mkv")
        outcome = verifier.verify(path)
        assert outcome.messages == [
            "Invalid multi-episode format. Expected '-eZZ' after main episode number."
        ]

    def test_split_part_not_validated(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 1", "Show - S01E01 - pt1.mkv")
        assert verifier.verify(path).valid is True

    def test_date_based_episode(self, verifier, tmp_path):
        path = make_episode(tmp_path, "News", "Season 2020", "News - 2020-01-02 - Guest.mkv")
        assert verifier.verify(path).valid is True

    def test_date_based_mixed_separators(self, verifier, tmp_path):
        path = make_episode(tmp_path, "News", "Season 2020", "News - 2020-01.02.mkv",
                            siblings=["News - 2020-01-01.mkv"])
        assert verifier.verify(path).valid is True

    def test_date_based_day_first(self, verifier, tmp_path):
        path = make_episode(tmp_path, "News", "Season 2020", "News - 02 01 2020.mkv",
                            siblings=["News - 01-01-2020.mkv"])
        assert verifier.verify(path).valid is True

    def test_invalid_date_based_episode(self, verifier, tmp_path):
        path = make_episode(tmp_path, "News", "Season 2020", "News 2020-01-03.mkv")
        outcome = verifier.verify(path)
        assert outcome.valid is False
        assert outcome.messages[0].startswith("Invalid date-based episode filename.")

    def test_date_based_skips_season_number(self, verifier, tmp_path):
        """Season consistency only applies to season-based shows"""
        path = make_episode(tmp_path, "News", "Season 2019", "News - 2020-01-02 - S05E01.mkv")
        assert verifier.verify(path).valid is True


class TestSeasonNumber:
    """Season in SxxEyy must agree with the folder"""

    def test_matching_season(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 3", "Show - S03E05.mkv")
        assert verifier.verify(path).valid is True

    def test_mismatched_season(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 4", "Show - S03E05.mkv")
        outcome = verifier.verify(path)
        assert outcome.valid is False
        assert outcome.messages == [
            "Mismatched season number. Folder says 'Season 4', but filename says 'S03'."
        ]

    def test_leading_zeros_ignored(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 003", "Show - S3E01.mkv")
        assert verifier.verify(path).valid is True

    def test_specials_season_zero(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Specials", "Show - S00E01.mkv")
        assert verifier.verify(path).valid is True

    def test_specials_wrong_season(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Specials", "Show - S01E01.mkv")
        outcome = verifier.verify(path)
        assert outcome.messages == [
            "Mismatched season number. Folder is 'Specials', but filename says 'S01'."
        ]

    @pytest.mark.parametrize("season", ["Season 0", "Season 00", "season 00"])
    def test_zero_season_folders(self, verifier, tmp_path, season):
        path = make_episode(tmp_path, "Show", season, "Show - S00E01.mkv")
        assert verifier.verify(path).valid is True

    def test_season_zero_in_season_one(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 1", "Show - S00E01.mkv")
        outcome = verifier.verify(path)
        assert outcome.messages == [
            "Filename has S00, but folder 'Season 1' is not a valid zero-season folder."
        ]


class TestAggregation:
    """TV checks all run; every failure is reported in order"""

    def test_multiple_failures(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Extras", "Show - Episode One [tvdb-123].mkv")
        outcome = verifier.verify(path)
        assert outcome.valid is False
        assert len(outcome.diagnostics) == 3
        assert outcome.messages[0].startswith("Season folder name 'Extras' is invalid.")
        assert outcome.messages[1] == "Invalid main episode number. Expected format 'SXXEYY'."
        assert outcome.messages[2] == "Tag '[tvdb-123]' in file should probably be in {...}"

    def test_tag_and_season_mismatch(self, verifier, tmp_path):
        path = make_episode(tmp_path, "Show", "Season 4", "Show - S03E05 [tvdb-1].mkv")
        outcome = verifier.verify(path)
        assert len(outcome.diagnostics) == 2
        assert "[tvdb-1]" in outcome.messages[0]
        assert "Season 4" in outcome.messages[1]
        assert "S03" in outcome.messages[1]
