#!/usr/bin/env python3
"""
Test suite for shelfscan/tags.py: [tags] that belong in {curly braces}
"""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from shelfscan.models import ValidationOutcome
from shelfscan.tags import check_bracket_tags


def _check(path):
    outcome = ValidationOutcome(path=str(path))
    ok = check_bracket_tags(path, outcome)
    return ok, outcome


class TestMisplacedTags:
    """[tmdb-], [tvdb-], [imdb-] and [edition-] must be flagged"""

    def test_imdb_tag_in_file(self):
        ok, outcome = _check("/Movies/Movie (2020)/Movie (2020) [imdb-tt1234567].mkv")
        assert ok is False
        assert outcome.valid is False
        assert outcome.messages == [
            "Tag '[imdb-tt1234567]' in file should probably be in {...}"
        ]

    @pytest.mark.parametrize("tag", ["[tmdb-603]", "[tvdb-81189]", "[edition-Extended]"])
    def test_other_prefixes(self, tag):
        ok, outcome = _check(f"/Movies/Movie (2020) {tag}.mkv")
        assert ok is False
        assert tag in outcome.messages[0]

    def test_case_insensitive(self):
        ok, outcome = _check("/Movies/Movie (2020) [IMDB-tt1].mkv")
        assert ok is False
        assert "[IMDB-tt1]" in outcome.messages[0]

    def test_every_tag_reported(self):
        """Does not stop at the first match"""
        ok, outcome = _check("/TV/Show - S01E01 [tvdb-1] [edition-Uncut].mkv")
        assert ok is False
        assert len(outcome.diagnostics) == 2
        assert "[tvdb-1]" in outcome.messages[0]
        assert "[edition-Uncut]" in outcome.messages[1]

    def test_folder_name_reported_as_folder(self):
        ok, outcome = _check("/Movies/Movie (2020) [tmdb-123]")
        assert ok is False
        assert outcome.messages == [
            "Tag '[tmdb-123]' in folder should probably be in {...}"
        ]


class TestAcceptedNames:
    """Plain brackets and curly tags are fine"""

    def test_quality_bracket(self):
        ok, outcome = _check("/Movies/Movie (2020) [1080p].mkv")
        assert ok is True
        assert outcome.valid is True
        assert outcome.diagnostics == []

    def test_curly_tag(self):
        ok, _ = _check("/Movies/Movie (2020) {imdb-tt1234567}.mkv")
        assert ok is True

    def test_only_last_segment_inspected(self):
        ok, _ = _check("/Movies/Movie (2020) [imdb-tt1]/Movie (2020).mkv")
        assert ok is True

    def test_prefix_without_dash_ignored(self):
        ok, _ = _check("/Movies/Movie (2020) [imdb].mkv")
        assert ok is True
