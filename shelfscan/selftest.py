#!/usr/bin/env python3
"""
Self-test runner: replay a fixture tree through the verifiers

Fixture layout under the base folder:
  pass/movies/   every movie here must pass
  pass/tv/       every episode here must pass
  fail/movies/   every movie here must fail
  fail/tv/       every episode here must fail
"""

import logging
from pathlib import Path
from typing import List

from shelfscan.constants import SELF_TEST_FOLDERS
from shelfscan.models import ContentType, PathLike, SelfTestResult
from shelfscan.movie_verifier import MovieVerifier
from shelfscan.show_verifier import ShowVerifier
from shelfscan.scanner import find_media_files, verify_file
from shelfscan import report

logger = logging.getLogger(__name__)


def run_self_tests(base_folder: PathLike) -> List[SelfTestResult]:
    """
    Verify every fixture folder and compare outcomes with expectations.

    Movie folders are their own library root. Missing folders are skipped.
    """
    print()
    print("Running self-tests...")

    movie_verifier = MovieVerifier()
    show_verifier = ShowVerifier()
    results: List[SelfTestResult] = []

    for relative_folder in SELF_TEST_FOLDERS:
        full_path = Path(base_folder) / relative_folder
        if not full_path.is_dir():
            print(f"Skipping missing folder: {relative_folder}")
            continue

        print()
        print(f"========== Testing folder: {relative_folder} ==========")

        try:
            files = find_media_files(full_path)
        except OSError as e:
            logger.error(f"Error scanning {relative_folder}: {e}")
            continue

        should_pass = relative_folder.startswith('pass/')
        content_type = ContentType.MOVIE if relative_folder.endswith('movies') else ContentType.EPISODIC
        passed = failed = 0

        for file_path in files:
            outcome = verify_file(file_path, content_type, full_path, movie_verifier, show_verifier)
            report.print_diagnostics(outcome)

            if outcome.valid == should_pass:
                passed += 1
            else:
                failed += 1

            if not should_pass and outcome.valid:
                print(f"\n{file_path}\n  Incorrectly passed verification (in 'fail' folder).")

        results.append(SelfTestResult(
            folder=relative_folder,
            total=len(files),
            passed_as_expected=passed,
            unexpected=failed,
        ))

    return results
