#!/usr/bin/env python3
"""
Console and CSV reporting for library scans
"""

import csv
import logging
from pathlib import Path
from typing import Iterable, List

from shelfscan.constants import CORRECTNESS_BANDS, NAMING_GUIDES
from shelfscan.models import ContentType, SelfTestResult, ValidationOutcome

logger = logging.getLogger(__name__)

CSV_FIELDNAMES = ['path', 'content_type', 'valid', 'diagnostics']


def print_diagnostics(outcome: ValidationOutcome) -> None:
    for diagnostic in outcome.diagnostics:
        print(diagnostic)


def print_pass(outcome: ValidationOutcome) -> None:
    print(f"\n{outcome.path}\n  PASSED verification.")


def print_header(content_type: ContentType) -> None:
    """Report banner and notice block, printed before any diagnostics"""
    print()
    print(f"========= BEGIN {content_type.label} REPORT =========")
    print()
    print("Strict file format checking:")
    print()
    print("File format checks are very strict. A file marked as invalid in this report")
    print("does not necessarily mean there is a problem with it in Plex.")
    print()
    print("Resources:")
    print()
    for url in NAMING_GUIDES:
        print(f"- {url}")
    print()
    print("Scan results:")


def correctness(valid: int, total: int) -> float:
    """Percentage of valid files; 0.0 for an empty scan"""
    if total == 0:
        return 0.0
    return valid * 100.0 / total


def correctness_label(percent: float) -> str:
    for threshold, label in CORRECTNESS_BANDS:
        if percent >= threshold:
            return label
    return ''


def format_summary(valid: int, invalid: int, total: int) -> List[str]:
    """Summary lines for the end of a report"""
    percent = correctness(valid, total)
    return [
        "Summary:",
        "",
        f"Valid files:          {valid:6,d}",
        f"Invalid files:        {invalid:6,d}",
        f"Total files checked:  {total:6,d}",
        f"Correctness:          {percent:6,.2f}% {correctness_label(percent)}".rstrip(),
    ]


def print_summary(content_type: ContentType, valid: int, invalid: int, total: int) -> None:
    print()
    for line in format_summary(valid, invalid, total):
        print(line)
    print()
    print(f"========== END {content_type.label} REPORT ==========")


def write_csv(report_path: Path, outcomes: Iterable[ValidationOutcome], content_type: ContentType) -> int:
    """
    Write one row per verified file.

    Returns:
        Number of rows written
    """
    report_path.parent.mkdir(parents=True, exist_ok=True)
    rows = 0

    with open(report_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDNAMES)
        writer.writeheader()
        for outcome in outcomes:
            writer.writerow({
                'path': outcome.path,
                'content_type': content_type.value,
                'valid': outcome.valid,
                'diagnostics': '; '.join(outcome.messages),
            })
            rows += 1

    logger.info(f"Report written to {report_path} ({rows} rows)")
    return rows


def print_self_test_summary(results: List[SelfTestResult]) -> bool:
    """Print the self-test table. Returns True if nothing was unexpected."""
    print()
    print("========== SELF-TEST SUMMARY ==========")
    print()
    print(f"{'Folder':<15} {'Checked':>15} {'Passed':>15} {'Unexpected':>15}")

    for result in results:
        print(f"{result.folder:<15} {result.total:>15} "
              f"{result.passed_as_expected:>15} {result.unexpected:>15}")

    all_ok = all(result.unexpected == 0 for result in results)
    if all_ok:
        print("\nAll self-tests passed as expected!")
    else:
        print("\nSome self-tests did not behave as expected.")
    return all_ok
