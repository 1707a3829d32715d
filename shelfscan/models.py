#!/usr/bin/env python3
"""
Result containers shared by the verifiers, the scan driver and the reports
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Union

PathLike = Union[str, Path]


class ContentType(Enum):
    """Library grammar selected for a whole run"""
    MOVIE = 'movie'
    EPISODIC = 'tv'

    @property
    def label(self) -> str:
        return self.value.upper()


class ShowType(Enum):
    """Episode naming convention, detected per file from its season folder"""
    SEASON_BASED = 'season'
    DATE_BASED = 'date'


@dataclass
class Diagnostic:
    """One naming-rule violation, reported against the file being checked"""
    path: str
    message: str

    def __str__(self) -> str:
        return f"\n{self.path}\n  {self.message}"


@dataclass
class ValidationOutcome:
    """Result of validating a single media file"""
    path: str
    valid: bool = True
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def fail(self, message: str) -> bool:
        """Record a violation and mark the outcome invalid. Always returns False."""
        self.diagnostics.append(Diagnostic(path=self.path, message=message))
        self.valid = False
        return False

    @property
    def messages(self) -> List[str]:
        return [d.message for d in self.diagnostics]


@dataclass
class SelfTestResult:
    """Per-folder tally from a self-test run"""
    folder: str
    total: int
    passed_as_expected: int
    unexpected: int
