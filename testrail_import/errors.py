"""Errors raised while importing results.

Everything here is fatal for a run. Rejections from the TestRail API are
reported through ``TestRailAPIError`` instead and are isolated per entry.
"""

from pathlib import Path


class ResultImportError(Exception):
    """Base class for fatal import errors."""


class ConfigError(ResultImportError):
    """Raised when credentials or settings cannot be loaded."""


class ReportError(ResultImportError):
    """Raised when the JUnit report cannot be read or parsed."""


class StructuralError(ResultImportError):
    """Raised when a test script does not match its report entry.

    This means the test harness and its reporting output disagree, so the
    whole batch is aborted rather than skipping the entry.
    """


class ScriptNotFoundError(StructuralError):
    """Raised when the test script for an entry cannot be opened."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Could not open test script: {path}")
        self.path = path


class CaseIdNotFoundError(StructuralError):
    """Raised when a test script contains no TestRail case ID."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"No TestRail case ID found in test script: {path}")
        self.path = path
