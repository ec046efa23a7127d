"""Resolution of TestRail case IDs from test scripts."""

import logging
import re
from pathlib import Path
from typing import Protocol

from testrail_import.errors import CaseIdNotFoundError, ScriptNotFoundError
from testrail_import.models.entry import TestEntry

log = logging.getLogger(__name__)

# A ticket reference such as "PUPP-1234", then a case ID such as "C5678"
TESTCASE_ID_REGEX = re.compile(r".*(?P<jira_ticket>\w+-\d+).*[cC](?P<case_id>\d+)")


class CaseLocator(Protocol):
    """Extracts a TestRail case ID from a test script."""

    def __call__(self, script_path: Path) -> str:
        """Return the case ID for the script.

        Raises:
            StructuralError: If the script is missing or carries no case ID

        """


class RegexCaseLocator:
    """Locates the case ID on the first script line matching a pattern."""

    def __init__(self, pattern: re.Pattern[str] = TESTCASE_ID_REGEX) -> None:
        self.pattern = pattern

    def __call__(self, script_path: Path) -> str:
        try:
            with script_path.open(encoding="utf-8", errors="replace") as script:
                for line in script:
                    if (match := self.pattern.match(line)) is not None:
                        case_id = match.group("case_id")
                        log.debug("Found case ID %s in %s", case_id, script_path)
                        return case_id
        except OSError as e:
            raise ScriptNotFoundError(script_path) from e

        raise CaseIdNotFoundError(script_path)


def beaker_test_path(
    junit_file: Path, entry: TestEntry, tests_root: Path | None = None
) -> Path:
    """Return the path of the test script an entry was reported for.

    Unless ``tests_root`` is given, the report is assumed to live two
    directories below the root that ``classname`` is relative to.
    """
    if tests_root is None:
        tests_root = junit_file.parent / ".." / ".."
    return tests_root / entry.classname / entry.name
