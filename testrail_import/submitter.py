"""Submission of individual test results to TestRail."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from testrail_import.config import StatusCodes
from testrail_import.elapsed import make_testrail_time
from testrail_import.locator import CaseLocator, RegexCaseLocator, beaker_test_path
from testrail_import.models.entry import TestEntry
from testrail_import.models.result import ResultPayload

log = logging.getLogger(__name__)


class ResultsAPI(Protocol):
    """The part of the TestRail API results are submitted through."""

    async def add_result_for_case(
        self, run_id: str, case_id: str, payload: ResultPayload
    ) -> Any:
        """Add a result for a case in a run."""


def failure_comment(message: str) -> str:
    """Return the result comment for a failed test."""
    return f"Failed with message:\n{message}"


def skip_comment(message: str) -> str:
    """Return the result comment for a skipped test."""
    return f"Skipped with message:\n{message}"


@dataclass(frozen=True, kw_only=True)
class ResultSubmitter:
    """Posts one result per report entry to a TestRail test run.

    API errors are not handled here. Every call appends a new result in
    TestRail, so submitting the same entry twice records it twice.
    """

    api: ResultsAPI
    junit_file: Path
    run_id: str
    statuses: StatusCodes = field(default_factory=StatusCodes)
    locator: CaseLocator = field(default_factory=RegexCaseLocator)
    tests_root: Path | None = None

    async def submit(self, entry: TestEntry) -> str:
        """Submit an entry according to its outcome and return its case ID."""
        match entry.outcome:
            case "passed":
                return await self.add_pass(entry)
            case "failed":
                return await self.add_failure(entry)
            case "skipped":
                return await self.add_skip(entry)

    async def add_pass(self, entry: TestEntry) -> str:
        """Add a passed result."""
        case_id = self.resolve_case_id(entry)
        payload = ResultPayload(
            status_id=self.statuses.passed,
            elapsed=make_testrail_time(entry.duration),
        )

        print(f"\nSetting result for passing test case: {case_id}")
        return await self._post(case_id, payload)

    async def add_failure(self, entry: TestEntry) -> str:
        """Add a failed result commented with the failure message."""
        case_id = self.resolve_case_id(entry)
        payload = ResultPayload(
            status_id=self.statuses.failed,
            elapsed=make_testrail_time(entry.duration),
            comment=failure_comment(entry.failure_message or ""),
        )

        print(f"\nSetting result for failed test case: {case_id}")
        print(f"Adding comment:\n{payload.comment}")
        return await self._post(case_id, payload)

    async def add_skip(self, entry: TestEntry) -> str:
        """Add a blocked result commented with the skip output."""
        case_id = self.resolve_case_id(entry)
        payload = ResultPayload(
            status_id=self.statuses.blocked,
            elapsed=make_testrail_time(entry.duration),
            comment=skip_comment(entry.skip_message or ""),
        )

        print(f"\nSetting result for skipped test case: {case_id}")
        print(f"Adding comment:\n{payload.comment}")
        return await self._post(case_id, payload)

    def resolve_case_id(self, entry: TestEntry) -> str:
        """Return the case ID from the entry's test script.

        Raises:
            StructuralError: If the script is missing or has no case ID

        """
        return self.locator(beaker_test_path(self.junit_file, entry, self.tests_root))

    async def _post(self, case_id: str, payload: ResultPayload) -> str:
        log.debug(
            "Adding result: run_id=%s case_id=%s status_id=%d elapsed=%s",
            self.run_id,
            case_id,
            payload.status_id,
            payload.elapsed,
        )
        await self.api.add_result_for_case(self.run_id, case_id, payload)
        return case_id
