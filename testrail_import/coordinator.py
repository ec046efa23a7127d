"""Batch coordination of result submissions for a whole report."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from testrail_import.client import TestRailAPIError
from testrail_import.models.entry import ClassifiedResults, TestEntry
from testrail_import.models.result import SubmissionOutcome
from testrail_import.submitter import ResultSubmitter

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class BatchReport:
    """Outcomes of every submission in a batch, in processing order."""

    outcomes: Sequence[SubmissionOutcome]

    @property
    def bad_results(self) -> Mapping[str, str]:
        """Error messages of rejected submissions keyed by entry name."""
        return {
            outcome.name: outcome.error
            for outcome in self.outcomes
            if outcome.error is not None
        }

    @property
    def submitted(self) -> int:
        """Number of results TestRail accepted."""
        return sum(1 for outcome in self.outcomes if outcome.ok)


@dataclass(frozen=True, kw_only=True)
class BatchCoordinator:
    """Submits every entry of a report, one at a time.

    A rejected submission is recorded and the batch moves on. Structural
    errors from case ID resolution abort the batch.
    """

    submitter: ResultSubmitter

    async def run(self, results: ClassifiedResults) -> BatchReport:
        """Submit passed, then failed, then skipped entries."""
        log.info(
            "Submitting %d result(s) to run %s",
            len(results),
            self.submitter.run_id,
        )

        outcomes: list[SubmissionOutcome] = []
        for entry in results:
            outcomes.append(await self._submit_one(entry))

        report = BatchReport(outcomes=outcomes)
        log.info(
            "Submission completed: submitted=%d rejected=%d",
            report.submitted,
            len(report.bad_results),
        )
        return report

    async def _submit_one(self, entry: TestEntry) -> SubmissionOutcome:
        try:
            case_id = await self.submitter.submit(entry)
        except TestRailAPIError as e:
            log.warning("Result for %s rejected: %s", entry.name, e)
            return SubmissionOutcome(name=entry.name, error=str(e))
        return SubmissionOutcome(name=entry.name, case_id=case_id)


def report_bad_results(report: BatchReport) -> None:
    """Print the entries whose results could not be set, if any."""
    if not (bad_results := report.bad_results):
        return

    print("Error: There were problems processing these test scripts:")
    for test_script, error in bad_results.items():
        print(f"{test_script}:\n\t{error}")
