"""Models for test entries loaded from JUnit reports."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, kw_only=True)
class TestEntry:
    """One test execution recorded in a JUnit report.

    ``classname`` is the script's directory relative to the tests root and
    ``name`` is the script's file name. ``duration`` keeps the raw ``time``
    attribute; normalization happens at submission time.
    """

    __test__ = False

    name: str
    classname: str
    outcome: Literal["passed", "failed", "skipped"]
    duration: str = "0"
    failure_message: str | None = None
    skip_message: str | None = None


@dataclass(frozen=True, kw_only=True)
class ClassifiedResults:
    """Report entries partitioned by outcome, each in document order."""

    passed: Sequence[TestEntry] = ()
    failed: Sequence[TestEntry] = ()
    skipped: Sequence[TestEntry] = ()

    def __iter__(self) -> Iterator[TestEntry]:
        """Iterate passed, then failed, then skipped entries."""
        yield from self.passed
        yield from self.failed
        yield from self.skipped

    def __len__(self) -> int:
        return len(self.passed) + len(self.failed) + len(self.skipped)
