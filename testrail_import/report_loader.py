"""Loading of JUnit XML reports into classified test entries."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from testrail_import.errors import ReportError
from testrail_import.models.entry import ClassifiedResults, TestEntry

log = logging.getLogger(__name__)


def load_junit_results(junit_file: Path) -> ClassifiedResults:
    """Load a JUnit report from disk and classify its entries.

    Raises:
        ReportError: If the file cannot be read or is not valid XML

    """
    try:
        content = junit_file.read_bytes()
    except OSError as e:
        raise ReportError(f"Could not read JUnit report {junit_file}: {e}") from e

    return parse_junit_results(content)


def parse_junit_results(content: str | bytes) -> ClassifiedResults:
    """Classify every ``testcase`` element of a JUnit report.

    An entry with a ``failure`` child failed, one with a ``skip`` child was
    skipped, anything else passed. Each sequence keeps document order.
    """
    try:
        root = ET.fromstring(content)
    except ET.ParseError as e:
        raise ReportError(f"Invalid JUnit report: {e}") from e

    passed: list[TestEntry] = []
    failed: list[TestEntry] = []
    skipped: list[TestEntry] = []

    for testcase in root.iter("testcase"):
        entry = parse_testcase(testcase)
        match entry.outcome:
            case "failed":
                failed.append(entry)
            case "skipped":
                skipped.append(entry)
            case "passed":
                passed.append(entry)

    log.debug(
        "Parsed JUnit report: passed=%d failed=%d skipped=%d",
        len(passed),
        len(failed),
        len(skipped),
    )
    return ClassifiedResults(
        passed=tuple(passed), failed=tuple(failed), skipped=tuple(skipped)
    )


def parse_testcase(testcase: ET.Element) -> TestEntry:
    """Build a TestEntry from a single ``testcase`` element."""
    name = testcase.get("name", "")
    classname = testcase.get("classname", "")
    duration = testcase.get("time", "0")

    if (failure := testcase.find("failure")) is not None:
        return TestEntry(
            name=name,
            classname=classname,
            outcome="failed",
            duration=duration,
            failure_message=failure.get("message", ""),
        )

    if testcase.find("skip") is not None:
        system_out = testcase.find("system-out")
        return TestEntry(
            name=name,
            classname=classname,
            outcome="skipped",
            duration=duration,
            skip_message=(system_out.text or "") if system_out is not None else "",
        )

    return TestEntry(
        name=name, classname=classname, outcome="passed", duration=duration
    )
