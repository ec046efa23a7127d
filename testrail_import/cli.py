"""CLI entry point for importing JUnit results into TestRail."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from testrail_import.client import TestRailClient
from testrail_import.config import (
    DEFAULT_CREDENTIALS_FILE,
    StatusCodes,
    TestRailConfig,
    load_credentials,
)
from testrail_import.coordinator import BatchCoordinator, report_bad_results
from testrail_import.errors import ResultImportError
from testrail_import.models.entry import ClassifiedResults
from testrail_import.report_loader import load_junit_results
from testrail_import.submitter import ResultSubmitter


def print_run_results(results: ClassifiedResults) -> None:
    """Print how many entries of each outcome the report holds."""
    print("Run results:")
    print(f"{len(results.passed)} Passing")
    print(f"{len(results.failed)} Failing or Erroring")
    print(f"{len(results.skipped)} Skipped")


async def run(
    testrun_id: str,
    junit_file: Path,
    config: TestRailConfig,
    tests_root: Path | None = None,
) -> int:
    """Import the report's results into a test run and return exit code."""
    log = logging.getLogger("testrail_import")

    log.info("Loading JUnit report: %s", junit_file)
    results = load_junit_results(junit_file)
    print_run_results(results)

    async with TestRailClient.from_config(config) as client:
        submitter = ResultSubmitter(
            api=client,
            junit_file=junit_file,
            run_id=testrun_id,
            statuses=StatusCodes(),
            tests_root=tests_root,
        )
        report = await BatchCoordinator(submitter=submitter).run(results)

    report_bad_results(report)

    return 1 if report.bad_results else 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Add results of a finished beaker run to a TestRail test run"
    )
    parser.add_argument(
        "-t",
        "--testrun-id",
        required=True,
        help="The TestRail test run ID",
    )
    parser.add_argument(
        "-j",
        "--junit-file",
        "--junit-folder",
        dest="junit_file",
        type=Path,
        required=True,
        help="Beaker JUnit XML file",
    )
    parser.add_argument(
        "-c",
        "--credentials",
        type=Path,
        default=DEFAULT_CREDENTIALS_FILE,
        help="YAML file with testrail_username and testrail_password",
    )
    parser.add_argument(
        "--testrail-url",
        default=None,
        help="TestRail entry point URL (overrides the credentials file)",
    )
    parser.add_argument(
        "--tests-root",
        type=Path,
        default=None,
        help="Directory test classnames are relative to "
        "(default: two levels above the JUnit file)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    log = logging.getLogger("testrail_import")

    try:
        config = load_credentials(args.credentials, url=args.testrail_url)
        exit_code = asyncio.run(
            run(
                testrun_id=args.testrun_id,
                junit_file=args.junit_file,
                config=config,
                tests_root=args.tests_root,
            )
        )
    except ResultImportError as e:
        log.error("Import aborted: %s", e)
        print(f"Error: {e}")
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
