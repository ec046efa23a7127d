"""End-to-end tests importing a JUnit report into TestRail."""

from collections.abc import Callable
from pathlib import Path

import pytest
from aioresponses import aioresponses as aioresponses_cls
from pydantic import SecretStr

from testrail_import.cli import run
from testrail_import.client import api_url
from testrail_import.config import TestRailConfig
from testrail_import.errors import CaseIdNotFoundError

BASE_URL = "http://testrail.test/index.php"

MIXED_REPORT = """<?xml version="1.0" encoding="UTF-8"?>
<testsuites>
  <testsuite name="acceptance">
    <testcase classname="tests/setup" name="install.rb" time="12.5"/>
    <testcase classname="tests/setup" name="configure.rb" time="3.2"/>
    <testcase classname="tests/agent" name="run.rb" time="0.4"/>
    <testcase classname="tests/agent" name="broken.rb" time="7.0">
      <failure message="assertion failed"/>
    </testcase>
    <testcase classname="tests/agent" name="windows_only.rb" time="0.0">
      <skip/>
      <system-out>Skipped: requires windows</system-out>
    </testcase>
  </testsuite>
</testsuites>
"""


def sent_json(aioresponses: aioresponses_cls) -> list[object]:
    """Return the JSON bodies of all recorded requests."""
    return [
        call.kwargs["json"]
        for calls in aioresponses.requests.values()
        for call in calls
    ]


@pytest.fixture
def config() -> TestRailConfig:
    """Create test configuration."""
    return TestRailConfig(url=BASE_URL, username="qa", password=SecretStr("pw"))


async def test_single_passing_entry(
    config: TestRailConfig,
    junit_file: Path,
    write_script: Callable[..., Path],
    aioresponses: aioresponses_cls,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Posts a passed result with the minimum elapsed time."""
    junit_file.write_text(
        '<testsuite><testcase classname="foo/bar" name="test_baz.rb" time="0.0"/>'
        "</testsuite>"
    )
    write_script("foo/bar", "test_baz.rb", "test_name 'PUPP-1234 - baz (C5678)'\n")
    aioresponses.post(str(api_url(BASE_URL, "add_result_for_case/42/5678")), payload={})

    exit_code = await run("42", junit_file, config)

    assert exit_code == 0
    assert sent_json(aioresponses) == [{"status_id": 1, "elapsed": "1s"}]
    out = capsys.readouterr().out
    assert "1 Passing" in out
    assert "Setting result for passing test case: 5678" in out
    assert "problems processing" not in out


async def test_rejected_result_does_not_block_batch(
    config: TestRailConfig,
    junit_file: Path,
    write_script: Callable[..., Path],
    aioresponses: aioresponses_cls,
    capsys: pytest.CaptureFixture[str],
) -> None:
    """Submits every entry and reports only the rejected one."""
    junit_file.write_text(MIXED_REPORT)
    write_script("tests/setup", "install.rb", "test_name 'PA-1 install (C1)'\n")
    write_script("tests/setup", "configure.rb", "test_name 'PA-2 configure (C2)'\n")
    write_script("tests/agent", "run.rb", "test_name 'PA-3 run (C3)'\n")
    write_script("tests/agent", "broken.rb", "test_name 'PA-4 broken (C4)'\n")
    write_script("tests/agent", "windows_only.rb", "test_name 'PA-5 win (C5)'\n")

    for case_id, status in [(1, 200), (2, 200), (3, 200), (4, 400), (5, 200)]:
        aioresponses.post(
            str(api_url(BASE_URL, f"add_result_for_case/7/{case_id}")),
            status=status,
            payload={"error": "Field :case_id is not a valid test case."}
            if status == 400
            else {},
        )

    exit_code = await run("7", junit_file, config)

    assert exit_code == 1
    assert sent_json(aioresponses) == [
        {"status_id": 1, "elapsed": "13s"},
        {"status_id": 1, "elapsed": "3s"},
        {"status_id": 1, "elapsed": "1s"},
        {
            "status_id": 5,
            "elapsed": "7s",
            "comment": "Failed with message:\nassertion failed",
        },
        {
            "status_id": 2,
            "elapsed": "1s",
            "comment": "Skipped with message:\nSkipped: requires windows",
        },
    ]
    out = capsys.readouterr().out
    assert "3 Passing\n1 Failing or Erroring\n1 Skipped" in out
    assert out.endswith(
        "Error: There were problems processing these test scripts:\n"
        "broken.rb:\n"
        "\tTestRail API returned HTTP 400 "
        "(Field :case_id is not a valid test case.)\n"
    )


async def test_script_without_case_id_aborts(
    config: TestRailConfig,
    junit_file: Path,
    write_script: Callable[..., Path],
    aioresponses: aioresponses_cls,
) -> None:
    """Stops the import when a test script has no case ID."""
    junit_file.write_text(
        "<testsuite>"
        '<testcase classname="t" name="untracked.rb" time="1"/>'
        '<testcase classname="t" name="tracked.rb" time="1"/>'
        "</testsuite>"
    )
    write_script("t", "untracked.rb", "test_name 'no ticket here'\n")
    write_script("t", "tracked.rb", "test_name 'PA-9 tracked (C9)'\n")

    with pytest.raises(CaseIdNotFoundError):
        await run("7", junit_file, config)

    assert sent_json(aioresponses) == []


async def test_tests_root_override(
    config: TestRailConfig,
    tmp_path: Path,
    aioresponses: aioresponses_cls,
) -> None:
    """Resolves scripts relative to an explicit tests root."""
    junit_file = tmp_path / "report.xml"
    junit_file.write_text(
        '<testsuite><testcase classname="acceptance" name="a.rb" time="2"/>'
        "</testsuite>"
    )
    script_dir = tmp_path / "suite" / "acceptance"
    script_dir.mkdir(parents=True)
    (script_dir / "a.rb").write_text("test_name 'QA-3 a (C33)'\n")
    aioresponses.post(str(api_url(BASE_URL, "add_result_for_case/7/33")), payload={})

    exit_code = await run("7", junit_file, config, tests_root=tmp_path / "suite")

    assert exit_code == 0
    assert sent_json(aioresponses) == [{"status_id": 1, "elapsed": "2s"}]
