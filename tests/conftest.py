"""Shared fixtures for importer tests."""

from collections.abc import Generator
from pathlib import Path
from typing import Protocol

import pytest
from aioresponses import aioresponses as aioresponses_cls


class WriteScriptFn(Protocol):
    """Protocol for test script creation function."""

    def __call__(self, classname: str, name: str, content: str) -> Path:
        """Create a test script and return its path."""


@pytest.fixture
def aioresponses() -> Generator[aioresponses_cls]:
    """Mock all aiohttp requests made during the test."""
    with aioresponses_cls() as mocked:
        yield mocked


@pytest.fixture
def junit_file(tmp_path: Path) -> Path:
    """Path of a JUnit report two levels below the tests root."""
    report_dir = tmp_path / "junit" / "latest"
    report_dir.mkdir(parents=True)
    return report_dir / "beaker_junit.xml"


@pytest.fixture
def write_script(tmp_path: Path) -> WriteScriptFn:
    """Return a function to create test scripts under the tests root."""

    def _write(classname: str, name: str, content: str) -> Path:
        script_dir = tmp_path / classname
        script_dir.mkdir(parents=True, exist_ok=True)
        script = script_dir / name
        script.write_text(content)
        return script

    return _write
