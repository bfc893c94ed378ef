"""Developer tasks powered by Invoke."""

from __future__ import annotations

import pathlib
import subprocess
from typing import Iterable

from invoke import task

ROOT = pathlib.Path(__file__).parent.resolve()
RESULTS_DIR = ROOT / "results"


def _run(command: Iterable[str] | str) -> None:
    if isinstance(command, str):
        cmd = command
    else:
        cmd = " ".join(command)
    subprocess.run(cmd, shell=True, check=True, cwd=ROOT)


def _ensure_results_dir() -> None:
    RESULTS_DIR.mkdir(exist_ok=True)


@task
def tests(_context):
    """Run the test suite."""
    _ensure_results_dir()
    _run(["uv", "run", "pytest", "tests/", "--junitxml=results/pytest.xml"])


@task
def unit(_context):
    """Run only the domain unit tests (quick feedback)."""
    _run(["uv", "run", "pytest", "tests/unit"])


@task
def serve(_context, transport="stdio"):
    """Start the element selection MCP server."""
    _run(["uv", "run", "aurora-engine", "--transport", transport])


@task
def build(_context):
    """Build distribution artifacts."""
    _run(["uv", "build"])
