"""Test configuration shared by the bingo board suites."""

import os
import sys
import tempfile
from pathlib import Path

# Keep the module-level state manager away from the real state file.
os.environ.setdefault(
    "BINGO_STATE_PATH", str(Path(tempfile.mkdtemp(prefix="bingo-tests-")) / "state.json")
)
sys.path.append(str(Path(__file__).resolve().parents[1]))

import pytest


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO tests to run on asyncio only (Telegram handlers use asyncio)."""

    return "asyncio"
