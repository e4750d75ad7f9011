"""
Pytest configuration and shared fixtures.
"""

import pytest
from pathlib import Path
from typing import Callable, List

from zonesweep.logger import get_logger, reset_logger

ZONE_STREAM = "[ZoneTransfer]\r\nZoneId=3\r\nHostUrl=https://example.com/report.pdf\r\n"


@pytest.fixture(autouse=True)
def quiet_logger():
    """Fresh global logger per test with no console output."""
    reset_logger()
    logger = get_logger(enable_console=False)
    yield logger
    reset_logger()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's ZONESWEEP_* variables out of tests."""
    for var in ("ZONESWEEP_ROOT", "ZONESWEEP_LOG_LEVEL", "ZONESWEEP_LOG_DIR", "ZONESWEEP_EXCLUDE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def zone_stream() -> str:
    """Typical content of an extracted Zone.Identifier stream."""
    return ZONE_STREAM


@pytest.fixture
def sweep_tree(tmp_path) -> Path:
    """
    Directory tree with a mix of artifacts and ordinary files:

        a.txt                              plain text
        a.txt:Zone.Identifier              name match (also content match)
        b.log                              marker, excluded by *.log
        docs/notes.md                      content match
        docs/report.pdf:Zone.Identifier    name match, empty
        image.bin                          binary containing the marker
        .git/config                        marker, excluded by .git*
        node_modules/pkg/index.js          marker, excluded by *node_modules*
    """
    root = tmp_path / "tree"
    (root / "docs").mkdir(parents=True)
    (root / ".git").mkdir()
    (root / "node_modules" / "pkg").mkdir(parents=True)

    (root / "a.txt").write_text("hello\n")
    (root / "a.txt:Zone.Identifier").write_text(ZONE_STREAM)
    (root / "b.log").write_text(ZONE_STREAM)
    (root / "docs" / "notes.md").write_text("copied header:\n" + ZONE_STREAM)
    (root / "docs" / "report.pdf:Zone.Identifier").write_text("")
    (root / "image.bin").write_bytes(b"\x89PNG\x00\x00" + ZONE_STREAM.encode())
    (root / ".git" / "config").write_text(ZONE_STREAM)
    (root / "node_modules" / "pkg" / "index.js").write_text(ZONE_STREAM)
    return root


@pytest.fixture
def answers() -> Callable[..., Callable[[str], bool]]:
    """Build a scripted confirm callback that records the prompts it saw."""

    def factory(*replies: bool):
        queue: List[bool] = list(replies)

        def confirm_fn(prompt: str) -> bool:
            confirm_fn.prompts.append(prompt)
            return queue.pop(0) if queue else False

        confirm_fn.prompts = []
        return confirm_fn

    return factory
