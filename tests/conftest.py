"""Shared test fixtures for CodeForge MCP tests."""

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

# Ensure codeforge is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from codeforge import oracle_client  # noqa: E402
from codeforge.session import registry  # noqa: E402


@pytest.fixture(autouse=True)
def clean_state(monkeypatch):
    """Fresh sessions, history and oracle client, with default settings."""
    for name in (
        "CODEFORGE_INPUT_MARKER",
        "CODEFORGE_HISTORY_LIMIT",
        "CODEFORGE_SUMMARY_TIMEOUT",
        "CODEFORGE_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)
    registry.reset_registry()
    oracle_client.reset_client()
    yield
    registry.reset_registry()
    oracle_client.reset_client()


@pytest.fixture
def mock_oracle():
    """Replace every oracle capability with an AsyncMock.

    Patches the module functions so the session registry and the tool
    handlers use the mocks instead of calling Gemini.
    """
    mocks = {
        "execute": AsyncMock(return_value={"output": ""}),
        "summarize": AsyncMock(return_value="Test snippet"),
        "generate": AsyncMock(return_value={"content": "", "kind": None}),
        "complete": AsyncMock(return_value=[]),
        "detect_errors": AsyncMock(return_value={"errors": [], "highlightedCode": ""}),
    }
    with patch.multiple("codeforge.oracle_client", **mocks):
        yield SimpleNamespace(**mocks)
