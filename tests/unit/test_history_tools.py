"""Unit tests for history and language tools."""

from unittest.mock import AsyncMock

from codeforge.session import registry
from codeforge.session.state import Run, RunStatus


async def _seed(*labels):
    log = registry.get_history()
    for i, label in enumerate(labels):
        run = Run(run_id=f"r{i}", source_code=f"print({i})", language_id="python", status=RunStatus.COMPLETE)
        await log.record(run, AsyncMock(return_value=label))
    return log


# --- list_history ---


async def test_list_history_newest_first():
    await _seed("First", "Second", "Third")

    from codeforge.tools.history import handle_list_history

    result = handle_list_history()

    assert result["success"] is True
    assert result["data"]["count"] == 3
    assert result["data"]["capacity"] == 50
    assert [e["label"] for e in result["data"]["entries"]] == ["Third", "Second", "First"]
    assert result["data"]["entries"][0]["code"] == "print(2)"


async def test_list_history_respects_limit():
    await _seed("First", "Second", "Third")

    from codeforge.tools.history import handle_list_history

    result = handle_list_history(limit=2)

    assert result["data"]["count"] == 2


def test_list_history_empty():
    from codeforge.tools.history import handle_list_history

    result = handle_list_history()

    assert result["data"]["entries"] == []


# --- restore_history ---


async def test_restore_history_returns_code_and_language():
    log = await _seed("Print zero")
    entry_id = log.entries()[0].entry_id

    from codeforge.tools.history import handle_restore_history

    result = handle_restore_history(entry_id)

    assert result["success"] is True
    assert result["data"] == {"code": "print(0)", "language": "python"}


def test_restore_history_unknown_id():
    from codeforge.tools.history import handle_restore_history

    result = handle_restore_history("nope")

    assert result["success"] is False
    assert result["errorCode"] == "NOT_FOUND"


# --- clear_history ---


async def test_clear_history():
    await _seed("First", "Second")

    from codeforge.tools.history import handle_clear_history

    result = handle_clear_history()

    assert result["data"] == {"cleared": True, "removed": 2}
    assert len(registry.get_history()) == 0


# --- list_languages ---


def test_list_languages_catalog():
    from codeforge.tools.history import handle_list_languages

    result = handle_list_languages()

    languages = result["data"]["languages"]
    assert result["data"]["count"] == 9
    assert [lang["id"] for lang in languages][:2] == ["javascript", "python"]
    python = languages[1]
    assert python == {
        "id": "python",
        "label": "Python",
        "extension": "py",
        "defaultFilename": "codeforge_file.py",
    }
    assert {"id": "csharp", "label": "C#", "extension": "cs", "defaultFilename": "codeforge_file.cs"} in languages
