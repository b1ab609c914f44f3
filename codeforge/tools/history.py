"""History tools — list_history, restore_history, clear_history, list_languages."""

import logging
from typing import Any

from fastmcp import FastMCP

from codeforge.languages import LANGUAGES, default_filename
from codeforge.response import NOT_FOUND, error_response, success_response
from codeforge.session import registry

logger = logging.getLogger("codeforge")


def handle_list_history(limit: int = 50) -> dict[str, Any]:
    """List finished runs, newest first."""
    log = registry.get_history()
    entries = [entry.to_dict() for entry in log.entries(max(limit, 0))]
    return success_response({
        "entries": entries,
        "count": len(entries),
        "capacity": log.capacity,
    })


def handle_restore_history(entry_id: str) -> dict[str, Any]:
    """Return an entry's code and language so the client can run it again."""
    try:
        restored = registry.get_history().restore(entry_id)
    except KeyError:
        return error_response(f"No history entry with id '{entry_id}'", NOT_FOUND)
    return success_response({
        "code": restored["source_code"],
        "language": restored["language_id"],
    })


def handle_clear_history() -> dict[str, Any]:
    log = registry.get_history()
    removed = len(log)
    log.clear()
    logger.info("History: cleared %d entries", removed)
    return success_response({"cleared": True, "removed": removed})


def handle_list_languages() -> dict[str, Any]:
    languages = [
        {
            "id": lang.id,
            "label": lang.label,
            "extension": lang.extension,
            "defaultFilename": default_filename(lang),
        }
        for lang in LANGUAGES
    ]
    return success_response({"languages": languages, "count": len(languages)})


def register_history_tools(mcp: FastMCP) -> None:
    @mcp.tool()
    def list_history(limit: int = 50) -> dict[str, Any]:
        """List recently finished runs, newest first, each with a short label.

        Args:
            limit: Maximum number of entries to return (default: 50)
        """
        return handle_list_history(limit)

    @mcp.tool()
    def restore_history(entry_id: str) -> dict[str, Any]:
        """Get the code and language of a past run, to load back into the editor.

        Args:
            entry_id: The id of the history entry (from list_history)
        """
        return handle_restore_history(entry_id)

    @mcp.tool()
    def clear_history() -> dict[str, Any]:
        """Delete every history entry."""
        return handle_clear_history()

    @mcp.tool()
    def list_languages() -> dict[str, Any]:
        """List the supported languages with their file extensions."""
        return handle_list_languages()
