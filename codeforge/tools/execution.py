"""Execution tools — run_code, supply_input, reset_session, get_session, close_session."""

import logging
from typing import Any

from fastmcp import FastMCP

from codeforge.languages import get_language, unknown_language_message
from codeforge.response import (
    INVALID_STATE,
    ORACLE_ERROR,
    UNKNOWN_ERROR,
    VALIDATION_ERROR,
    error_response,
    success_response,
)
from codeforge.session import registry
from codeforge.session.state import Run, RunStatus

logger = logging.getLogger("codeforge")


def _run_result(run: Run) -> dict[str, Any]:
    if run.status is RunStatus.FAILED:
        return error_response(f"Could not run code. {run.error}", ORACLE_ERROR, run.to_dict())
    return success_response(run.to_dict())


async def handle_run_code(
    code: str,
    language: str,
    session_id: str = registry.DEFAULT_SESSION_ID,
) -> dict[str, Any]:
    """Start a fresh run, discarding any run in flight for the session."""
    lang = get_language(language)
    if lang is None:
        return error_response(unknown_language_message(language), VALIDATION_ERROR)
    try:
        session = registry.get_session(session_id)
        run = await session.start(code, lang.id)
        return _run_result(run)
    except Exception as e:
        logger.error("Error running code: %s", e)
        return error_response(str(e), UNKNOWN_ERROR)


async def handle_supply_input(
    line: str,
    session_id: str = registry.DEFAULT_SESSION_ID,
) -> dict[str, Any]:
    """Feed one line to a run paused on a blocking read."""
    try:
        session = registry.find_session(session_id)
        if session is None:
            return error_response("No run is waiting for input", INVALID_STATE, Run().to_dict())
        accepted = await session.supply_input(line)
        if not accepted:
            return error_response(
                "No run is waiting for input",
                INVALID_STATE,
                session.run.to_dict(),
            )
        return _run_result(session.run)
    except Exception as e:
        logger.error("Error supplying input: %s", e)
        return error_response(str(e), UNKNOWN_ERROR)


def handle_reset_session(session_id: str = registry.DEFAULT_SESSION_ID) -> dict[str, Any]:
    session = registry.find_session(session_id)
    if session is None:
        return success_response(Run().to_dict())
    session.reset()
    return success_response(session.run.to_dict())


def handle_get_session(session_id: str = registry.DEFAULT_SESSION_ID) -> dict[str, Any]:
    session = registry.find_session(session_id)
    run = session.run if session is not None else Run()
    return success_response(run.to_dict())


def handle_close_session(session_id: str = registry.DEFAULT_SESSION_ID) -> dict[str, Any]:
    """Abandon a console's run and release it."""
    closed = registry.close_session(session_id)
    return success_response({"closed": closed, "openSessions": registry.session_count()})


def register_execution_tools(mcp: FastMCP) -> None:
    @mcp.tool()
    async def run_code(code: str, language: str, session_id: str = registry.DEFAULT_SESSION_ID) -> dict[str, Any]:
        """Run a code snippet in the simulated console.

        If the program pauses to read input, the result has awaitingInput
        set; answer it with supply_input.

        Args:
            code: Source code to run
            language: Language id (see list_languages), e.g. python
            session_id: Console to run in; one run per console (default: "default")
        """
        return await handle_run_code(code, language, session_id)

    @mcp.tool()
    async def supply_input(line: str, session_id: str = registry.DEFAULT_SESSION_ID) -> dict[str, Any]:
        """Type one line of input into a program waiting on a read.

        Args:
            line: The text the user entered
            session_id: Console the run belongs to (default: "default")
        """
        return await handle_supply_input(line, session_id)

    @mcp.tool()
    def reset_session(session_id: str = registry.DEFAULT_SESSION_ID) -> dict[str, Any]:
        """Clear the console and abandon any run in progress.

        Args:
            session_id: Console to clear (default: "default")
        """
        return handle_reset_session(session_id)

    @mcp.tool()
    def get_session(session_id: str = registry.DEFAULT_SESSION_ID) -> dict[str, Any]:
        """Show the current run of a console: status, output and image.

        Args:
            session_id: Console to inspect (default: "default")
        """
        return handle_get_session(session_id)

    @mcp.tool()
    def close_session(session_id: str = registry.DEFAULT_SESSION_ID) -> dict[str, Any]:
        """Close a console when its editor tab goes away.

        Any run in progress is abandoned. Using the id again opens a fresh
        console.

        Args:
            session_id: Console to close (default: "default")
        """
        return handle_close_session(session_id)
