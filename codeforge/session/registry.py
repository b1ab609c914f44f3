"""
Process-wide session registry and history log.

Each editor tab talks to its own Session, keyed by a client-chosen id.
Every session reports its finished runs to the one shared HistoryLog.
"""

import logging
from typing import Any

from codeforge import oracle_client
from codeforge.session.history import HistoryLog
from codeforge.session.state import Run, Session

logger = logging.getLogger("codeforge")

DEFAULT_SESSION_ID = "default"

_sessions: dict[str, Session] = {}
_history: HistoryLog | None = None


# Resolve the oracle at call time so a patched oracle_client is honoured.
async def _execute(**kwargs: Any) -> dict[str, Any]:
    return await oracle_client.execute(**kwargs)


async def _summarize(source_code: str, language_id: str) -> str:
    return await oracle_client.summarize(source_code, language_id)


def _record_finished(run: Run) -> None:
    get_history().schedule(run, _summarize)


def get_history() -> HistoryLog:
    """Return (or create) the shared history log."""
    global _history
    if _history is None:
        _history = HistoryLog()
    return _history


def _key(session_id: str | None) -> str:
    return (session_id or DEFAULT_SESSION_ID).strip() or DEFAULT_SESSION_ID


def get_session(session_id: str = DEFAULT_SESSION_ID) -> Session:
    """Return (or create) the session for `session_id`."""
    key = _key(session_id)
    session = _sessions.get(key)
    if session is None:
        logger.info("Opening session %s", key)
        session = Session(executor=_execute, on_finished=_record_finished)
        _sessions[key] = session
    return session


def find_session(session_id: str = DEFAULT_SESSION_ID) -> Session | None:
    """Return the open session for `session_id`, without creating one."""
    return _sessions.get(_key(session_id))


def close_session(session_id: str = DEFAULT_SESSION_ID) -> bool:
    """Abandon the session's run and forget the session.

    Returns False if no such session was open. A later get_session with the
    same id starts over from IDLE.
    """
    key = _key(session_id)
    session = _sessions.pop(key, None)
    if session is None:
        return False
    # Any reply still in flight for this session is dropped.
    session.reset()
    logger.info("Closed session %s", key)
    return True


def session_count() -> int:
    return len(_sessions)


def reset_registry() -> None:
    """Drop every session and the history log (useful for tests)."""
    global _history
    _sessions.clear()
    _history = None
