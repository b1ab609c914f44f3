"""
Environment-driven settings.

Values are read on every call rather than at import time so that a `.env`
file loaded by main.py, or a test patching os.environ, is always honoured.
"""

import logging
import os

logger = logging.getLogger("codeforge")

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_INPUT_MARKER = "input()"
DEFAULT_HISTORY_LIMIT = 50


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r, using %s", name, raw, default)
        return default
    return value if value > 0 else default


def api_key() -> str:
    """Return the Gemini API key, or an empty string when none is set."""
    return (
        os.environ.get("GEMINI_API_KEY", "").strip()
        or os.environ.get("GOOGLE_API_KEY", "").strip()
    )


def model_name() -> str:
    return os.environ.get("CODEFORGE_MODEL", "").strip() or DEFAULT_MODEL


def request_timeout() -> float:
    """Transport timeout for a single oracle request, in seconds."""
    return _float_env("CODEFORGE_TIMEOUT_SECONDS", 60.0)


def summary_timeout() -> float:
    return _float_env("CODEFORGE_SUMMARY_TIMEOUT", 15.0)


def history_limit() -> int:
    return _int_env("CODEFORGE_HISTORY_LIMIT", DEFAULT_HISTORY_LIMIT)


def input_marker() -> str:
    # Not stripped: a marker may legitimately carry surrounding whitespace.
    return os.environ.get("CODEFORGE_INPUT_MARKER") or DEFAULT_INPUT_MARKER
