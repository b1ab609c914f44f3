"""
Singleton wrapper around the google-genai client.

Every capability the editor offers (running code, naming a snippet,
generating code, completions, error detection) is a single Gemini call
made through this module. Calls ask for JSON matching a pydantic schema;
replies that ignore the schema are passed on as raw text so the callers'
fallback heuristics can still make sense of them.

Any failure of the underlying client surfaces as OracleError with a
human-readable message.
"""

import asyncio
import json
import logging
from typing import Any

import google.genai as genai
import httpx
from google.genai import errors, types
from pydantic import BaseModel

from codeforge import config, prompts

logger = logging.getLogger("codeforge")

_client: genai.Client | None = None


class OracleError(RuntimeError):
    """The oracle could not be reached or refused the request."""


def get_client() -> genai.Client:
    """Return (or create) the singleton Gemini client."""
    global _client
    if _client is not None:
        return _client

    key = config.api_key()
    if not key:
        raise OracleError("Set GEMINI_API_KEY (or GOOGLE_API_KEY) to enable the code oracle")

    timeout_ms = int(config.request_timeout() * 1000)
    logger.info("Creating Gemini client (model %s, timeout %sms)", config.model_name(), timeout_ms)
    _client = genai.Client(api_key=key, http_options=types.HttpOptions(timeout=timeout_ms))
    return _client


def reset_client() -> None:
    """Reset the singleton (useful for tests)."""
    global _client
    _client = None


def _user_turn(text: str) -> dict[str, Any]:
    return {"role": "user", "parts": [{"text": text}]}


def _model_turn(text: str) -> dict[str, Any]:
    return {"role": "model", "parts": [{"text": text}]}


def _loads_lenient(text: str) -> Any:
    """Parse JSON that may be wrapped in a markdown fence. Returns None if it isn't JSON."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        return None


async def _generate(
    contents: list[dict[str, Any]],
    schema: type[BaseModel],
    system_instruction: str | None = None,
) -> tuple[dict[str, Any] | None, str]:
    """Run one Gemini call. Returns (structured fields or None, raw reply text)."""
    client = get_client()
    generation_config = types.GenerateContentConfig(
        system_instruction=system_instruction,
        response_mime_type="application/json",
        response_schema=schema,
    )
    try:
        response = await client.aio.models.generate_content(
            model=config.model_name(),
            contents=contents,
            config=generation_config,
        )
    except errors.APIError as e:
        raise OracleError(f"Oracle request failed: {e}") from e
    except (httpx.HTTPError, TimeoutError, asyncio.TimeoutError) as e:
        raise OracleError(f"Oracle unreachable: {e}") from e

    text = response.text or ""
    parsed = response.parsed
    if isinstance(parsed, BaseModel):
        return parsed.model_dump(), text

    data = _loads_lenient(text) if text else None
    if isinstance(data, dict):
        return data, text

    logger.warning("Oracle reply did not match %s schema", schema.__name__)
    return None, text


async def execute(
    source_code: str,
    language_id: str,
    stdin_line: str | None = None,
    transcript: list[Any] | None = None,
) -> dict[str, Any]:
    """Simulate one turn of running `source_code`.

    A fresh run sends the code alone. A resumed run replays the prior
    transcript (Gemini conversation turns) and adds the line the user
    typed. The reply carries the updated transcript for the next turn.
    """
    contents = list(transcript or [])
    if not contents:
        contents.append(_user_turn(prompts.EXECUTION_FRESH.format(language=language_id, code=source_code)))
    if stdin_line is not None:
        contents.append(_user_turn(prompts.EXECUTION_RESUME.format(stdin=stdin_line)))

    system = prompts.EXECUTION_SYSTEM.format(marker=config.input_marker())
    data, text = await _generate(contents, prompts.ExecutionReply, system_instruction=system)

    if data is None:
        # Unstructured reply: hand the raw text to the decoder's marker scan.
        reply: dict[str, Any] = {"output": text} if text else {}
    else:
        reply = dict(data)
    reply["transcript"] = contents + [_model_turn(text)]
    return reply


async def summarize(source_code: str, language_id: str) -> str:
    """Return a short human-readable name for a snippet."""
    prompt = prompts.SUMMARY.format(language=language_id, code=source_code)
    data, _ = await _generate([_user_turn(prompt)], prompts.SummaryReply)
    name = (data or {}).get("name")
    if not isinstance(name, str) or not name.strip():
        raise OracleError("Summarizer returned no name")
    return name.strip()


async def generate(prompt: str, language_id: str) -> dict[str, Any]:
    """Generate a program, or answer a question, from a natural-language prompt."""
    text_prompt = prompts.GENERATION.format(language=language_id, prompt=prompt)
    data, text = await _generate([_user_turn(text_prompt)], prompts.GenerationReply)
    if data is None:
        return {"content": text, "kind": None}
    content = data.get("content")
    return {
        "content": content if isinstance(content, str) else "",
        "kind": data.get("kind"),
    }


async def complete(code_snippet: str, language_id: str) -> list[str]:
    prompt = prompts.COMPLETION.format(language=language_id, code=code_snippet)
    data, _ = await _generate([_user_turn(prompt)], prompts.CompletionReply)
    suggestions = (data or {}).get("completionSuggestions") or []
    return [s for s in suggestions if isinstance(s, str)]


async def detect_errors(source_code: str, language_id: str) -> dict[str, Any]:
    prompt = prompts.ERROR_DETECTION.format(language=language_id, code=source_code)
    data, _ = await _generate([_user_turn(prompt)], prompts.ErrorReport)
    data = data or {}
    errors_found = data.get("errors") or []
    highlighted = data.get("highlightedCode")
    return {
        "errors": [e for e in errors_found if isinstance(e, str)],
        "highlightedCode": highlighted if isinstance(highlighted, str) else source_code,
    }
