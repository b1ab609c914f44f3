"""Assistant tools — generate_code, complete_code, detect_errors.

Single-shot oracle calls with no session state.
"""

import logging
from typing import Any

from fastmcp import FastMCP

from codeforge import oracle_client
from codeforge.classify import CODE, resolve_kind, strip_fences
from codeforge.languages import get_language, unknown_language_message
from codeforge.response import (
    ORACLE_ERROR,
    UNKNOWN_ERROR,
    VALIDATION_ERROR,
    error_response,
    success_response,
)

logger = logging.getLogger("codeforge")


async def handle_generate_code(prompt: str, language: str) -> dict[str, Any]:
    """Generate a program, or answer a question, for the editor's language."""
    if not prompt or not prompt.strip():
        return error_response("Prompt must not be empty", VALIDATION_ERROR)
    lang = get_language(language)
    if lang is None:
        return error_response(unknown_language_message(language), VALIDATION_ERROR)
    try:
        result = await oracle_client.generate(prompt.strip(), lang.id)
        content = result.get("content") or ""
        kind = resolve_kind(content, result.get("kind"))
        if kind == CODE:
            content = strip_fences(content)
        return success_response({
            "content": content,
            "kind": kind,
            "language": lang.id,
        })
    except oracle_client.OracleError as e:
        logger.error("Code generation failed: %s", e)
        return error_response(f"Could not generate code. {e}", ORACLE_ERROR)
    except Exception as e:
        logger.error("Error generating code: %s", e)
        return error_response(str(e), UNKNOWN_ERROR)


async def handle_complete_code(code_snippet: str, language: str) -> dict[str, Any]:
    lang = get_language(language)
    if lang is None:
        return error_response(unknown_language_message(language), VALIDATION_ERROR)
    if not code_snippet.strip():
        return success_response({"suggestions": [], "count": 0})
    try:
        suggestions = await oracle_client.complete(code_snippet, lang.id)
        return success_response({"suggestions": suggestions, "count": len(suggestions)})
    except oracle_client.OracleError as e:
        logger.error("Code completion failed: %s", e)
        return error_response(str(e), ORACLE_ERROR)
    except Exception as e:
        logger.error("Error completing code: %s", e)
        return error_response(str(e), UNKNOWN_ERROR)


async def handle_detect_errors(code: str, language: str) -> dict[str, Any]:
    lang = get_language(language)
    if lang is None:
        return error_response(unknown_language_message(language), VALIDATION_ERROR)
    if not code.strip():
        return success_response({"errors": [], "highlightedCode": code, "count": 0})
    try:
        report = await oracle_client.detect_errors(code, lang.id)
        return success_response({**report, "count": len(report["errors"])})
    except oracle_client.OracleError as e:
        logger.error("Error detection failed: %s", e)
        return error_response(str(e), ORACLE_ERROR)
    except Exception as e:
        logger.error("Error detecting errors: %s", e)
        return error_response(str(e), UNKNOWN_ERROR)


def register_assistant_tools(mcp: FastMCP) -> None:
    @mcp.tool()
    async def generate_code(prompt: str, language: str) -> dict[str, Any]:
        """Generate code or answer a coding question.

        The result's kind is "code" for a program the user may accept into
        the editor verbatim, or "text" for a prose answer.

        Args:
            prompt: What to build, or the question to answer
            language: Language id of the editor (see list_languages)
        """
        return await handle_generate_code(prompt, language)

    @mcp.tool()
    async def complete_code(code_snippet: str, language: str) -> dict[str, Any]:
        """Suggest completions for the code being typed.

        Args:
            code_snippet: The code typed so far
            language: Language id (see list_languages)
        """
        return await handle_complete_code(code_snippet, language)

    @mcp.tool()
    async def detect_errors(code: str, language: str) -> dict[str, Any]:
        """Find errors in a snippet and return it with the error locations marked.

        Args:
            code: Source code to check
            language: Language id (see list_languages)
        """
        return await handle_detect_errors(code, language)
