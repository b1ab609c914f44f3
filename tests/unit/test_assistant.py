"""Unit tests for assistant tools."""

from codeforge.oracle_client import OracleError


# --- generate_code ---


async def test_generate_code_uses_declared_kind(mock_oracle):
    mock_oracle.generate.return_value = {"content": "print('hello')\n", "kind": "code"}

    from codeforge.tools.assistant import handle_generate_code

    result = await handle_generate_code("print hello", "python")

    assert result["success"] is True
    assert result["data"]["content"] == "print('hello')\n"
    assert result["data"]["kind"] == "code"
    mock_oracle.generate.assert_awaited_once_with("print hello", "python")


async def test_generate_code_classifies_untagged_answer(mock_oracle):
    mock_oracle.generate.return_value = {
        "content": "A list comprehension builds a list from an iterable.",
        "kind": None,
    }

    from codeforge.tools.assistant import handle_generate_code

    result = await handle_generate_code("what is a list comprehension?", "python")

    assert result["data"]["kind"] == "text"


async def test_generate_code_strips_fence_from_code(mock_oracle):
    mock_oracle.generate.return_value = {"content": "```python\nimport os\nprint(os.getcwd())\n```", "kind": None}

    from codeforge.tools.assistant import handle_generate_code

    result = await handle_generate_code("print the cwd", "python")

    assert result["data"]["kind"] == "code"
    assert result["data"]["content"] == "import os\nprint(os.getcwd())"


async def test_generate_code_empty_prompt(mock_oracle):
    from codeforge.tools.assistant import handle_generate_code

    result = await handle_generate_code("   ", "python")

    assert result["success"] is False
    assert result["errorCode"] == "VALIDATION_ERROR"
    mock_oracle.generate.assert_not_awaited()


async def test_generate_code_unknown_language(mock_oracle):
    from codeforge.tools.assistant import handle_generate_code

    result = await handle_generate_code("hello world", "brainfuck")

    assert result["success"] is False
    assert result["errorCode"] == "VALIDATION_ERROR"


async def test_generate_code_handles_oracle_error(mock_oracle):
    mock_oracle.generate.side_effect = OracleError("quota exceeded")

    from codeforge.tools.assistant import handle_generate_code

    result = await handle_generate_code("hello world", "go")

    assert result["success"] is False
    assert result["errorCode"] == "ORACLE_ERROR"
    assert result["error"] == "Could not generate code. quota exceeded"


# --- complete_code ---


async def test_complete_code_returns_suggestions(mock_oracle):
    mock_oracle.complete.return_value = ["print()", "private"]

    from codeforge.tools.assistant import handle_complete_code

    result = await handle_complete_code("pri", "python")

    assert result["success"] is True
    assert result["data"]["suggestions"] == ["print()", "private"]
    assert result["data"]["count"] == 2


async def test_complete_code_blank_snippet(mock_oracle):
    from codeforge.tools.assistant import handle_complete_code

    result = await handle_complete_code("  ", "python")

    assert result["data"]["count"] == 0
    mock_oracle.complete.assert_not_awaited()


async def test_complete_code_handles_oracle_error(mock_oracle):
    mock_oracle.complete.side_effect = OracleError("timeout")

    from codeforge.tools.assistant import handle_complete_code

    result = await handle_complete_code("pri", "python")

    assert result["errorCode"] == "ORACLE_ERROR"


# --- detect_errors ---


async def test_detect_errors_returns_report(mock_oracle):
    mock_oracle.detect_errors.return_value = {
        "errors": ["Line 1: missing closing parenthesis"],
        "highlightedCode": "print('hi' <-- here",
    }

    from codeforge.tools.assistant import handle_detect_errors

    result = await handle_detect_errors("print('hi'", "python")

    assert result["success"] is True
    assert result["data"]["count"] == 1
    assert result["data"]["errors"] == ["Line 1: missing closing parenthesis"]
    assert result["data"]["highlightedCode"] == "print('hi' <-- here"


async def test_detect_errors_handles_unexpected_error(mock_oracle):
    mock_oracle.detect_errors.side_effect = Exception("boom")

    from codeforge.tools.assistant import handle_detect_errors

    result = await handle_detect_errors("x = ", "python")

    assert result["success"] is False
    assert result["errorCode"] == "UNKNOWN_ERROR"
