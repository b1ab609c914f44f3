"""
Response helpers for the StandardResponse contract.

Every tool returns one of these shapes so the editor client can render
results and notifications uniformly, whichever tool produced them.
"""

from typing import Any

VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_STATE = "INVALID_STATE"
ORACLE_ERROR = "ORACLE_ERROR"
NOT_FOUND = "NOT_FOUND"
UNKNOWN_ERROR = "UNKNOWN_ERROR"


def success_response(data: dict[str, Any]) -> dict[str, Any]:
    return {"success": True, "data": data}


def error_response(
    error: str,
    error_code: str = UNKNOWN_ERROR,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    resp: dict[str, Any] = {"success": False, "error": error, "errorCode": error_code}
    if details:
        resp["errorDetails"] = details
    return resp
