"""Integration test fixtures — spawn CodeForge MCP as subprocess."""

import os
import sys
from pathlib import Path

import pytest_asyncio

# Ensure codeforge is importable
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def mcp_session():
    """Spawn CodeForge MCP as a subprocess and connect via stdio.

    Uses the Python MCP SDK client to communicate with the server
    over stdin/stdout, the way an editor client would connect.

    We manually enter/exit the async context managers to avoid the
    anyio "cancel scope in different task" teardown error that occurs
    when pytest-asyncio finalizes a session-scoped yielding fixture.
    """
    from mcp import ClientSession, StdioServerParameters
    from mcp.client.stdio import stdio_client

    # No credentials: these tests only exercise paths that never reach Gemini
    strip_keys = {"GEMINI_API_KEY", "GOOGLE_API_KEY", "PYTHONHOME"}
    clean_env = {k: v for k, v in os.environ.items() if k not in strip_keys}
    clean_env["PYTHONPATH"] = str(PROJECT_ROOT)

    server_params = StdioServerParameters(
        command=sys.executable,
        args=["-m", "codeforge.main"],
        env=clean_env,
        cwd=str(PROJECT_ROOT),
    )

    # Manually manage context managers so teardown stays in the same task
    stdio_cm = stdio_client(server_params)
    read, write = await stdio_cm.__aenter__()
    session_cm = ClientSession(read, write)
    session = await session_cm.__aenter__()
    await session.initialize()

    yield session

    # Teardown in same task context
    try:
        await session_cm.__aexit__(None, None, None)
    except Exception:
        pass
    try:
        await stdio_cm.__aexit__(None, None, None)
    except Exception:
        pass
