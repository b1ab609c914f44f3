"""
CodeForge MCP server entry point.

Runs on stdio transport via FastMCP. All logging goes to stderr
so it never corrupts the JSON-RPC stdio channel.
"""

import logging
import sys
from pathlib import Path

# Configure logging to stderr before any other imports.
logging.basicConfig(
    stream=sys.stderr,
    level=logging.INFO,
    format="%(message)s",
)

# Load .env from the project root, only when one exists
_env_path = Path(__file__).resolve().parent.parent / ".env"
if _env_path.exists():
    from dotenv import load_dotenv
    load_dotenv(_env_path)


from fastmcp import FastMCP  # noqa: E402

from codeforge.tools.assistant import register_assistant_tools  # noqa: E402
from codeforge.tools.execution import register_execution_tools  # noqa: E402
from codeforge.tools.history import register_history_tools  # noqa: E402

mcp = FastMCP("codeforge")

register_execution_tools(mcp)
register_assistant_tools(mcp)
register_history_tools(mcp)


def main() -> None:
    logging.getLogger("codeforge").info("CodeForge MCP starting on stdio...")
    mcp.run()


if __name__ == "__main__":
    main()
