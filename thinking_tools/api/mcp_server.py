# thinking_tools/api/mcp_server.py
from __future__ import annotations
import json, logging
from importlib.metadata import PackageNotFoundError, version
from typing import Any

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from thinking_tools.tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "google-thinking"


def _server_version() -> str:
    try:
        return version("thinking-tools")
    except PackageNotFoundError:
        return "0.0.0"


def build_server(dispatcher: ToolDispatcher) -> Server:
    server = Server(SERVER_NAME, version=_server_version())

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=t["name"], description=t["description"], inputSchema=t["inputSchema"])
            for t in dispatcher.list_tools()
        ]

    # validation is done by the dispatcher against the same pydantic models
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        # ToolError はそのまま投げる。SDK が isError の結果に変換する
        result = await dispatcher.call(name, arguments or {})
        return [types.TextContent(type="text", text=json.dumps(result, ensure_ascii=False, indent=2))]

    return server


async def run_stdio(dispatcher: ToolDispatcher) -> None:
    server = build_server(dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("Google Thinking Generator MCP Server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())
