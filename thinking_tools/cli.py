from __future__ import annotations
import argparse, asyncio, json, logging, sys

from thinking_tools.core.errors import ConfigError, ToolError
from thinking_tools.utils.config import AppConfig
from thinking_tools.utils.logging import setup_logging

logger = logging.getLogger("thinking_tools")


def _parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="thinking-tools", description="Gemini thinking / CSV EDA / chart config tools")
    sub = ap.add_subparsers(dest="command")
    sub.add_parser("stdio", help="Run the MCP server on stdin/stdout (default)")
    http = sub.add_parser("http", help="Serve the tools over HTTP")
    http.add_argument("--host", default=None)
    http.add_argument("--port", type=int, default=None)
    sub.add_parser("tools", help="Print the tool catalog as JSON")
    call = sub.add_parser("call", help="Run a single tool call and print the result")
    call.add_argument("tool", help="Tool name, e.g. analyze-csv")
    call.add_argument("--args", default="{}", help="Tool arguments as a JSON object")
    return ap


def _dispatcher(cfg: AppConfig):
    from thinking_tools.llm.client import LLMClient
    from thinking_tools.tools.dispatcher import ToolDispatcher

    dispatcher = ToolDispatcher(cfg.output_dir, LLMClient.from_config(cfg))
    dispatcher.prepare()
    return dispatcher


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    command = args.command or "stdio"

    if command == "tools":
        from thinking_tools.tools.schemas import list_tools
        print(json.dumps(list_tools(), ensure_ascii=False, indent=2))
        return 0

    try:
        cfg = AppConfig.load().validate()
    except ConfigError as e:
        setup_logging()
        logger.error(f"startup failed: {e}")
        return 2
    setup_logging(cfg.log_level)

    try:
        dispatcher = _dispatcher(cfg)
    except (ConfigError, ToolError, ImportError) as e:
        logger.error(f"startup failed: {e}")
        return 2

    if command == "call":
        try:
            tool_args = json.loads(args.args)
        except json.JSONDecodeError as e:
            logger.error(f"--args is not valid JSON: {e}")
            return 2
        try:
            result = asyncio.run(dispatcher.call(args.tool, tool_args))
        except ToolError as e:
            print(json.dumps(e.to_dict(), ensure_ascii=False, indent=2))
            return 1
        print(json.dumps(result, ensure_ascii=False, indent=2))
        return 0

    if command == "http":
        import uvicorn
        from thinking_tools.api.server import create_app

        app = create_app(dispatcher, api_key=cfg.http_api_key)
        uvicorn.run(app, host=args.host or cfg.http_host, port=args.port or cfg.http_port)
        return 0

    from thinking_tools.api.mcp_server import run_stdio
    try:
        asyncio.run(run_stdio(dispatcher))
    except Exception:
        logger.exception("Fatal error in main()")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
