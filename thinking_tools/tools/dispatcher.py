# thinking_tools/tools/dispatcher.py
from __future__ import annotations
import logging, time
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pydantic

from thinking_tools.core.errors import ModelRequestError, ToolError, UnknownToolError, ValidationError
from thinking_tools.llm.session import ChatModel
from thinking_tools.reports.artifacts import ensure_dir
from thinking_tools.services import handlers
from thinking_tools.tools.schemas import TOOLS, ToolInput, list_tools
from thinking_tools.utils.logging import new_request_id

logger = logging.getLogger(__name__)


def _validation_error(tool: str, err: pydantic.ValidationError) -> ValidationError:
    first = err.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ())) or "arguments"
    return ValidationError(field, first.get("msg", "invalid value"), tool=tool)


class ToolDispatcher:
    """Validates a tool call, resolves its output directory and runs the handler.

    The default output directory is fixed at construction; call prepare() once
    at startup to create it.
    """

    def __init__(self, output_dir: str | Path, llm: Optional[ChatModel] = None):
        self.output_dir = Path(output_dir).resolve()
        self.llm = llm

    def prepare(self) -> Path:
        return ensure_dir(self.output_dir)

    def list_tools(self) -> List[Dict[str, Any]]:
        return list_tools()

    def validate(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolInput:
        spec = TOOLS.get(name)
        if spec is None:
            raise UnknownToolError(name)
        try:
            return spec.input_model.model_validate(dict(arguments or {}))
        except pydantic.ValidationError as e:
            raise _validation_error(name, e) from e

    def resolve_output_dir(self, args: ToolInput) -> Path:
        if args.output_dir:
            return Path(args.output_dir).resolve()
        return self.output_dir

    def _require_llm(self) -> ChatModel:
        if self.llm is None:
            raise ModelRequestError("model client is not configured")
        return self.llm

    async def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        request_id = new_request_id()
        start = time.time()
        try:
            args = self.validate(name, arguments)
            out_dir = ensure_dir(self.resolve_output_dir(args))
            if name == "generate-thinking":
                result = await handlers.generate_thinking(args, out_dir, self._require_llm())
            elif name == "analyze-csv":
                result = await handlers.analyze_csv(args, out_dir, self._require_llm())
            else:
                result = await handlers.visualize_data(args, out_dir)
        except ToolError as e:
            e.tool = e.tool or name
            logger.error(
                f"tool call failed: {e}",
                extra={"tool": name, "request_id": request_id, "status": type(e).__name__},
            )
            raise
        except Exception:
            logger.exception("unexpected error in tool execution", extra={"tool": name, "request_id": request_id})
            raise
        logger.info(
            "tool call completed",
            extra={
                "tool": name,
                "request_id": request_id,
                "status": "ok",
                "elapsed_ms": int((time.time() - start) * 1000),
            },
        )
        return result
