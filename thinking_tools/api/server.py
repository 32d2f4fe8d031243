from __future__ import annotations
from fastapi import FastAPI, Header, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field
from typing import Any, Dict
import time
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from thinking_tools.core.errors import (
    EmptyDatasetError,
    FileReadError,
    FileWriteError,
    InsufficientColumnsError,
    ModelRequestError,
    ToolError,
    UnknownToolError,
    ValidationError,
)
from thinking_tools.tools.dispatcher import ToolDispatcher
from thinking_tools.tools.schemas import TOOLS

STATUS_CODES: dict[type, int] = {
    ValidationError: 400,
    UnknownToolError: 404,
    FileReadError: 422,
    EmptyDatasetError: 422,
    InsufficientColumnsError: 422,
    ModelRequestError: 502,
    FileWriteError: 500,
}


class CallRequest(BaseModel):
    name: str
    arguments: Dict[str, Any] = Field(default_factory=dict)


def _status_for(err: ToolError) -> int:
    for cls in type(err).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return 500


def create_app(dispatcher: ToolDispatcher, api_key: str | None = None) -> FastAPI:
    app = FastAPI(title="Thinking Tools API")

    # app ごとのレジストリ (テストで何度 create_app しても重複登録にならない)
    registry = CollectorRegistry()
    calls = Counter("tool_calls_total", "Total tool calls", ["tool", "status"], registry=registry)
    latency = Histogram("tool_call_latency_seconds", "Tool call latency", ["tool"], registry=registry)

    def _enforce_api_key(x_api_key: str | None) -> None:
        if api_key and x_api_key != api_key:
            raise HTTPException(status_code=401, detail="invalid api key")

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.get("/tools")
    def tools(x_api_key: str | None = Header(default=None, alias="X-API-Key")):
        _enforce_api_key(x_api_key)
        return {"tools": dispatcher.list_tools()}

    @app.post("/call")
    async def call(req: CallRequest, x_api_key: str | None = Header(default=None, alias="X-API-Key")):
        _enforce_api_key(x_api_key)
        start = time.time()
        label = req.name if req.name in TOOLS else "unknown"
        try:
            result = await dispatcher.call(req.name, req.arguments)
        except ToolError as e:
            calls.labels(tool=label, status=type(e).__name__).inc()
            return JSONResponse(e.to_dict(), status_code=_status_for(e))
        finally:
            latency.labels(tool=label).observe(time.time() - start)
        calls.labels(tool=label, status="ok").inc()
        return JSONResponse({"result": result})

    @app.get("/metrics")
    def metrics():
        return PlainTextResponse(generate_latest(registry), media_type="text/plain; version=0.0.4; charset=utf-8")

    return app
