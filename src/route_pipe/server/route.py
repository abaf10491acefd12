"""
Route handlers built from `async_pipe` instead of a middleware chain.

Every failure inside a route is handled the same way: one redacted log record
and a generic 500 JSON body. The error message never reaches the client.
"""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from route_pipe.server.types import RouteContext
from route_pipe.utils.async_pipe import Step, async_pipe

logger = logging.getLogger("route_pipe.server")

LogSink = Callable[[Dict[str, Any]], None]
RouteHandler = Callable[[Any, Any], Awaitable[None]]

_SENSITIVE_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
_SENSITIVE_BODY_KEYS = frozenset({"password", "token", "apiKey", "secret"})


def sanitize_headers(headers: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {k: v for k, v in (headers or {}).items() if k not in _SENSITIVE_HEADERS}


def sanitize_body(body: Any) -> Any:
    # Shallow: nested sensitive fields are left as-is.
    if not isinstance(body, dict):
        return body
    return {k: v for k, v in body.items() if k not in _SENSITIVE_BODY_KEYS}


def _to_json(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        # Circular references and the like; the record must still be written.
        return json.dumps(repr(value), ensure_ascii=False)


def default_log_sink(record: Dict[str, Any]) -> None:
    # One-line JSON for easy grepping in server logs.
    logger.error(json.dumps(record, ensure_ascii=False, separators=(",", ":"), default=str))


def convert_middleware(middleware: Callable[..., Any]) -> Step:
    """
    Adapt a `(request, response, next)` middleware into a pipeline step.

    The `next` callback passed in is a no-op: calling it (or not) does not
    change control flow. Middleware that halts a chain by *not* calling `next`
    will not halt the pipeline once converted; raise instead, or write the
    response in the last step.
    """

    async def step(ctx: RouteContext) -> RouteContext:
        result = middleware(ctx.request, ctx.response, lambda *args, **kwargs: None)
        if inspect.isawaitable(result):
            await result
        return ctx

    return step


def _request_id_from(response: Any) -> Any:
    locals_ = getattr(response, "locals", None)
    if not isinstance(locals_, Mapping):
        return None
    return locals_.get("requestId")


def _error_record(request: Any, exc: Exception, request_id: Any) -> Dict[str, Any]:
    return {
        "time": datetime.now(timezone.utc).isoformat(),
        "body": _to_json(sanitize_body(getattr(request, "body", None))),
        "query": _to_json(getattr(request, "query", None)),
        "method": getattr(request, "method", None),
        "headers": _to_json(sanitize_headers(getattr(request, "headers", None))),
        "error": True,
        "url": getattr(request, "url", None),
        "message": str(exc),
        "requestId": request_id,
    }


def create_route(*steps: Step, log: Optional[LogSink] = None) -> RouteHandler:
    """
    Build a `(request, response)` route handler from pipeline steps.

    Each step receives and returns a `RouteContext`. The last step is expected
    to write the response; nothing is sent implicitly on success.

        health_route = create_route(
            with_request_id,
            with_cors,
            health,
        )
    """
    pipeline = async_pipe(*steps)
    sink = log or default_log_sink

    async def handler(request: Any, response: Any) -> None:
        try:
            await pipeline(RouteContext(request=request, response=response))
        except Exception as exc:
            request_id = _request_id_from(response)
            try:
                sink(_error_record(request, exc, request_id))
            except Exception:
                logger.exception("failed to log route error requestId=%s", request_id)
            response.status(500)
            response.json({"error": "Internal Server Error", "requestId": request_id})

    return handler
