from __future__ import annotations

import uuid

from route_pipe.server.types import RouteContext


def _inbound_request_id(headers: dict) -> str:
    return str((headers or {}).get("x-request-id") or "").strip()


async def with_request_id(ctx: RouteContext) -> RouteContext:
    """Store a request id in `response.locals["requestId"]` and echo it as `X-Request-ID`."""
    request_id = _inbound_request_id(getattr(ctx.request, "headers", None)) or uuid.uuid4().hex[:12]
    ctx.response.locals["requestId"] = request_id
    ctx.response.set_header("X-Request-ID", request_id)
    return ctx
