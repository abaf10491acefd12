from __future__ import annotations

import time

from route_pipe.server.types import RouteContext


async def health(ctx: RouteContext) -> RouteContext:
    ctx.response.status(200).json(
        {
            "ok": True,
            "service": "route-pipe",
            "requestId": ctx.response.locals.get("requestId"),
            "ts": int(time.time() * 1000),
        }
    )
    return ctx
