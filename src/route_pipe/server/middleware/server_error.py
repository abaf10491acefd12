from __future__ import annotations

from typing import Any, Dict, Optional

from route_pipe.server.types import RouteContext


async def with_server_error(ctx: RouteContext) -> RouteContext:
    """Expose `response.locals["serverError"](...)` for building standard error bodies."""
    locals_ = ctx.response.locals

    def server_error(
        message: str = "Internal Server Error",
        status: int = 500,
        request_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        return {
            "error": {
                "message": message,
                "status": status,
                "requestId": request_id if request_id is not None else locals_.get("requestId"),
            }
        }

    locals_["serverError"] = server_error
    return ctx
