from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from route_pipe.server.route import RouteHandler
from route_pipe.server.types import RouteRequest, RouteResponse

logger = logging.getLogger("route_pipe.asgi")


def _parse_body(content_type: str, body: bytes) -> Any:
    if not body:
        return None
    ct = (content_type or "").lower()
    if "application/json" in ct:
        try:
            return json.loads(body.decode("utf-8", errors="replace"))
        except ValueError:
            return body.decode("utf-8", errors="replace")
    if ct.startswith("text/") or "application/x-www-form-urlencoded" in ct:
        return body.decode("utf-8", errors="replace")
    return body


async def to_route_request(request: Request) -> RouteRequest:
    raw = await request.body()
    url = request.url.path
    if request.url.query:
        url = f"{url}?{request.url.query}"
    return RouteRequest(
        url=url,
        method=request.method.upper(),
        headers={k.lower(): v for k, v in request.headers.items()},
        query=dict(request.query_params),
        body=_parse_body(request.headers.get("content-type", ""), raw),
    )


def to_starlette_response(response: RouteResponse) -> Response:
    status_code = response.status_code or 200
    if response.written:
        return JSONResponse(response.body, status_code=status_code, headers=response.headers)
    return Response(status_code=status_code, headers=response.headers)


def to_endpoint(handler: RouteHandler) -> Callable[[Request], Awaitable[Response]]:
    """
    Wrap a built route so FastAPI/Starlette can mount it.

        app.add_api_route("/health", to_endpoint(health_route), methods=["GET"])
    """

    async def endpoint(request: Request) -> Response:
        route_request = await to_route_request(request)
        route_response = RouteResponse()
        await handler(route_request, route_response)
        if not route_response.written:
            logger.debug("route %s %s finished without writing a body", route_request.method, route_request.url)
        return to_starlette_response(route_response)

    return endpoint
