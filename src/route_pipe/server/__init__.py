"""
Server utilities for API route composition.

    from route_pipe.utils import async_pipe
    from route_pipe.server import create_route, create_with_cors, with_request_id, with_server_error

    with_cors = create_with_cors(allowed_origins=["https://example.com"])
    default_middleware = async_pipe(with_request_id, with_cors, with_server_error)

    my_route = create_route(default_middleware, my_handler)
"""

from __future__ import annotations

from route_pipe.server.route import (
    convert_middleware,
    create_route,
    default_log_sink,
    sanitize_body,
    sanitize_headers,
)
from route_pipe.server.middleware import (
    ConfigObject,
    create_config_object,
    create_with_config,
    create_with_cors,
    load_config_from_env,
    with_request_id,
    with_server_error,
)
from route_pipe.server.test_utils import create_server
from route_pipe.server.types import RouteContext, RouteRequest, RouteResponse

__all__ = [
    "ConfigObject",
    "RouteContext",
    "RouteRequest",
    "RouteResponse",
    "convert_middleware",
    "create_config_object",
    "create_route",
    "create_server",
    "create_with_config",
    "create_with_cors",
    "default_log_sink",
    "load_config_from_env",
    "sanitize_body",
    "sanitize_headers",
    "with_request_id",
    "with_server_error",
]
