from __future__ import annotations

from route_pipe.server.middleware.config import (
    ConfigObject,
    create_config_object,
    create_with_config,
    load_config_from_env,
)
from route_pipe.server.middleware.cors import CorsOptions, create_with_cors
from route_pipe.server.middleware.request_id import with_request_id
from route_pipe.server.middleware.server_error import with_server_error

__all__ = [
    "ConfigObject",
    "CorsOptions",
    "create_config_object",
    "create_with_config",
    "create_with_cors",
    "load_config_from_env",
    "with_request_id",
    "with_server_error",
]
