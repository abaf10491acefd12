"""
Request-handling composition for async Python services.

- Pipeline composer: `route_pipe.utils.async_pipe`
- Route builder + error boundary: `route_pipe.server.route`
- FastAPI entrypoint: `route_pipe.api.main:app`
"""

from __future__ import annotations

from route_pipe.server import convert_middleware, create_route
from route_pipe.utils import async_pipe

__all__ = ["async_pipe", "convert_middleware", "create_route"]

__version__ = "0.1.0"
