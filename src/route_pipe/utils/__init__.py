from __future__ import annotations

from route_pipe.utils.async_pipe import async_pipe

__all__ = ["async_pipe"]
