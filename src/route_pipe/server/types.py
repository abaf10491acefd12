from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class RouteRequest:
    """Inbound request as seen by route steps. Header keys are lowercase."""

    url: str = "/"
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    query: Dict[str, Any] = field(default_factory=dict)
    body: Any = None


class RouteResponse:
    """
    Mutable response handed to every step of a route.

    `locals` is per-request storage shared across steps (request id, config, ...).
    """

    def __init__(self) -> None:
        self.status_code: Optional[int] = None
        self.headers: Dict[str, str] = {}
        self.locals: Dict[str, Any] = {}
        self.body: Any = None
        self.written = False

    def status(self, code: int) -> "RouteResponse":
        self.status_code = int(code)
        return self

    def json(self, payload: Any) -> "RouteResponse":
        self.body = payload
        self.written = True
        return self

    def set_header(self, name: str, value: str) -> "RouteResponse":
        self.headers[str(name)] = str(value)
        return self

    def __repr__(self) -> str:
        return f"RouteResponse(status_code={self.status_code!r}, written={self.written!r})"


@dataclass
class RouteContext:
    """Value threaded through a route pipeline. Both fields are references, never copies."""

    request: Any
    response: Any
