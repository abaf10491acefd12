from __future__ import annotations

from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from route_pipe.server.types import RouteContext
from route_pipe.utils.async_pipe import Step


class CorsOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    allowed_origins: List[str] = Field(..., description="Exact origins allowed, or ['*'] for any origin")
    allowed_methods: List[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    allowed_headers: List[str] = Field(
        default_factory=lambda: ["Content-Type", "Authorization", "X-Request-ID"]
    )

    @field_validator("allowed_origins")
    @classmethod
    def _origins_required(cls, v: List[str]) -> List[str]:
        out = [str(o).strip().rstrip("/") for o in v if str(o or "").strip()]
        if not out:
            raise ValueError("allowed_origins must contain at least one origin")
        return out

    @field_validator("allowed_methods")
    @classmethod
    def _upper_methods(cls, v: List[str]) -> List[str]:
        return [str(m).strip().upper() for m in v if str(m or "").strip()]

    def origin_allowed(self, origin: str) -> bool:
        if "*" in self.allowed_origins:
            return True
        return origin.rstrip("/") in self.allowed_origins


def create_with_cors(
    *,
    allowed_origins: Iterable[str],
    allowed_methods: Optional[Iterable[str]] = None,
    allowed_headers: Optional[Iterable[str]] = None,
) -> Step:
    """Build a step that sets CORS headers for allowed request origins."""
    fields = {"allowed_origins": list(allowed_origins)}
    if allowed_methods is not None:
        fields["allowed_methods"] = list(allowed_methods)
    if allowed_headers is not None:
        fields["allowed_headers"] = list(allowed_headers)
    options = CorsOptions.model_validate(fields)

    async def with_cors(ctx: RouteContext) -> RouteContext:
        origin = str((getattr(ctx.request, "headers", None) or {}).get("origin") or "").strip()
        if not origin or not options.origin_allowed(origin):
            return ctx
        res = ctx.response
        res.set_header("Access-Control-Allow-Origin", "*" if "*" in options.allowed_origins else origin)
        res.set_header("Access-Control-Allow-Methods", ", ".join(options.allowed_methods))
        res.set_header("Access-Control-Allow-Headers", ", ".join(options.allowed_headers))
        res.set_header("Vary", "Origin")
        return ctx

    return with_cors
