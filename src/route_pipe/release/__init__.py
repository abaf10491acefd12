from __future__ import annotations

from route_pipe.release.helpers import (
    ReleaseRequest,
    ReleaseResult,
    is_prerelease,
    should_update_latest_tag,
    update_latest_tag,
)

__all__ = [
    "ReleaseRequest",
    "ReleaseResult",
    "is_prerelease",
    "should_update_latest_tag",
    "update_latest_tag",
]
