"""
Move the `latest` git tag to a released version.

Built on `async_pipe`: a validation step that raises for prereleases, then the
git side effect. Failures are converted into a `ReleaseResult` instead of
propagating.
"""

from __future__ import annotations

import logging
import subprocess
from typing import Literal, Sequence

import anyio
from pydantic import BaseModel, ConfigDict, Field

from route_pipe.errors import ReleaseError
from route_pipe.utils.async_pipe import async_pipe

logger = logging.getLogger("route_pipe.release")

PRERELEASE_IDENTIFIERS = ("rc", "alpha", "beta", "dev", "preview")


class ReleaseRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: str
    dry_run: bool = Field(default=False, alias="dryRun")


class ReleaseResult(BaseModel):
    success: bool
    message: str
    operation: Literal["update", "dry-run", "error"]


def is_prerelease(version: str = "") -> bool:
    v = version or ""
    return any(f"-{identifier}" in v for identifier in PRERELEASE_IDENTIFIERS)


def should_update_latest_tag(version: str) -> bool:
    return not is_prerelease(version)


async def _git(*args: str) -> str:
    command: Sequence[str] = ["git", *args]
    logger.debug("running %s", " ".join(command))
    result = await anyio.run_process(command, check=True)
    return result.stdout.decode("utf-8", errors="replace").strip()


async def validate_version_for_latest_tag(request: ReleaseRequest) -> ReleaseRequest:
    if not should_update_latest_tag(request.version):
        raise ReleaseError(f"Cannot update latest tag: {request.version} is a prerelease version")
    return request


async def perform_latest_tag_update(request: ReleaseRequest) -> ReleaseResult:
    version = request.version
    if request.dry_run:
        return ReleaseResult(success=True, message=f"Would update latest tag to {version}", operation="dry-run")

    version_tag = version if version.startswith("v") else f"v{version}"
    try:
        commit_ref = await _git("rev-parse", version_tag)
        await _git("tag", "-f", "latest", commit_ref)
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or b"").decode("utf-8", errors="replace").strip() or str(e)
        raise ReleaseError(f"Failed to update latest tag: {detail}") from e
    except OSError as e:
        raise ReleaseError(f"Failed to update latest tag: {e}") from e

    return ReleaseResult(
        success=True,
        message=f"Updated latest tag to {version} ({commit_ref[:7]})",
        operation="update",
    )


_update_pipeline = async_pipe(validate_version_for_latest_tag, perform_latest_tag_update)


async def update_latest_tag(version: str, *, dry_run: bool = False) -> ReleaseResult:
    try:
        return await _update_pipeline(ReleaseRequest(version=version, dry_run=dry_run))
    except Exception as e:
        logger.warning("latest tag not updated: %s", e)
        return ReleaseResult(success=False, message=str(e), operation="error")
