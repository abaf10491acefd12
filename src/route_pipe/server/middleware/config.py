from __future__ import annotations

import inspect
import os
from typing import Any, Callable, Dict, Iterable, Mapping

from route_pipe.errors import ConfigurationError
from route_pipe.server.types import RouteContext
from route_pipe.utils.async_pipe import Step


class ConfigObject:
    """Read-only config whose `get()` fails loudly on missing keys."""

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values: Dict[str, Any] = dict(values or {})

    def get(self, key: str) -> Any:
        value = self._values.get(key)
        if value is None:
            raise ConfigurationError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return self._values.get(key) is not None  # type: ignore[call-overload]

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def __repr__(self) -> str:
        # Values are often secrets.
        return f"ConfigObject(keys={sorted(self._values)!r})"


def create_config_object(values: Mapping[str, Any]) -> ConfigObject:
    return ConfigObject(values)


def load_config_from_env(keys: Iterable[str]) -> Dict[str, Any]:
    return {key: os.environ.get(key) for key in keys}


def create_with_config(loader: Callable[[], Any]) -> Step:
    """
    Build a step that loads config per request into `response.locals["config"]`.

    `loader` may be sync or async and must return a mapping.
    """

    async def with_config(ctx: RouteContext) -> RouteContext:
        values = loader()
        if inspect.isawaitable(values):
            values = await values
        ctx.response.locals["config"] = create_config_object(values)
        return ctx

    return with_config
