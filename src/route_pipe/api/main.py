from __future__ import annotations

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from fastapi import FastAPI

from route_pipe.api.routes.health import health
from route_pipe.server import create_route, create_with_cors, with_request_id, with_server_error
from route_pipe.server.asgi import to_endpoint
from route_pipe.utils import async_pipe


def _repo_root() -> Path:
    # src/route_pipe/api/main.py -> repo root
    return Path(__file__).resolve().parents[3]


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return list(default)
    return [part.strip() for part in raw.split(",") if part.strip()]


def create_app() -> FastAPI:
    # Load `.env` + `.env.local` when present (local dev convenience).
    load_dotenv(_repo_root() / ".env", override=False)
    load_dotenv(_repo_root() / ".env.local", override=False)

    with_cors = create_with_cors(allowed_origins=_env_list("ROUTE_PIPE_CORS_ORIGINS", ["*"]))
    default_middleware = async_pipe(with_request_id, with_cors, with_server_error)

    app = FastAPI(title="route-pipe")
    app.add_api_route("/health", to_endpoint(create_route(default_middleware, health)), methods=["GET"])
    return app


app = create_app()
