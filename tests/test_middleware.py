import asyncio

import pytest
from pydantic import ValidationError

from route_pipe.errors import ConfigurationError
from route_pipe.server import (
    create_config_object,
    create_route,
    create_server,
    create_with_config,
    create_with_cors,
    load_config_from_env,
    with_request_id,
    with_server_error,
)


def test_with_request_id_generates_and_echoes_id():
    ctx = create_server()
    asyncio.run(with_request_id(ctx))
    request_id = ctx.response.locals["requestId"]
    assert len(request_id) == 12
    assert ctx.response.headers["X-Request-ID"] == request_id


def test_with_request_id_reuses_inbound_header():
    ctx = create_server(request={"headers": {"x-request-id": "upstream-1"}})
    asyncio.run(with_request_id(ctx))
    assert ctx.response.locals["requestId"] == "upstream-1"


def test_request_id_flows_into_error_response():
    async def fail(ctx):
        raise RuntimeError("nope")

    ctx = create_server(request={"headers": {"x-request-id": "rid-9"}})
    asyncio.run(create_route(with_request_id, fail, log=lambda record: None)(ctx.request, ctx.response))
    assert ctx.response.body == {"error": "Internal Server Error", "requestId": "rid-9"}


def test_cors_sets_headers_for_allowed_origin():
    with_cors = create_with_cors(allowed_origins=["https://example.com"])
    ctx = create_server(request={"headers": {"origin": "https://example.com"}})
    asyncio.run(with_cors(ctx))
    headers = ctx.response.headers
    assert headers["Access-Control-Allow-Origin"] == "https://example.com"
    assert "GET" in headers["Access-Control-Allow-Methods"]
    assert headers["Vary"] == "Origin"


def test_cors_ignores_unknown_origin():
    with_cors = create_with_cors(allowed_origins=["https://example.com"])
    ctx = create_server(request={"headers": {"origin": "https://evil.test"}})
    asyncio.run(with_cors(ctx))
    assert "Access-Control-Allow-Origin" not in ctx.response.headers


def test_cors_wildcard_and_custom_methods():
    with_cors = create_with_cors(allowed_origins=["*"], allowed_methods=["get", "post"])
    ctx = create_server(request={"headers": {"origin": "https://anything.test"}})
    asyncio.run(with_cors(ctx))
    assert ctx.response.headers["Access-Control-Allow-Origin"] == "*"
    assert ctx.response.headers["Access-Control-Allow-Methods"] == "GET, POST"


def test_cors_requires_origins():
    with pytest.raises(ValidationError):
        create_with_cors(allowed_origins=[])


def test_load_config_from_env(monkeypatch):
    monkeypatch.setenv("ROUTE_PIPE_TEST_DB", "postgres://db")
    monkeypatch.delenv("ROUTE_PIPE_TEST_MISSING", raising=False)
    assert load_config_from_env(["ROUTE_PIPE_TEST_DB", "ROUTE_PIPE_TEST_MISSING"]) == {
        "ROUTE_PIPE_TEST_DB": "postgres://db",
        "ROUTE_PIPE_TEST_MISSING": None,
    }


def test_config_object_get_raises_for_missing_keys():
    config = create_config_object({"API_KEY": "s3cr3t", "EMPTY": None})
    assert config.get("API_KEY") == "s3cr3t"
    assert "API_KEY" in config
    assert "EMPTY" not in config
    with pytest.raises(ConfigurationError) as exc_info:
        config.get("EMPTY")
    assert exc_info.value.key == "EMPTY"
    assert "s3cr3t" not in repr(config)


def test_with_config_supports_sync_and_async_loaders():
    async def async_loader():
        return {"A": "1"}

    for loader in (lambda: {"A": "1"}, async_loader):
        ctx = create_server()
        asyncio.run(create_with_config(loader)(ctx))
        assert ctx.response.locals["config"].get("A") == "1"


def test_missing_config_inside_route_becomes_500():
    records = []

    async def handler(ctx):
        ctx.response.locals["config"].get("DATABASE_URL")
        return ctx

    route = create_route(create_with_config(lambda: {}), handler, log=records.append)
    ctx = create_server()
    asyncio.run(route(ctx.request, ctx.response))
    assert ctx.response.status_code == 500
    assert "DATABASE_URL" in records[0]["message"]


def test_with_server_error_builds_standard_body():
    ctx = create_server(response={"requestId": "rid-1"})
    asyncio.run(with_server_error(ctx))
    server_error = ctx.response.locals["serverError"]
    assert server_error() == {"error": {"message": "Internal Server Error", "status": 500, "requestId": "rid-1"}}
    assert server_error(message="Not found", status=404, request_id="x") == {
        "error": {"message": "Not found", "status": 404, "requestId": "x"}
    }
