"""Tests for the HTTP generation backend against a stub aiohttp server."""

import pytest
from aiohttp import test_utils, web

from forge_backend.models.generation import RequestType
from forge_backend.services.api_client import HttpGenerationBackend
from forge_backend.services.errors import UpstreamError


def stub_app(generate_status=200, generate_body=None):
    received = []

    async def generate(request):
        received.append(("/generate", await request.json()))
        if generate_status != 200:
            return web.Response(status=generate_status, text="boom")
        return web.json_response(generate_body)

    async def files(request):
        received.append(("/files", await request.json()))
        return web.json_response({"success": True, "fileName": "x", "path": "/tmp/x"})

    app = web.Application()
    app.router.add_post("/generate", generate)
    app.router.add_post("/files", files)
    return app, received


def base_url(server):
    return f"http://{server.host}:{server.port}"


@pytest.mark.asyncio
async def test_generate_posts_prompt_and_remembers_session():
    body = {
        "response": "✅ Todo List app created!",
        "success": True,
        "files": {"index.html": {"content": "<html></html>", "language": "html"}},
        "projectSaved": True,
        "sessionId": "abc",
    }
    app, received = stub_app(generate_body=body)
    async with test_utils.TestServer(app) as server:
        backend = HttpGenerationBackend(base_url(server), timeout_seconds=5)
        first = await backend.generate("build a todo app", RequestType.BUILD)
        await backend.generate("thanks", RequestType.CHAT)

    assert first.files["index.html"].language == "html"
    assert first.project_saved is True
    assert received[0] == ("/generate", {"prompt": "build a todo app", "requestType": "build"})
    assert received[1] == ("/generate", {"prompt": "thanks", "requestType": "chat", "sessionId": "abc"})


@pytest.mark.asyncio
async def test_save_file_posts_file():
    app, received = stub_app()
    async with test_utils.TestServer(app) as server:
        backend = HttpGenerationBackend(base_url(server))
        await backend.save_file("main.py", "print('hi')", "python")

    assert received == [("/files", {"fileName": "main.py", "content": "print('hi')", "language": "python"})]


@pytest.mark.asyncio
async def test_error_status_raises_upstream_error():
    app, _ = stub_app(generate_status=500)
    async with test_utils.TestServer(app) as server:
        backend = HttpGenerationBackend(base_url(server))
        with pytest.raises(UpstreamError, match="500"):
            await backend.generate("hello", RequestType.CHAT)


@pytest.mark.asyncio
async def test_reported_failure_raises_upstream_error():
    app, _ = stub_app(generate_body={"response": "", "success": False})
    async with test_utils.TestServer(app) as server:
        backend = HttpGenerationBackend(base_url(server))
        with pytest.raises(UpstreamError):
            await backend.generate("hello", RequestType.CHAT)


@pytest.mark.asyncio
async def test_malformed_response_raises_upstream_error():
    app, _ = stub_app(generate_body={"unexpected": True})
    async with test_utils.TestServer(app) as server:
        backend = HttpGenerationBackend(base_url(server))
        with pytest.raises(UpstreamError):
            await backend.generate("hello", RequestType.CHAT)


@pytest.mark.asyncio
async def test_unreachable_server_raises_upstream_error():
    backend = HttpGenerationBackend("http://127.0.0.1:1", timeout_seconds=2)
    with pytest.raises(UpstreamError, match="Network error"):
        await backend.generate("hello", RequestType.CHAT)


def test_from_config_uses_client_settings():
    backend = HttpGenerationBackend.from_config({"client": {"base_url": "http://example:9000/", "timeout_seconds": 7}})
    assert backend.base_url == "http://example:9000"
    assert backend.timeout_seconds == 7
