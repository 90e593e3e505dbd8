"""HTTP API tests against the FastAPI app."""

import json

import pytest

from forge_backend.services.orchestrator import CancelToken


def sse_events(body: str):
    return [json.loads(line[len("data:"):].strip()) for line in body.splitlines() if line.startswith("data:")]


@pytest.mark.asyncio
async def test_health(api):
    async with api() as client:
        response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "forge-assistant-backend"}


@pytest.mark.asyncio
async def test_generate_requires_prompt(api):
    async with api() as client:
        missing = await client.post("/generate", json={})
        blank = await client.post("/generate", json={"prompt": "   "})
    assert missing.status_code == 400
    assert missing.json() == {"error": "Prompt is required"}
    assert blank.status_code == 400


@pytest.mark.asyncio
async def test_generate_rejects_unknown_request_type(api):
    async with api() as client:
        response = await client.post("/generate", json={"prompt": "hi", "requestType": "deploy"})
    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_generate_chat_matches_intent_without_writing(api, output_dir):
    async with api() as client:
        response = await client.post("/generate", json={"prompt": "I want a calculator"})
    data = response.json()
    assert response.status_code == 200
    assert data["success"] is True
    assert data["response"].startswith("I'll create a modern calculator app")
    assert data["files"] == {}
    assert data["projectSaved"] is False
    assert data["sessionId"]
    assert list(output_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_generate_build_writes_bundle(api, output_dir):
    async with api() as client:
        response = await client.post("/generate", json={"prompt": "build me a todo app", "requestType": "build"})
    data = response.json()
    assert response.status_code == 200
    assert list(data["files"]) == ["index.html", "style.css", "script.js"]
    assert data["files"]["script.js"]["language"] == "javascript"
    assert data["projectSaved"] is True
    assert "showBuildButton" not in data
    assert "appPlan" not in data
    assert (output_dir / "index.html").read_text(encoding="utf-8") == data["files"]["index.html"]["content"]


@pytest.mark.asyncio
async def test_generate_plan_offers_build_button(api, output_dir):
    async with api() as client:
        response = await client.post("/generate", json={"prompt": "a todo list please", "requestType": "plan"})
    data = response.json()
    assert data["showBuildButton"] is True
    assert data["appPlan"] == {
        "title": "Todo List App",
        "description": "Build a todo list application",
        "features": ["Add/remove tasks", "Mark complete", "Filter tasks", "Local storage"],
    }
    assert list(output_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_generate_chat_returns_session_bundle_after_build(api):
    async with api() as client:
        built = await client.post("/generate", json={"prompt": "calculator", "requestType": "build"})
        session_id = built.json()["sessionId"]
        followup = await client.post("/generate", json={"prompt": "thanks!", "sessionId": session_id})
    data = followup.json()
    assert data["sessionId"] == session_id
    assert list(data["files"]) == ["index.html", "style.css", "script.js"]


@pytest.mark.asyncio
async def test_generate_write_failure_is_server_error(api, context, tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    context.output_dir = blocker
    async with api() as client:
        response = await client.post("/generate", json={"prompt": "todo", "requestType": "build"})
    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["error"]


@pytest.mark.asyncio
async def test_create_file(api, output_dir):
    async with api() as client:
        response = await client.post(
            "/files", json={"fileName": "main.py", "content": "print('hi')", "language": "python"}
        )
        empty = await client.post("/files", json={"fileName": "empty.txt", "content": ""})
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["fileName"] == "main.py"
    assert (output_dir / "main.py").read_text(encoding="utf-8") == "print('hi')"
    assert empty.status_code == 200
    assert (output_dir / "empty.txt").read_text(encoding="utf-8") == ""


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{"content": "x"}, {"fileName": "a.txt"}, {"fileName": "", "content": "x"}])
async def test_create_file_requires_name_and_content(api, body):
    async with api() as client:
        response = await client.post("/files", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "fileName and content are required"}


@pytest.mark.asyncio
async def test_create_file_rejects_escaping_paths(api):
    async with api() as client:
        response = await client.post("/files", json={"fileName": "../outside.txt", "content": "x"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_files(api, output_dir):
    async with api() as client:
        empty = await client.get("/files")
        await client.post("/files", json={"fileName": "a.html", "content": "<p>a</p>"})
        await client.post("/files", json={"fileName": "b.css", "content": "p {}"})
        listed = await client.get("/files")
    assert empty.json() == {"files": {}}
    assert listed.json() == {
        "files": {
            "a.html": {"content": "<p>a</p>", "type": "html"},
            "b.css": {"content": "p {}", "type": "css"},
        }
    }


@pytest.mark.asyncio
async def test_preview(api, output_dir):
    (output_dir / "index.html").write_text("<h1>Hi</h1>", encoding="utf-8")
    async with api() as client:
        found = await client.get("/preview/index.html")
        missing = await client.get("/preview/nope.html")
    assert found.status_code == 200
    assert found.text == "<h1>Hi</h1>"
    assert found.headers["content-type"].startswith("text/html")
    assert missing.status_code == 404
    assert missing.json() == {"error": "File not found"}


@pytest.mark.asyncio
async def test_unknown_session_messages(api):
    async with api() as client:
        response = await client.get("/sessions/nope/messages")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_stream_plays_back_generation_and_records_chat(api, context, output_dir):
    async with api() as client:
        response = await client.post("/generate/stream", json={"prompt": "build me a todo app"})
        assert response.status_code == 200
        session_id = response.headers["x-session-id"]
        events = sse_events(response.text)
        log = await client.get(f"/sessions/{session_id}/messages")

    types = [e["type"] for e in events]
    assert types[0] == "started"
    assert types[-1] == "completed"
    assert [e["stage"] for e in events if e["type"] == "stage"] == [
        "analysis",
        "architecture",
        "structure",
        "implementation",
        "optimization",
    ]
    assert events[-1]["files"] == ["index.html", "style.css", "script.js"]
    typing = [e for e in events if e["type"] == "typing"]
    assert typing[0]["live"]["isActive"] is True
    assert typing[0]["fileName"] == "index.html"
    assert "file_name" not in typing[0]
    assert typing[0]["live"]["fileName"] == "index.html"

    assert sorted(p.name for p in output_dir.iterdir()) == ["index.html", "script.js", "style.css"]

    data = log.json()
    assert data["sessionId"] == session_id
    greeting, user, ai = data["messages"]
    assert greeting["sender"] == "ai"
    assert user["sender"] == "user" and user["content"] == "build me a todo app"
    assert ai["kind"] == "code"
    assert ai["metadata"]["filesGenerated"] == ["index.html", "style.css", "script.js"]
    assert ai["metadata"]["technologies"] == ["HTML", "CSS", "JavaScript"]
    assert events[-1]["chatMessage"]["id"] == ai["id"]

    # The session is free for the next generation once the stream ends
    assert not context.find_session(session_id).is_generating


@pytest.mark.asyncio
async def test_stream_rejects_concurrent_generation(api, context):
    session_id, state = context.session("busy")
    state.active_token = CancelToken()
    async with api() as client:
        response = await client.post("/generate/stream", json={"prompt": "build a todo app", "sessionId": session_id})
    assert response.status_code == 409
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_cancel(api, context):
    _, state = context.session("busy")
    token = state.active_token = CancelToken()
    async with api() as client:
        cancelled = await client.post("/generate/cancel", json={"sessionId": "busy"})
        again = await client.post("/generate/cancel", json={"sessionId": "busy"})
        unknown = await client.post("/generate/cancel", json={"sessionId": "nope"})
    assert cancelled.status_code == 200
    assert cancelled.json() == {"success": True, "sessionId": "busy"}
    assert token.cancelled
    # Repeating the cancel is harmless while the stream winds down
    assert again.status_code == 200
    assert unknown.status_code == 404


@pytest.mark.asyncio
async def test_cancelled_generation_still_blocks_a_new_stream(api, context):
    _, state = context.session("busy")
    state.active_token = CancelToken()
    async with api() as client:
        cancelled = await client.post("/generate/cancel", json={"sessionId": "busy"})
        resubmitted = await client.post("/generate/stream", json={"prompt": "build a todo app", "sessionId": "busy"})
    assert cancelled.status_code == 200
    # The old run keeps going until its next checkpoint, so the session is still busy
    assert resubmitted.status_code == 409
    assert state.is_generating


@pytest.mark.asyncio
async def test_preview_serves_binary_files(api, output_dir):
    png = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
    (output_dir / "logo.png").write_bytes(png)
    async with api() as client:
        response = await client.get("/preview/logo.png")
    assert response.status_code == 200
    assert response.content == png
    assert response.headers["content-type"] == "image/png"


@pytest.mark.asyncio
async def test_sessionless_generate_calls_do_not_grow_without_bound(api, context):
    context.max_sessions = 3
    async with api() as client:
        for _ in range(5):
            response = await client.post("/generate", json={"prompt": "hello"})
            assert response.status_code == 200
        last_id = response.json()["sessionId"]
    assert len(context) == 3
    assert context.find_session(last_id) is not None


@pytest.mark.asyncio
async def test_stream_failure_emits_error_event_and_frees_session(api, context, monkeypatch):
    from forge_backend.models.events import EventType, GenerationEvent, LiveCodingState
    from forge_backend.routers import generate as generate_router

    class ExplodingOrchestrator:
        def __init__(self, *args, **kwargs):
            pass

        async def _events(self):
            yield GenerationEvent(type=EventType.FILE_STARTED, file_name="a.html", live=LiveCodingState(file_name="a.html"))
            raise RuntimeError("disk on fire")

        def submit(self, prompt, token):
            return self._events()

    monkeypatch.setattr(generate_router, "GenerationOrchestrator", ExplodingOrchestrator)
    async with api() as client:
        response = await client.post("/generate/stream", json={"prompt": "build a todo app", "sessionId": "s1"})

    started, error = sse_events(response.text)
    assert started["fileName"] == "a.html"
    assert started["live"]["fileName"] == "a.html"
    assert error == {"type": "error", "message": "disk on fire", "files": []}
    assert not context.find_session("s1").is_generating
