"""Shared test fixtures for forge-assistant."""

import json

import pytest
from httpx import ASGITransport, AsyncClient

from forge_backend.main import app
from forge_backend.models.generation import FileEntry, GenerateResponse
from forge_backend.services.config_manager import ConfigManager
from forge_backend.services.context import AppContext
from forge_backend.services.errors import UpstreamError

NO_DELAY_CONFIG = {
    "output_dir": "unused",
    "client": {"base_url": "http://test", "timeout_seconds": 5},
    "pacing": {"speed": 0, "fine_grained_cancel": False},
}


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config manager at a throwaway directory."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("FORGE_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("FORGE_OUTPUT_DIR", str(tmp_path / "env-output"))
    ConfigManager.reset_instance()
    yield config_dir
    ConfigManager.reset_instance()


@pytest.fixture(autouse=True)
def reset_sse_state():
    """sse-starlette keeps a module-level exit event bound to the first event loop."""
    import sse_starlette.sse as sse

    if hasattr(sse, "AppStatus"):
        sse.AppStatus.should_exit_event = None
    yield


@pytest.fixture
def output_dir(tmp_path):
    path = tmp_path / "ai-generated"
    path.mkdir()
    return path


@pytest.fixture
def context(output_dir):
    return AppContext(output_dir, json.loads(json.dumps(NO_DELAY_CONFIG)))


@pytest.fixture
def api(context):
    """Factory for an AsyncClient talking to the app with ``context`` installed."""
    app.state.context = context
    yield lambda: AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
    app.state.context = None


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def fake_sleep():
    return RecordingSleep()


class FakeBackend:
    """Generation backend returning a fixed response, or failing."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []
        self.saved = []

    async def generate(self, prompt, request_type):
        self.calls.append((prompt, request_type))
        if self.error:
            raise self.error
        return self.response

    async def save_file(self, file_name, content, language):
        self.saved.append(file_name)
        if self.error:
            raise UpstreamError("offline")


@pytest.fixture
def three_file_response():
    return GenerateResponse(
        response="Here is your app",
        files={
            "index.html": FileEntry(content="<html>\n<body></body>\n</html>", language="html"),
            "style.css": FileEntry(content="body {\n  margin: 0;\n}", language="css"),
            "script.js": FileEntry(content="\n".join(f"console.log({i});" for i in range(30)), language="javascript"),
        },
    )
