"""Tests for the command line interface."""

from click.testing import CliRunner

from forge_backend import cli
from forge_backend.services.errors import UpstreamError

from .conftest import FakeBackend


def test_chat_plays_back_generation(monkeypatch, three_file_response):
    backend = FakeBackend(three_file_response)
    monkeypatch.setattr(cli.HttpGenerationBackend, "from_config", classmethod(lambda cls, config: backend))

    result = CliRunner().invoke(cli.main, ["chat", "build me a todo app", "--speed", "0"])

    assert result.exit_code == 0, result.output
    assert "Analyzing Requirements" in result.output
    assert "📄 Creating script.js..." in result.output
    assert "console.log(29);" in result.output
    assert "I've created your project with 3 files" in result.output
    assert backend.calls[0][0] == "build me a todo app"


def test_chat_reports_fallback(monkeypatch):
    backend = FakeBackend(error=UpstreamError("connection refused"))
    monkeypatch.setattr(cli.HttpGenerationBackend, "from_config", classmethod(lambda cls, config: backend))

    result = CliRunner().invoke(cli.main, ["chat", "build a game", "--speed", "0"])

    assert result.exit_code == 0, result.output
    assert "using a locally generated app" in result.output
    assert "index.html created successfully" in result.output
