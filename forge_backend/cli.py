"""CLI entry point for forge-assistant."""

import asyncio
import logging

import click
import uvicorn

from .models.events import EventType, GenerationEvent
from .services.api_client import HttpGenerationBackend
from .services.chat_session import ChatSession
from .services.config_manager import ConfigManager
from .services.orchestrator import CancelToken, GenerationOrchestrator, PacingConfig


def render_event(event: GenerationEvent):
    """Print one orchestrator event to the terminal."""
    if event.type == EventType.STAGE:
        click.echo(f"[{event.progress:>3}%] {event.message}")
    elif event.type == EventType.FILE_STARTED:
        click.echo(f"\n{event.message} ({event.live.complexity})")
    elif event.type == EventType.TYPING:
        # Only the newest line, the rest is already on screen
        click.echo(event.live.content.rsplit("\n", 1)[-1] if event.live.content else "")
    elif event.type == EventType.FALLBACK:
        click.secho(event.message, fg="yellow")
    elif event.type == EventType.CANCELLED:
        click.secho(event.message, fg="red")
    elif event.type == EventType.COMPLETED:
        click.echo(f"\n{event.chat_message.content}")
    elif event.type == EventType.FILE_COMPLETED:
        click.secho(event.message, fg="green")


async def _chat(prompt: str, speed: float):
    config = ConfigManager.get_instance().get_config()
    pacing = PacingConfig.from_config(config)
    pacing.speed = speed
    orchestrator = GenerationOrchestrator(HttpGenerationBackend.from_config(config), ChatSession(), pacing)
    token = CancelToken()
    try:
        async for event in orchestrator.submit(prompt, token):
            render_event(event)
    except asyncio.CancelledError:
        token.cancel()
        raise


@click.group()
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """Simulated AI code-generation assistant."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@main.command()
@click.option("--port", default=None, type=int, help="Port to serve on.")
@click.option("--host", default=None, help="Host to bind to.")
def serve(port, host):
    """Start the generation server."""
    server = ConfigManager.get_instance().get_config().get("server", {})
    host = host or server.get("host", "0.0.0.0")
    port = port or server.get("port", 5000)
    click.echo(f"Starting forge-assistant on http://{host}:{port}")
    uvicorn.run("forge_backend.main:app", host=host, port=port, reload=False)


@main.command()
@click.argument("prompt")
@click.option("--speed", default=1.0, help="Playback speed multiplier; 0 disables delays.")
def chat(prompt: str, speed: float):
    """Send PROMPT to a running server and play back the generation."""
    try:
        asyncio.run(_chat(prompt, speed))
    except KeyboardInterrupt:
        click.secho("⏹️ Generation cancelled", fg="red")
