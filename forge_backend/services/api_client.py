"""
Generation backends - how the orchestrator reaches the generation endpoint
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError as PydanticValidationError

from ..models.generation import GenerateResponse, RequestType
from .errors import ForgeError, UpstreamError

logger = logging.getLogger(__name__)


class GenerationBackend(Protocol):
    """Anything that can answer a prompt and store a generated file"""

    async def generate(self, prompt: str, request_type: RequestType) -> GenerateResponse: ...

    async def save_file(self, file_name: str, content: str, language: str) -> None: ...


class HttpGenerationBackend:
    """Talks to a running server over HTTP"""

    def __init__(self, base_url: str, timeout_seconds: float = 30, session_id: str | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session_id = session_id

    @classmethod
    def from_config(cls, config: dict[str, Any], session_id: str | None = None) -> "HttpGenerationBackend":
        client = config.get("client", {})
        return cls(
            client.get("base_url", "http://127.0.0.1:5000"),
            client.get("timeout_seconds", 30),
            session_id=session_id,
        )

    @asynccontextmanager
    async def _request(self, path: str, payload: dict[str, Any]):
        """POST ``payload`` to ``path``; any failure surfaces as UpstreamError"""
        url = f"{self.base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=payload) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error("Generation API error (%s): %s", response.status, error_text)
                        raise UpstreamError(f"Generation API error ({response.status}): {error_text}")
                    yield response
        except asyncio.TimeoutError as e:
            raise UpstreamError(f"Request to {url} timed out after {self.timeout_seconds}s") from e
        except aiohttp.ClientError as e:
            raise UpstreamError(f"Network error calling {url}: {e}") from e

    async def generate(self, prompt: str, request_type: RequestType) -> GenerateResponse:
        payload = {"prompt": prompt, "requestType": RequestType(request_type).value}
        if self.session_id:
            payload["sessionId"] = self.session_id

        async with self._request("/generate", payload) as response:
            try:
                data = await response.json()
            except (aiohttp.ContentTypeError, ValueError) as e:
                raise UpstreamError(f"Invalid JSON from generation API: {e}") from e

        try:
            result = GenerateResponse.model_validate(data)
        except PydanticValidationError as e:
            raise UpstreamError(f"Unexpected generation API response: {e}") from e
        if not result.success:
            raise UpstreamError("Generation API reported failure")
        if result.session_id:
            self.session_id = result.session_id
        return result

    async def save_file(self, file_name: str, content: str, language: str) -> None:
        payload = {"fileName": file_name, "content": content, "language": language}
        async with self._request("/files", payload):
            logger.info("File created: %s", file_name)


class InProcessBackend:
    """Calls the generation service directly, for orchestrators running inside the server"""

    def __init__(self, service, session_id: str):
        self.service = service
        self.session_id = session_id

    async def generate(self, prompt: str, request_type: RequestType) -> GenerateResponse:
        try:
            return self.service.generate(prompt, request_type, self.session_id)
        except (ForgeError, OSError) as e:
            raise UpstreamError(str(e)) from e

    async def save_file(self, file_name: str, content: str, language: str) -> None:
        try:
            self.service.save_file(file_name, content)
        except (ForgeError, OSError) as e:
            raise UpstreamError(str(e)) from e
