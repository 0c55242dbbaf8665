"""
Adapter: OpenRouter chat completions.

Implements CompletionPort over the OpenAI-compatible `/chat/completions`
endpoint with httpx. Streamed responses arrive as server-sent events:
one `data: {json}` line per chunk, terminated by `data: [DONE]`.

Provider errors are normalised to CompletionError carrying the
provider's error code when it sends one.
"""

import json
import logging
from typing import Any, AsyncGenerator, Optional

import httpx

from visionchat.domain.chat.entities import CompletionChunk, PromptMessage
from visionchat.domain.chat.errors import CompletionError
from visionchat.domain.chat.ports import CompletionPort

logger = logging.getLogger(__name__)

SSE_DATA_PREFIX = "data:"
SSE_DONE = "[DONE]"


def _error_from_body(status_code: int, body: bytes) -> CompletionError:
    """Build a CompletionError from an error response body."""
    message = f"Completion request failed with status {status_code}"
    code: Optional[str] = None
    try:
        error = json.loads(body).get("error") or {}
    except (ValueError, AttributeError):
        error = {}
    if isinstance(error, dict):
        message = error.get("message") or message
        raw_code = error.get("code") or error.get("type")
        code = str(raw_code) if raw_code is not None else None
    if code is None:
        code = {
            401: "invalid_api_key",
            402: "insufficient_quota",
            404: "model_not_found",
            429: "insufficient_quota",
        }.get(status_code)
    return CompletionError(message, code=code)


def parse_sse_line(line: str) -> Optional[CompletionChunk]:
    """Turn one SSE line of a streamed completion into a chunk.

    Returns None for keep-alive comments, blank lines, and the final
    `[DONE]` marker.

    Raises:
        CompletionError: If the provider embeds an error in the stream.
    """
    line = line.strip()
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    data = line[len(SSE_DATA_PREFIX):].strip()
    if not data or data == SSE_DONE:
        return None

    try:
        payload = json.loads(data)
    except ValueError:
        logger.warning("Skipping malformed stream line")
        return None

    if "error" in payload:
        error = payload["error"]
        if not isinstance(error, dict):
            error = {"message": str(error)}
        raise CompletionError(
            error.get("message", "An error occurred during streaming"),
            code=error.get("code"),
        )

    choices = payload.get("choices") or []
    if not choices:
        return None
    choice = choices[0]
    delta = choice.get("delta") or {}
    return CompletionChunk(
        content=delta.get("content"),
        finish_reason=choice.get("finish_reason"),
    )


class OpenRouterCompletionAdapter(CompletionPort):
    """Chat completions against OpenRouter (or any OpenAI-compatible API)."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://openrouter.ai/api/v1",
        site_url: str = "http://localhost:3000",
        app_title: str = "VisionChat AI",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": site_url,
            "X-Title": app_title,
        }
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    @staticmethod
    def _body(
        messages: list[PromptMessage],
        model: str,
        max_tokens: int,
        temperature: float,
        stream: bool,
    ) -> dict[str, Any]:
        return {
            "model": model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
            "stream": stream,
        }

    async def stream(
        self,
        messages: list[PromptMessage],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> AsyncGenerator[CompletionChunk, None]:
        body = self._body(messages, model, max_tokens, temperature, stream=True)
        try:
            async with self._client() as client:
                async with client.stream(
                    "POST", self._url, json=body, headers=self._headers
                ) as response:
                    if response.status_code >= 400:
                        raise _error_from_body(response.status_code, await response.aread())
                    async for line in response.aiter_lines():
                        chunk = parse_sse_line(line)
                        if chunk is not None:
                            yield chunk
        except httpx.HTTPError as exc:
            logger.error("Completion stream transport error: %s", type(exc).__name__)
            raise CompletionError(f"Completion provider unreachable: {exc}") from exc

    async def complete(
        self,
        messages: list[PromptMessage],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        body = self._body(messages, model, max_tokens, temperature, stream=False)
        try:
            async with self._client() as client:
                response = await client.post(self._url, json=body, headers=self._headers)
        except httpx.HTTPError as exc:
            logger.error("Completion transport error: %s", type(exc).__name__)
            raise CompletionError(f"Completion provider unreachable: {exc}") from exc

        if response.status_code >= 400:
            raise _error_from_body(response.status_code, response.content)

        try:
            choices = response.json().get("choices") or []
        except ValueError as exc:
            raise CompletionError("Malformed completion response") from exc
        if not choices:
            return ""
        message = choices[0].get("message") or {}
        return message.get("content") or ""
