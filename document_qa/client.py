"""Async HTTP client for the chat-completion service.

One request per call, no retry or backoff. Every failure surfaces as a
ServiceError carrying the HTTP status when a response was received.
"""

from typing import Any, Optional, Protocol

import httpx

from document_qa.config import CompletionConfig
from document_qa.exceptions import ServiceError
from document_qa.logger import Timer, get_logger

logger = get_logger(__name__)


class CompletionBackend(Protocol):
    async def complete(self, system_instruction: str, user_prompt: str, credential: str) -> str:
        ...


class CompletionClient:
    """Sends a (system instruction, user prompt) pair and returns the first choice's text."""

    def __init__(
        self,
        config: Optional[CompletionConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or CompletionConfig()
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url.rstrip("/"),
            timeout=httpx.Timeout(
                self.config.timeout_seconds,
                connect=self.config.connect_timeout_seconds,
            ),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "CompletionClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    def _build_payload(self, system_instruction: str, user_prompt: str) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": user_prompt},
            ],
        }
        if self.config.temperature is not None:
            payload["temperature"] = self.config.temperature
        return payload

    async def complete(self, system_instruction: str, user_prompt: str, credential: str) -> str:
        """Request one completion.

        Raises:
            ServiceError: On transport failure, non-success status or a malformed body
        """
        headers = {"Authorization": f"Bearer {credential}"}
        payload = self._build_payload(system_instruction, user_prompt)

        with Timer("completion") as timer:
            try:
                resp = await self._client.post("/chat/completions", json=payload, headers=headers)
            except httpx.HTTPError as exc:
                logger.warning(
                    "Completion request failed",
                    extra_data={"error_type": type(exc).__name__, "error": str(exc)},
                )
                raise ServiceError(None, f"Completion request failed: {exc}") from exc

        if not resp.is_success:
            message = self._error_message(resp)
            logger.error(
                "Completion service returned an error",
                extra_data={"status": resp.status_code, "detail": message},
            )
            raise ServiceError(resp.status_code, message)

        try:
            content = resp.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise ServiceError(resp.status_code, "Malformed completion response") from exc
        if not isinstance(content, str):
            raise ServiceError(resp.status_code, "Completion response has no text content")

        logger.debug(
            "Completion received",
            extra_data={
                "model": self.config.model,
                "response_chars": len(content),
                "completion_time_ms": timer.get_elapsed_ms(),
            },
        )
        return content

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        try:
            error = resp.json().get("error")
        except (ValueError, AttributeError):
            error = None
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        return resp.reason_phrase or f"HTTP {resp.status_code}"
