from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from ui2code.logger import setup_logger

logger = setup_logger(__name__)

Part = Dict[str, Any]


@dataclass
class GenerationOutcome:
    """Generated text, or the error message the service reported."""

    text: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def text_part(text: str) -> Part:
    return {"text": text}


def image_part(data: str, mime_type: str) -> Part:
    return {"inline_data": {"mime_type": mime_type, "data": data}}


class GeminiClient:
    """
    Minimal client for Gemini's generateContent REST endpoint.

    One call per ``generate``; failures are not retried.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate(self, parts: List[Part]) -> GenerationOutcome:
        """
        Send a single-turn multimodal request.

        Args:
            parts: Ordered content parts (see ``text_part`` / ``image_part``).

        Returns:
            GenerationOutcome with the first candidate's text, or the
            service's ``error.message``.

        Raises:
            httpx.HTTPError on transport failures.
        """
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self._api_key,
        }
        body: Dict[str, Any] = {"contents": [{"parts": parts}]}

        logger.info(f"🤖 Calling {self.model} with {len(parts)} part(s)")
        resp = await self._client.post(
            self.endpoint, headers=headers, json=body, timeout=self.timeout
        )

        try:
            data = resp.json()
        except ValueError:
            logger.error(f"❌ Gemini returned non-JSON body (HTTP {resp.status_code})")
            return GenerationOutcome(
                error=f"Generation service returned HTTP {resp.status_code}"
            )

        return self._parse_response(data)

    @staticmethod
    def _parse_response(data: Any) -> GenerationOutcome:
        if not isinstance(data, dict):
            return GenerationOutcome(error="Generation service returned an unexpected payload")

        error = data.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else str(error)
            logger.warning(f"⚠️ Gemini reported an error: {message}")
            return GenerationOutcome(error=message or "Generation service error")

        try:
            text = data["candidates"][0]["content"]["parts"][0].get("text") or ""
        except (KeyError, IndexError, TypeError, AttributeError):
            text = ""
        return GenerationOutcome(text=text)
