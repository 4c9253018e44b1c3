from __future__ import annotations

from typing import Optional, Union

import httpx

from ui2code.agent import prompts
from ui2code.config import Settings
from ui2code.llm.client import GeminiClient, image_part, text_part
from ui2code.loader.source_fetcher import SourceFetcher
from ui2code.logger import setup_logger
from ui2code.models import (
    CodeRequest,
    ConvertResponse,
    EditRequest,
    ImageRequest,
    UrlRequest,
)
from ui2code.utils.exceptions import GenerationError, InvalidRequestError, SourceFetchError
from ui2code.utils.helpers import split_data_uri, strip_code_fences

logger = setup_logger(__name__)

FETCH_FAILED_MESSAGE = "Could not fetch URL. Try pasting the source code directly."

AnyRequest = Union[CodeRequest, UrlRequest, ImageRequest, EditRequest]


class Converter:
    """
    Turns one analyze request into markup.

    Dispatches on the request variant; ``url`` and ``image`` go through the
    proxy fetcher, ``image`` and ``edit`` through Gemini.
    """

    def __init__(
        self,
        settings: Settings,
        gemini: GeminiClient,
        fetcher: SourceFetcher,
    ) -> None:
        self.settings = settings
        self.gemini = gemini
        self.fetcher = fetcher

    async def convert(self, request: AnyRequest) -> ConvertResponse:
        logger.info(f"📥 Handling '{request.type}' request")

        if isinstance(request, CodeRequest):
            return ConvertResponse(code=request.code)
        if isinstance(request, UrlRequest):
            return await self._from_url(request)
        if isinstance(request, ImageRequest):
            return await self._from_image(request)
        if isinstance(request, EditRequest):
            return await self._edit(request)

        raise InvalidRequestError("Invalid request type")

    # ------------------------------------------------------------------
    # Modes
    # ------------------------------------------------------------------
    async def _from_url(self, request: UrlRequest) -> ConvertResponse:
        source = await self.fetcher.fetch(request.url)
        if source is None:
            raise SourceFetchError(FETCH_FAILED_MESSAGE)
        return ConvertResponse(code=source)

    async def _from_image(self, request: ImageRequest) -> ConvertResponse:
        mime_type, data = split_data_uri(
            request.image_base64, self.settings.default_image_mime_type
        )
        screenshot = image_part(data, mime_type)

        # STEP 1: Resolve the page URL (supplied, or read off the screenshot)
        url = request.url or await self.extract_url(screenshot)

        # STEP 2: Page source is optional context; a failed fetch is not an error
        source: Optional[str] = None
        if url:
            source = await self.fetcher.fetch(url)
            if source is None:
                logger.info(f"ℹ️ Continuing without source for {url}")

        # STEP 3: Image first, then the instruction
        prompt = prompts.screenshot_prompt(
            source=source, url=url, char_limit=self.settings.source_char_limit
        )
        markup = await self._generate_markup([screenshot, text_part(prompt)])

        return ConvertResponse(code=markup, detected_url=url)

    async def _edit(self, request: EditRequest) -> ConvertResponse:
        prompt = prompts.edit_prompt(request.current_code, request.instruction)
        markup = await self._generate_markup([text_part(prompt)])
        return ConvertResponse(code=markup)

    # ------------------------------------------------------------------
    # Generation helpers
    # ------------------------------------------------------------------
    async def extract_url(self, screenshot: dict) -> Optional[str]:
        """
        Ask the model for a URL visible in the screenshot.

        Returns:
            The URL if the reply starts with "http", else None.
        """
        try:
            outcome = await self.gemini.generate(
                [screenshot, text_part(prompts.url_extraction_prompt())]
            )
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ URL extraction call failed: {e!r}")
            return None

        if not outcome.ok:
            logger.warning(f"⚠️ URL extraction skipped: {outcome.error}")
            return None

        candidate = outcome.text.strip()
        if candidate.startswith("http"):
            logger.info(f"🔗 Detected URL in screenshot: {candidate}")
            return candidate

        logger.info("ℹ️ No URL found in screenshot")
        return None

    async def _generate_markup(self, parts: list) -> str:
        outcome = await self.gemini.generate(parts)
        if not outcome.ok:
            raise GenerationError(outcome.error or "Generation service error")
        return strip_code_fences(outcome.text)
