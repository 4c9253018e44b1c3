"""
Page source retrieval through public CORS relay proxies.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
from urllib.parse import quote

import httpx

from ui2code.logger import setup_logger

logger = setup_logger(__name__)


def encode_uri_component(value: str) -> str:
    """Percent-encode a value the way JavaScript's encodeURIComponent does."""
    return quote(value, safe="!*'()")


@dataclass(frozen=True)
class ProxyCandidate:
    """A relay endpoint and the query syntax it expects for the target URL."""

    name: str
    build_url: Callable[[str], str]


# Each relay has its own query contract: allorigins wants a url= parameter,
# corsproxy takes the encoded target directly after "?".
DEFAULT_PROXIES: List[ProxyCandidate] = [
    ProxyCandidate(
        name="allorigins",
        build_url=lambda target: f"https://api.allorigins.win/get?url={encode_uri_component(target)}",
    ),
    ProxyCandidate(
        name="corsproxy",
        build_url=lambda target: f"https://corsproxy.io/?{encode_uri_component(target)}",
    ),
]


class SourceFetcher:
    """
    Fetches a page's source by trying relay proxies in order.

    The first candidate that answers with a 2xx status and non-empty content
    wins; later candidates are never contacted.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        proxies: Sequence[ProxyCandidate] = DEFAULT_PROXIES,
        timeout: float = 8.0,
    ) -> None:
        """
        Args:
            client: Shared async HTTP client.
            proxies: Ordered relay candidates.
            timeout: Per-candidate timeout in seconds.
        """
        self.client = client
        self.proxies = list(proxies)
        self.timeout = timeout

    async def fetch(self, url: str) -> Optional[str]:
        """
        Resolve the source document for ``url``.

        Returns:
            The document text, or None if every candidate failed.
        """
        for proxy in self.proxies:
            content = await self._try_proxy(proxy, url)
            if content:
                logger.info(f"✅ Fetched {len(content)} chars of {url} via {proxy.name}")
                return content

        logger.warning(f"⚠️ All {len(self.proxies)} proxies failed for {url}")
        return None

    async def _try_proxy(self, proxy: ProxyCandidate, url: str) -> Optional[str]:
        proxy_url = proxy.build_url(url)
        try:
            # Total budget for the attempt; httpx timeouts alone reset on every chunk read
            resp = await asyncio.wait_for(
                self.client.get(proxy_url, timeout=self.timeout), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            logger.warning(f"⚠️ Proxy {proxy.name} timed out after {self.timeout}s for {url}")
            return None
        except httpx.HTTPError as e:
            logger.warning(f"⚠️ Proxy {proxy.name} failed for {url}: {e!r}")
            return None

        if not resp.is_success:
            logger.warning(f"⚠️ Proxy {proxy.name} returned HTTP {resp.status_code} for {url}")
            return None

        return self._extract_contents(resp) or None

    @staticmethod
    def _extract_contents(resp: httpx.Response) -> Optional[str]:
        """
        Read the relay's JSON envelope ``contents`` field, or the raw body.
        """
        try:
            data = resp.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and "contents" in data:
            contents = data["contents"]
            return contents if isinstance(contents, str) else None

        return resp.text
