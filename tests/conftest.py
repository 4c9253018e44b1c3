"""Pytest configuration and fixtures."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple, Type, Union

import httpx
import pytest

from ui2code.agent.converter import Converter
from ui2code.config import Settings
from ui2code.llm.client import GeminiClient
from ui2code.loader.source_fetcher import SourceFetcher

GEMINI_HOST = "generativelanguage.googleapis.com"
ALLORIGINS_HOST = "api.allorigins.win"
CORSPROXY_HOST = "corsproxy.io"

# (status, json_body) or (status, raw_text) or an httpx exception class
Reply = Union[Tuple[int, Any], Type[httpx.HTTPError]]


def gemini_text(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def gemini_error(message: str) -> Dict[str, Any]:
    return {"error": {"code": 400, "message": message, "status": "INVALID_ARGUMENT"}}


class FakeUpstream:
    """Scripted stand-in for the CORS relays and the Gemini REST API."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.proxies: Dict[str, Reply] = {}
        self.gemini_replies: List[Reply] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host

        if host == GEMINI_HOST:
            reply = self.gemini_replies.pop(0)
        else:
            reply = self.proxies.get(host, httpx.ConnectError)

        if isinstance(reply, type):
            raise reply(f"scripted failure for {host}", request=request)

        status, body = reply
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    def hosts(self) -> List[str]:
        return [r.url.host for r in self.requests]

    def gemini_requests(self) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.host == GEMINI_HOST]

    def gemini_parts(self, index: int = 0) -> List[Dict[str, Any]]:
        body = json.loads(self.gemini_requests()[index].content)
        return body["contents"][0]["parts"]


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def http_client(upstream: FakeUpstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, gemini_api_key="test-key", gemini_model="gemini-test")


@pytest.fixture
def gemini(http_client: httpx.AsyncClient, test_settings: Settings) -> GeminiClient:
    return GeminiClient(
        http_client,
        api_key=test_settings.gemini_api_key or "",
        model=test_settings.gemini_model,
    )


@pytest.fixture
def fetcher(http_client: httpx.AsyncClient) -> SourceFetcher:
    return SourceFetcher(http_client, timeout=1.0)


@pytest.fixture
def converter(
    test_settings: Settings, gemini: GeminiClient, fetcher: SourceFetcher
) -> Converter:
    return Converter(test_settings, gemini=gemini, fetcher=fetcher)


def proxy_source(html: str, host: Optional[str] = None) -> Tuple[int, Any]:
    """allorigins-style envelope (default) or raw corsproxy body."""
    if host == CORSPROXY_HOST:
        return 200, html
    return 200, {"contents": html, "status": {"http_code": 200}}
