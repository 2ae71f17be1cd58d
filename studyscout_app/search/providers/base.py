"""
================================================================================
StudyScout v1.0 - Base Search Provider
================================================================================
Abstract base class for all upstream search providers.

Providers wrap one third-party service each:
  - YouTube Data API v3 (videos)
  - Google Custom Search JSON API (articles, blogs)
  - Google Scholar results page (papers, HTML scrape)

Every call opens its own HTTP client and closes it before returning, so no
connection or state outlives the request that triggered it. There is no
retry: the first failure is logged and surfaced as a ProviderError.
================================================================================
"""

from abc import ABC
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional
import logging

import httpx


logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Upstream failure, carrying a message that is safe to show to clients."""


class BaseSearchProvider(ABC):
    """
    Abstract base class for search providers.

    Subclasses set their identification attributes and expose one coroutine
    per search operation. The helpers below give them:
      - a request-scoped httpx.AsyncClient (`_client()`)
      - JSON and text GETs that raise on non-2xx responses
    """

    # Provider identification
    id: str = "base"
    name: str = "Base Provider"

    # API configuration
    base_url: str = ""

    # User-Agent (Scholar refuses the default httpx agent)
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Args:
            timeout: Request timeout in seconds, None for the httpx default
            transport: Optional transport override (tests use MockTransport)
        """
        self.timeout = timeout
        self._transport = transport

    @property
    def is_configured(self) -> bool:
        """True when every credential the provider needs is present."""
        return True

    @asynccontextmanager
    async def _client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Open an HTTP client for the duration of one search."""
        kwargs: Dict[str, Any] = {
            'headers': {'User-Agent': self.user_agent},
            'follow_redirects': True,
        }
        if self.timeout is not None:
            kwargs['timeout'] = self.timeout
        if self._transport is not None:
            kwargs['transport'] = self._transport

        async with httpx.AsyncClient(**kwargs) as client:
            yield client

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        GET a JSON document.

        Raises:
            httpx.HTTPError: On network failure or non-2xx status
            ValueError: When the body is not a JSON object
        """
        response = await client.get(url, params=params)
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"{self.id}: Expected a JSON object, got {type(data).__name__}")
        return data

    async def _get_text(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: Optional[Dict[str, Any]] = None
    ) -> str:
        """GET a text document (HTML pages)."""
        response = await client.get(
            url,
            params=params,
            headers={'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8'}
        )
        response.raise_for_status()
        return response.text

    def __repr__(self):
        return f"<{self.__class__.__name__}(id='{self.id}', configured={self.is_configured})>"
