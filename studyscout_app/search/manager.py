"""
================================================================================
StudyScout v1.0 - Search Manager
================================================================================
Holds one configured instance of every provider and exposes the four search
operations the HTTP routes need.

The manager keeps configuration only. Providers open and close their HTTP
clients inside each call, so requests never share connections or results.

Usage:
    manager = SearchManager.from_config(app.config)
    page = run_async(manager.videos("linear algebra"))
================================================================================
"""

import asyncio
from typing import Any, Coroutine, Dict, List, Mapping, Optional, TypeVar
import logging

import httpx
from flask import current_app

from .models import ArticlePage, BlogPage, PaperResult, VideoPage
from .providers import (
    BaseSearchProvider, CustomSearchProvider, ScholarProvider, YouTubeProvider
)
from .scoring import DEFAULT_TRUSTED_DOMAIN

logger = logging.getLogger(__name__)

T = TypeVar('T')

EXTENSION_KEY = 'studyscout.search_manager'


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run a provider coroutine to completion from a sync Flask view.

    Each call gets its own event loop, closed afterwards, so nothing async
    survives the request.
    """
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


class SearchManager:
    """Entry point for video, article, paper and blog searches."""

    def __init__(
        self,
        youtube_api_key: Optional[str] = None,
        cse_api_key: Optional[str] = None,
        cse_cx: Optional[str] = None,
        trusted_domain: str = DEFAULT_TRUSTED_DOMAIN,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        common = {'timeout': timeout, 'transport': transport}
        self.youtube = YouTubeProvider(youtube_api_key, **common)
        self.custom_search = CustomSearchProvider(
            cse_api_key, cse_cx, trusted_domain=trusted_domain, **common
        )
        self.scholar = ScholarProvider(**common)

    @classmethod
    def from_config(cls, config: Mapping[str, Any], **kwargs) -> 'SearchManager':
        """Build a manager from a Flask config mapping."""
        return cls(
            youtube_api_key=config.get('YOUTUBE_API_KEY'),
            cse_api_key=config.get('GOOGLE_CUSTOM_SEARCH_API_KEY'),
            cse_cx=config.get('GOOGLE_CUSTOM_SEARCH_CX'),
            trusted_domain=config.get('TRUSTED_ARTICLE_DOMAIN') or DEFAULT_TRUSTED_DOMAIN,
            timeout=config.get('UPSTREAM_TIMEOUT'),
            **kwargs
        )

    @property
    def providers(self) -> List[BaseSearchProvider]:
        return [self.youtube, self.custom_search, self.scholar]

    def get_status(self) -> Dict[str, bool]:
        """Map provider id -> whether its credentials are configured."""
        return {provider.id: provider.is_configured for provider in self.providers}

    # =========================================================================
    # SEARCH OPERATIONS
    # =========================================================================

    async def videos(self, query: str, page_token: str = "") -> VideoPage:
        return await self.youtube.search_videos(query, page_token)

    async def articles(self, query: str, start: int = 1) -> ArticlePage:
        return await self.custom_search.search_articles(query, start)

    async def papers(self, query: str) -> List[PaperResult]:
        return await self.scholar.search_papers(query)

    async def blogs(self, query: str, start: int = 1) -> BlogPage:
        return await self.custom_search.search_blogs(query, start)


def get_search_manager() -> SearchManager:
    """Return the manager registered on the current app."""
    return current_app.extensions[EXTENSION_KEY]
