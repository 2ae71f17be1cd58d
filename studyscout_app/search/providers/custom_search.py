"""
================================================================================
StudyScout v1.0 - Google Custom Search Provider
================================================================================
REST client for the Google Custom Search JSON API.

Serves two endpoints from the same upstream call:
  - articles: every hit, ranked by snippet length + trusted-domain bonus
  - blogs:    the query is suffixed with "blog" and hits that do not look
              like blog posts are dropped; upstream order is kept

Pagination uses the API's 1-based `start` parameter; each page holds 10 hits.

API Docs: https://developers.google.com/custom-search/v1/reference/rest/v1/cse/list
================================================================================
"""

from typing import Any, Dict, List, Optional
import logging

from .base import BaseSearchProvider, ProviderError
from ..models import ArticlePage, ArticleResult, BlogPage, BlogPost, rank
from ..scoring import DEFAULT_TRUSTED_DOMAIN

logger = logging.getLogger(__name__)

PAGE_SIZE = 10

# Substrings that mark a hit as a blog post (checked in link and snippet)
BLOG_MARKERS = ("blog", ".blog.", "post")


def looks_like_blog(link: str, snippet: str) -> bool:
    """True if the link or snippet contains any blog marker."""
    haystacks = (link or "", snippet or "")
    return any(marker in text for marker in BLOG_MARKERS for text in haystacks)


class CustomSearchProvider(BaseSearchProvider):
    """Google Custom Search provider (API key + search engine id)."""

    id = "google_cse"
    name = "Google Custom Search"
    base_url = "https://www.googleapis.com/customsearch/v1"

    def __init__(
        self,
        api_key: Optional[str],
        cx: Optional[str],
        trusted_domain: str = DEFAULT_TRUSTED_DOMAIN,
        **kwargs
    ):
        super().__init__(**kwargs)
        self.api_key = api_key
        self.cx = cx
        self.trusted_domain = trusted_domain

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.cx)

    async def _search(self, query: str, start: int) -> List[Dict[str, Any]]:
        """Run one Custom Search query and return its raw items (may be empty)."""
        async with self._client() as client:
            data = await self._get_json(client, self.base_url, params={
                "q": query,
                "key": self.api_key or "",
                "cx": self.cx or "",
                "start": start,
            })
        return data.get("items") or []

    # =========================================================================
    # ARTICLES
    # =========================================================================

    async def search_articles(self, query: str, start: int = 1) -> ArticlePage:
        """
        Search the web and rank hits as articles.

        Args:
            query: Search term
            start: 1-based index of the first hit

        Returns:
            ArticlePage sorted by descending score, with next_start_index = start + 10

        Raises:
            ProviderError: If the call fails or returns no items
        """
        try:
            items = await self._search(query, start)
            if not items:
                raise LookupError("No articles found")
            articles = [self._parse_article(item) for item in items]
        except Exception as e:
            logger.error(f"Error fetching articles from Google Custom Search: {e}")
            raise ProviderError("Could not fetch articles from Google Custom Search") from e

        logger.info(f"{self.id}: {len(articles)} articles for '{query}' (start={start})")
        return ArticlePage(articles=rank(articles), next_start_index=start + PAGE_SIZE)

    def _parse_article(self, item: Dict[str, Any]) -> ArticleResult:
        return ArticleResult(
            title=item.get("title", ""),
            url=item.get("link", ""),
            snippet=item.get("snippet") or "",
            source=item.get("displayLink") or "",
            trusted_domain=self.trusted_domain
        )

    # =========================================================================
    # BLOGS
    # =========================================================================

    async def search_blogs(self, query: str, start: int = 1) -> BlogPage:
        """
        Search the web for blog posts about the query.

        Args:
            query: Search term ("blog" is appended before searching)
            start: 1-based index of the first hit

        Returns:
            BlogPage in upstream order, with next_start_index = start + 10

        Raises:
            ProviderError: If the call fails
        """
        try:
            items = await self._search(f"{query} blog", start)
            blogs = [
                self._parse_blog(item) for item in items
                if looks_like_blog(item.get("link", ""), item.get("snippet", ""))
            ]
        except Exception as e:
            logger.error(f"Error fetching blog posts: {e}")
            raise ProviderError("Could not fetch blog posts") from e

        logger.info(f"{self.id}: {len(blogs)}/{len(items)} blog-like hits for '{query}'")
        return BlogPage(blogs=blogs, next_start_index=start + PAGE_SIZE)

    @staticmethod
    def _parse_blog(item: Dict[str, Any]) -> BlogPost:
        pagemap = item.get("pagemap") or {}
        images = pagemap.get("cse_image") or []
        image_url = images[0].get("src") if images and isinstance(images[0], dict) else None

        return BlogPost(
            title=item.get("title", ""),
            url=item.get("link", ""),
            snippet=item.get("snippet") or "",
            image_url=image_url
        )
