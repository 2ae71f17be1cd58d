"""
================================================================================
StudyScout v1.0 - YouTube Provider
================================================================================
REST client for the YouTube Data API v3.

Two strictly ordered calls per search:
  1. /search      -> up to 50 results for the query (ids, titles, thumbnails)
  2. /videos      -> view and like counts for the ids from step 1

Statistics are merged back onto the search results by position, then every
video is scored and the list is sorted best-first.

API Docs: https://developers.google.com/youtube/v3/docs
================================================================================
"""

from typing import Any, Dict, Optional
import logging

from .base import BaseSearchProvider, ProviderError
from ..models import VideoPage, VideoResult, rank

logger = logging.getLogger(__name__)


def _to_count(value: Any) -> int:
    """Parse a statistics counter ("12345"), 0 when missing or malformed."""
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


class YouTubeProvider(BaseSearchProvider):
    """YouTube Data API v3 provider (API-key authenticated)."""

    id = "youtube"
    name = "YouTube"
    base_url = "https://www.googleapis.com/youtube/v3"

    max_results = 50
    watch_url = "https://www.youtube.com/watch?v="

    def __init__(self, api_key: Optional[str], **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def search_videos(self, query: str, page_token: str = "") -> VideoPage:
        """
        Search YouTube and rank the results by views, likes and engagement.

        Args:
            query: Search term
            page_token: Cursor returned by a previous search, "" for page 1

        Returns:
            VideoPage with videos sorted by descending score

        Raises:
            ProviderError: If either API call fails
        """
        try:
            async with self._client() as client:
                search = await self._get_json(client, f"{self.base_url}/search", params={
                    "part": "snippet",
                    "maxResults": self.max_results,
                    "q": query,
                    "key": self.api_key or "",
                    "pageToken": page_token or "",
                })

                items = [item for item in search.get("items") or [] if self._video_id(item)]
                next_page_token = search.get("nextPageToken")
                if not items:
                    logger.info(f"{self.id}: No video ids for '{query}'")
                    return VideoPage(videos=[], next_page_token=next_page_token)

                video_ids = [self._video_id(item) for item in items]
                stats = await self._get_json(client, f"{self.base_url}/videos", params={
                    "part": "statistics",
                    "id": ",".join(video_ids),
                    "key": self.api_key or "",
                })

            stats_items = stats.get("items") or []
            videos = [
                self._parse_video(item, stats_items[index] if index < len(stats_items) else {}, next_page_token)
                for index, item in enumerate(items)
            ]

        except Exception as e:
            logger.error(f"Error fetching YouTube data: {e}")
            raise ProviderError("Could not fetch YouTube data") from e

        logger.info(f"{self.id}: {len(videos)} videos for '{query}'")
        return VideoPage(videos=rank(videos), next_page_token=next_page_token)

    @staticmethod
    def _video_id(item: Dict[str, Any]) -> Optional[str]:
        item_id = item.get("id")
        if isinstance(item_id, dict):
            return item_id.get("videoId")
        return None

    def _parse_video(
        self,
        item: Dict[str, Any],
        stats_item: Dict[str, Any],
        next_page_token: Optional[str]
    ) -> VideoResult:
        """Build a VideoResult from a search item and its statistics entry."""
        snippet = item.get("snippet") or {}
        thumbnails = snippet.get("thumbnails") or {}
        medium = thumbnails.get("medium") or {}
        statistics = stats_item.get("statistics") or {}

        return VideoResult(
            title=snippet.get("title", ""),
            url=f"{self.watch_url}{self._video_id(item)}",
            thumbnail=medium.get("url"),
            views=_to_count(statistics.get("viewCount")),
            likes=_to_count(statistics.get("likeCount")),
            next_page_token=next_page_token
        )
