"""
================================================================================
StudyScout v1.0 - Google Scholar Provider
================================================================================
HTML scraper for Google Scholar results pages (no API, no authentication).

The page is fetched once and handed to scholar_parser.extract_papers(); this
module only turns the scraped fields into scored PaperResults and sorts them.
Scholar throttles aggressively, so an empty page is common and is not an
error: callers decide how to report "no papers".
================================================================================
"""

from datetime import datetime
from typing import List
import logging

from .base import BaseSearchProvider, ProviderError
from ..models import PaperResult, rank
from ..scholar_parser import extract_papers

logger = logging.getLogger(__name__)


class ScholarProvider(BaseSearchProvider):
    """Google Scholar scraper."""

    id = "scholar"
    name = "Google Scholar"
    base_url = "https://scholar.google.com/scholar"

    async def search_papers(self, query: str) -> List[PaperResult]:
        """
        Scrape Scholar and rank papers by citations minus age.

        Args:
            query: Search term

        Returns:
            Papers sorted by descending score (empty if no result blocks matched)

        Raises:
            ProviderError: If the page cannot be fetched or parsed
        """
        try:
            async with self._client() as client:
                html = await self._get_text(client, self.base_url, params={"q": query})

            current_year = datetime.now().year
            papers = [
                PaperResult(
                    title=scraped.title,
                    url=scraped.url,
                    summary=scraped.summary,
                    citations=scraped.citations,
                    year=scraped.year,
                    current_year=current_year
                )
                for scraped in extract_papers(html)
            ]
        except Exception as e:
            logger.error(f"Error fetching academic papers from Google Scholar: {e}")
            raise ProviderError("Could not fetch academic papers") from e

        logger.info(f"{self.id}: {len(papers)} papers for '{query}'")
        return rank(papers)
