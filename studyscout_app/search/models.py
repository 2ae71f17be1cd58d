"""
================================================================================
StudyScout v1.0 - Result Models
================================================================================
Standardized result records returned by every search provider.

No matter if we're reading the YouTube Data API or scraping Google Scholar,
the frontend always receives one of these structures. Records are built per
upstream item, scored once in __post_init__, and discarded with the response.
================================================================================
"""

from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from .scoring import (
    DEFAULT_TRUSTED_DOMAIN, article_score, paper_score, video_score
)


# =============================================================================
# SCORED RESULTS
# =============================================================================

@dataclass
class VideoResult:
    """A YouTube video merged with its view/like statistics."""
    title: str
    url: str
    thumbnail: Optional[str] = None
    views: int = 0
    likes: int = 0
    next_page_token: Optional[str] = None   # Cursor of the page this came from
    score: float = field(init=False, default=0.0)

    def __post_init__(self):
        self.score = video_score(self.views, self.likes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dictionary for API responses."""
        return {
            "title": self.title,
            "url": self.url,
            "thumbnail": self.thumbnail,
            "views": self.views,
            "likes": self.likes,
            "nextPageToken": self.next_page_token,
            "score": self.score
        }


@dataclass
class ArticleResult:
    """A web search hit ranked by snippet length and source domain."""
    title: str
    url: str
    snippet: str = ""
    source: str = ""                         # Display domain, e.g. "example.com"
    trusted_domain: str = field(default=DEFAULT_TRUSTED_DOMAIN, repr=False)
    score: float = field(init=False, default=0.0)

    def __post_init__(self):
        self.score = article_score(self.snippet, self.source, self.trusted_domain)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
            "source": self.source,
            "score": self.score
        }


@dataclass
class PaperResult:
    """
    A Google Scholar result.

    citations and year are best-effort values scraped from free text, so the
    score can be negative for old, rarely cited papers.
    """
    title: str
    url: str = ""
    summary: str = ""
    citations: int = 0
    year: Optional[int] = None
    current_year: Optional[int] = field(default=None, repr=False)
    score: float = field(init=False, default=0.0)

    def __post_init__(self):
        self.score = paper_score(self.citations, self.year, self.current_year)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "summary": self.summary,
            "citations": self.citations,
            "date": str(self.year) if self.year is not None else None,
            "score": self.score
        }


# =============================================================================
# UNSCORED RESULTS
# =============================================================================

@dataclass
class BlogPost:
    """A blog-like web search hit (filtered, never scored)."""
    title: str
    url: str
    snippet: str = ""
    image_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
            "imageUrl": self.image_url
        }


# =============================================================================
# PAGES
# =============================================================================

@dataclass
class VideoPage:
    videos: List[VideoResult] = field(default_factory=list)
    next_page_token: Optional[str] = None


@dataclass
class ArticlePage:
    articles: List[ArticleResult] = field(default_factory=list)
    next_start_index: int = 11


@dataclass
class BlogPage:
    blogs: List[BlogPost] = field(default_factory=list)
    next_start_index: int = 11


def rank(results: list) -> list:
    """Sort scored results best-first (stable for equal scores)."""
    return sorted(results, key=lambda item: item.score, reverse=True)
