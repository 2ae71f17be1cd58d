"""
Heuristic relevance scores for each result type.

The weights are fixed and intentionally simple; results are compared only
against other results of the same type within a single response.
"""

from datetime import datetime
from typing import Optional

# Video weights
VIEWS_WEIGHT = 0.5
LIKES_WEIGHT = 0.3
ENGAGEMENT_WEIGHT = 0.2

# Article bonus for results hosted on the trusted domain
TRUSTED_DOMAIN_BONUS = 10
DEFAULT_TRUSTED_DOMAIN = "reputable-site.com"


def engagement_rate(views: int, likes: int) -> float:
    """Likes per view, 0 for a video nobody has watched."""
    if views == 0:
        return 0.0
    return likes / views


def video_score(views: int, likes: int) -> float:
    rate = engagement_rate(views, likes)
    return (
        views * VIEWS_WEIGHT
        + likes * LIKES_WEIGHT
        + rate * 100 * ENGAGEMENT_WEIGHT
    )


def article_score(snippet: str, source: str, trusted_domain: str = DEFAULT_TRUSTED_DOMAIN) -> float:
    """Snippet length, plus a flat bonus when the source is the trusted domain."""
    relevance = len(snippet or "")
    bonus = TRUSTED_DOMAIN_BONUS if trusted_domain and trusted_domain in (source or "") else 0
    return float(relevance + bonus)


def paper_score(citations: int, year: Optional[int], current_year: Optional[int] = None) -> float:
    """
    Citation count minus years since publication.

    Args:
        citations: Citation count (0 when unknown)
        year: Publication year, or None when it could not be extracted
        current_year: Reference year, defaults to the current calendar year

    Returns:
        Score, negative for old papers with few citations
    """
    if year is None:
        return float(citations)
    if current_year is None:
        current_year = datetime.now().year
    return float(citations - (current_year - year))
