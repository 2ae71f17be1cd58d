"""
Google Scholar results-page extraction.

Raw HTML in, structured optional fields out. The citation and year values are
pulled from free text with regular expressions and will misfire whenever
Scholar changes its markup; keep that heuristic here so ranking code never
touches HTML.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup

# Result block and its parts
RESULT_SELECTOR = '.gs_ri'
TITLE_SELECTOR = '.gs_rt a'
SUMMARY_SELECTOR = '.gs_rs'
LINKS_SELECTOR = '.gs_fl'        # "Cited by N", "Related articles", ...
ATTRIBUTION_SELECTOR = '.gs_a'   # "A Author, B Author - Journal, 2019 - site.org"

INTEGER_PATTERN = re.compile(r'\d+')
YEAR_PATTERN = re.compile(r'\d{4}')


@dataclass
class ScrapedPaper:
    title: str
    url: str = ""
    summary: str = ""
    citations: int = 0
    year: Optional[int] = None


def _text(block, selector: str) -> str:
    elem = block.select_one(selector)
    return elem.get_text() if elem else ""


def extract_citations(text: str) -> int:
    """First integer in the text, 0 when there is none."""
    match = INTEGER_PATTERN.search(text or "")
    return int(match.group(0)) if match else 0


def extract_year(text: str) -> Optional[int]:
    """First 4-digit run in the text."""
    match = YEAR_PATTERN.search(text or "")
    return int(match.group(0)) if match else None


def extract_papers(html: str) -> List[ScrapedPaper]:
    """
    Parse every result block on a Scholar results page.

    Args:
        html: Raw page markup

    Returns:
        One ScrapedPaper per result block, in page order
    """
    soup = BeautifulSoup(html or "", 'html.parser')
    papers = []

    for block in soup.select(RESULT_SELECTOR):
        title_elem = block.select_one(TITLE_SELECTOR)
        title = title_elem.get_text() if title_elem else ""
        url = (title_elem.get('href') or "") if title_elem else ""

        papers.append(ScrapedPaper(
            title=title,
            url=url,
            summary=_text(block, SUMMARY_SELECTOR),
            citations=extract_citations(_text(block, LINKS_SELECTOR)),
            year=extract_year(_text(block, ATTRIBUTION_SELECTOR))
        ))

    return papers
