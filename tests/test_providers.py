import asyncio
from datetime import datetime

import httpx
import pytest

from studyscout_app.search import ProviderError


YOUTUBE_SEARCH = "/youtube/v3/search"
YOUTUBE_VIDEOS = "/youtube/v3/videos"
CUSTOM_SEARCH = "/customsearch/v1"
SCHOLAR = "/scholar"


def _search_item(video_id, title):
    item = {
        "snippet": {
            "title": title,
            "thumbnails": {"medium": {"url": f"https://i.ytimg.com/vi/{video_id}/mqdefault.jpg"}},
        },
    }
    item["id"] = {"kind": "youtube#video", "videoId": video_id} if video_id else {"kind": "youtube#channel"}
    return item


def _stats(views, likes):
    return {"statistics": {"viewCount": str(views), "likeCount": str(likes)}}


# =============================================================================
# YOUTUBE
# =============================================================================

def test_videos_two_phase_fetch_and_ranking(manager, upstream):
    upstream.add(YOUTUBE_SEARCH, httpx.Response(200, json={
        "nextPageToken": "CDIQAA",
        "items": [
            _search_item("aaa", "Few views"),
            _search_item(None, "A channel"),
            _search_item("bbb", "Many views"),
        ],
    }))
    upstream.add(YOUTUBE_VIDEOS, httpx.Response(200, json={
        "items": [_stats(10, 1), _stats(5000, 300)],
    }))

    page = asyncio.run(manager.videos("calculus", "PREV"))

    assert upstream.paths == [YOUTUBE_SEARCH, YOUTUBE_VIDEOS]
    search_params = upstream.params(0)
    assert search_params["q"] == "calculus"
    assert search_params["maxResults"] == "50"
    assert search_params["pageToken"] == "PREV"
    assert search_params["key"] == "yt-key"
    assert upstream.params(1)["id"] == "aaa,bbb"

    assert [v.title for v in page.videos] == ["Many views", "Few views"]
    top = page.videos[0]
    assert top.url == "https://www.youtube.com/watch?v=bbb"
    assert top.views == 5000
    assert top.likes == 300
    assert top.thumbnail == "https://i.ytimg.com/vi/bbb/mqdefault.jpg"
    assert top.next_page_token == "CDIQAA"
    assert page.next_page_token == "CDIQAA"


def test_videos_without_ids_skip_statistics_call(manager, upstream):
    upstream.add(YOUTUBE_SEARCH, httpx.Response(200, json={"items": [_search_item(None, "A channel")]}))

    page = asyncio.run(manager.videos("calculus"))

    assert page.videos == []
    assert upstream.paths == [YOUTUBE_SEARCH]


def test_videos_missing_statistics_default_to_zero(manager, upstream):
    upstream.add(YOUTUBE_SEARCH, httpx.Response(200, json={"items": [
        _search_item("aaa", "Has stats"),
        _search_item("bbb", "No stats"),
    ]}))
    upstream.add(YOUTUBE_VIDEOS, httpx.Response(200, json={"items": [
        {"statistics": {"viewCount": "7", "likeCount": "hidden"}},
    ]}))

    page = asyncio.run(manager.videos("calculus"))
    by_title = {v.title: v for v in page.videos}

    assert by_title["Has stats"].views == 7
    assert by_title["Has stats"].likes == 0
    assert by_title["No stats"].views == 0
    assert by_title["No stats"].score == 0


def test_videos_statistics_failure_raises_provider_error(manager, upstream):
    upstream.add(YOUTUBE_SEARCH, httpx.Response(200, json={"items": [_search_item("aaa", "x")]}))
    upstream.add(YOUTUBE_VIDEOS, httpx.Response(403, json={"error": {"message": "quota"}}))

    with pytest.raises(ProviderError, match="Could not fetch YouTube data"):
        asyncio.run(manager.videos("calculus"))


def test_videos_network_failure_raises_provider_error(manager, upstream):
    upstream.add(YOUTUBE_SEARCH, httpx.ConnectError("connection refused"))

    with pytest.raises(ProviderError) as excinfo:
        asyncio.run(manager.videos("calculus"))

    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


# =============================================================================
# ARTICLES
# =============================================================================

def test_articles_ranked_with_trusted_bonus(manager, upstream):
    upstream.add(CUSTOM_SEARCH, httpx.Response(200, json={"items": [
        {"title": "Short", "link": "https://a.com/1", "snippet": "x" * 20, "displayLink": "a.com"},
        {"title": "Trusted", "link": "https://reputable-site.com/2", "snippet": "x" * 15,
         "displayLink": "reputable-site.com"},
        {"title": "Long", "link": "https://b.com/3", "snippet": "x" * 40, "displayLink": "b.com"},
    ]}))

    page = asyncio.run(manager.articles("graph theory", 5))

    assert upstream.params(0) == {"q": "graph theory", "key": "cse-key", "cx": "cse-cx", "start": "5"}
    assert [a.title for a in page.articles] == ["Long", "Trusted", "Short"]
    assert [a.score for a in page.articles] == [40, 25, 20]
    assert page.articles[1].url == "https://reputable-site.com/2"
    assert page.articles[1].source == "reputable-site.com"
    assert page.next_start_index == 15


def test_articles_without_items_is_an_error(manager, upstream):
    upstream.add(CUSTOM_SEARCH, httpx.Response(200, json={"searchInformation": {"totalResults": "0"}}))

    with pytest.raises(ProviderError, match="Could not fetch articles from Google Custom Search"):
        asyncio.run(manager.articles("nothing"))


# =============================================================================
# BLOGS
# =============================================================================

def test_blogs_filtered_in_upstream_order(manager, upstream):
    upstream.add(CUSTOM_SEARCH, httpx.Response(200, json={"items": [
        {"title": "Post", "link": "https://example.com/post/123", "snippet": "A tutorial",
         "pagemap": {"cse_image": [{"src": "https://example.com/img.png"}]}},
        {"title": "Docs", "link": "https://docs.example.com/ref", "snippet": "Reference manual"},
        {"title": "Snippet", "link": "https://example.com/a", "snippet": "From our blog archive"},
        {"title": "Blog", "link": "https://blog.example.com/x", "snippet": ""},
    ]}))

    page = asyncio.run(manager.blogs("rust", 1))

    assert upstream.params(0)["q"] == "rust blog"
    assert [b.title for b in page.blogs] == ["Post", "Snippet", "Blog"]
    assert page.blogs[0].image_url == "https://example.com/img.png"
    assert page.blogs[1].image_url is None
    assert page.next_start_index == 11


def test_blogs_without_items_is_empty(manager, upstream):
    upstream.add(CUSTOM_SEARCH, httpx.Response(200, json={}))

    page = asyncio.run(manager.blogs("rust", 21))

    assert page.blogs == []
    assert page.next_start_index == 31


def test_blogs_failure_raises_provider_error(manager, upstream):
    upstream.add(CUSTOM_SEARCH, httpx.Response(500, text="backend error"))

    with pytest.raises(ProviderError, match="Could not fetch blog posts"):
        asyncio.run(manager.blogs("rust"))


# =============================================================================
# SCHOLAR
# =============================================================================

def _scholar_block(title, cited_by, year):
    return f"""
    <div class="gs_ri">
      <h3 class="gs_rt"><a href="https://papers.example/{title}">{title}</a></h3>
      <div class="gs_a">A Author - Journal, {year} - example.org</div>
      <div class="gs_rs">Summary of {title}</div>
      <div class="gs_fl"><a>Cited by {cited_by}</a></div>
    </div>
    """


def test_papers_ranked_by_citations_minus_age(manager, upstream):
    this_year = datetime.now().year
    html = "<html><body>{}{}</body></html>".format(
        _scholar_block("old", 12, this_year - 10),
        _scholar_block("recent", 10, this_year - 3),
    )
    upstream.add(SCHOLAR, httpx.Response(200, text=html))

    papers = asyncio.run(manager.papers("graph neural networks"))

    assert upstream.params(0) == {"q": "graph neural networks"}
    assert [p.title for p in papers] == ["recent", "old"]
    assert papers[0].score == 7
    assert papers[1].score == 2
    assert papers[0].to_dict()["date"] == str(this_year - 3)


def test_papers_empty_page(manager, upstream):
    upstream.add(SCHOLAR, httpx.Response(200, text="<html><body></body></html>"))

    assert asyncio.run(manager.papers("zzzz")) == []


def test_papers_blocked_raises_provider_error(manager, upstream):
    upstream.add(SCHOLAR, httpx.Response(429, text="Too many requests"))

    with pytest.raises(ProviderError, match="Could not fetch academic papers"):
        asyncio.run(manager.papers("anything"))


def test_manager_reports_missing_credentials():
    from studyscout_app.search import SearchManager

    status = SearchManager(youtube_api_key="k").get_status()

    assert status == {"youtube": True, "google_cse": False, "scholar": True}
