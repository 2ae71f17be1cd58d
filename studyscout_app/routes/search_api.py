"""
================================================================================
StudyScout v1.0 - Search API Routes
================================================================================
Flask blueprint exposing one GET endpoint per result type.

ENDPOINTS:
  GET /search?q=<term>&pageToken=<token>   - YouTube videos, ranked
  GET /articles?q=<term>&start=<int>       - Web articles, ranked
  GET /papers?q=<term>                     - Google Scholar papers, ranked
  GET /blogs?q=<term>&start=<int>          - Blog posts, upstream order

Invalid input is answered with 400 and a plain-text message; upstream
failures with 500 and {"error": message}.
================================================================================
"""

import logging

from flask import Blueprint, Response, jsonify, request

from ..log import log
from ..search import ProviderError, get_search_manager, run_async
from .validators import validate_query, validate_start_index

search_bp = Blueprint('search_api', __name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _bad_request(message: str) -> Response:
    return Response(message, status=400, mimetype='text/plain')


def _server_error(exc: Exception, what: str):
    if not isinstance(exc, ProviderError):
        log(f"❌ Unexpected {what} failure: {exc!r}", logging.ERROR)
    return jsonify({'error': str(exc)}), 500


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@search_bp.route('/search', methods=['GET'])
def search_videos():
    """Search YouTube. Optional query param: ?pageToken=<token>"""
    query, error = validate_query(request.args.get('q'))
    if error:
        return _bad_request(error)
    page_token = request.args.get('pageToken', '')

    log(f"🔍 Video search: {query}")
    try:
        page = run_async(get_search_manager().videos(query, page_token))
    except Exception as exc:
        return _server_error(exc, 'video search')

    return jsonify({'youtube': [video.to_dict() for video in page.videos]})


@search_bp.route('/articles', methods=['GET'])
def search_articles():
    """Search web articles. Optional query param: ?start=<1-based index>"""
    query, error = validate_query(request.args.get('q'))
    if error:
        return _bad_request(error)
    start, error = validate_start_index(request.args.get('start'))
    if error:
        return _bad_request(error)

    log(f"🔍 Article search: {query} (start={start})")
    try:
        page = run_async(get_search_manager().articles(query, start))
    except Exception as exc:
        return _server_error(exc, 'article search')

    return jsonify({
        'articles': [article.to_dict() for article in page.articles],
        'nextStartIndex': page.next_start_index
    })


@search_bp.route('/papers', methods=['GET'])
def search_papers():
    """Scrape Google Scholar. 404 when the page has no results."""
    query, error = validate_query(request.args.get('q'))
    if error:
        return _bad_request(error)

    log(f"🔍 Paper search: {query}")
    try:
        papers = run_async(get_search_manager().papers(query))
    except Exception as exc:
        return _server_error(exc, 'paper search')

    if not papers:
        return jsonify({'error': 'No papers found'}), 404
    return jsonify({'papers': [paper.to_dict() for paper in papers]})


@search_bp.route('/blogs', methods=['GET'])
def search_blogs():
    """Search blog posts. Optional query param: ?start=<1-based index>"""
    query, error = validate_query(request.args.get('q'))
    if error:
        return _bad_request(error)
    start, error = validate_start_index(request.args.get('start'))
    if error:
        return _bad_request(error)

    log(f"🔍 Blog search: {query} (start={start})")
    try:
        page = run_async(get_search_manager().blogs(query, start))
    except Exception as exc:
        return _server_error(exc, 'blog search')

    return jsonify({
        'blogs': [blog.to_dict() for blog in page.blogs],
        'nextStartIndex': page.next_start_index
    })


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@search_bp.app_errorhandler(404)
def not_found(error):
    """Handle 404 errors."""
    return jsonify({'error': 'Endpoint not found'}), 404


@search_bp.app_errorhandler(500)
def internal_error(error):
    """Handle 500 errors."""
    log(f"❌ Internal error: {error}", logging.ERROR)
    return jsonify({'error': 'Internal server error'}), 500
