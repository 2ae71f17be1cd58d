# Load environment variables FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

import os
import time
import uuid
from typing import Any, Mapping, Optional

from flask import Flask, g, request
from flask_cors import CORS


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.environ.get(name, default).lower() in ('true', '1', 'yes')


def _env_float(name: str) -> Optional[float]:
    raw = os.environ.get(name, '').strip()
    return float(raw) if raw else None


def create_app(test_config: Optional[Mapping[str, Any]] = None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # =============================================================================
    # CONFIGURATION
    # =============================================================================
    app.json.sort_keys = False
    app.config.from_mapping(
        # Upstream credentials
        YOUTUBE_API_KEY=os.environ.get('YOUTUBE_API_KEY'),
        GOOGLE_CUSTOM_SEARCH_API_KEY=os.environ.get('GOOGLE_CUSTOM_SEARCH_API_KEY'),
        GOOGLE_CUSTOM_SEARCH_CX=os.environ.get('GOOGLE_CUSTOM_SEARCH_CX'),
        # Ranking / upstream behaviour
        TRUSTED_ARTICLE_DOMAIN=os.environ.get('TRUSTED_ARTICLE_DOMAIN', 'reputable-site.com'),
        UPSTREAM_TIMEOUT=_env_float('UPSTREAM_TIMEOUT'),
        # Server
        CORS_ORIGINS=os.environ.get('CORS_ORIGINS', '*'),
        HOST=os.environ.get('HOST', '127.0.0.1'),
        PORT=int(os.environ.get('PORT', '3000')),
        DEBUG=_env_flag('FLASK_DEBUG'),
    )
    if test_config is not None:
        app.config.from_mapping(test_config)

    # =============================================================================
    # LOGGING & CORS
    # =============================================================================
    from .log import log, debug_log_event

    origins = app.config['CORS_ORIGINS']
    if isinstance(origins, str) and origins != '*':
        origins = [origin.strip() for origin in origins.split(',') if origin.strip()]
    CORS(app, origins=origins)

    @app.before_request
    def assign_request_id():
        g.request_id = uuid.uuid4().hex[:12]
        g.request_start = time.time()

    @app.after_request
    def debug_request_log(response):
        duration_ms = None
        start_time = getattr(g, 'request_start', None)
        if start_time:
            duration_ms = int((time.time() - start_time) * 1000)
        debug_log_event({
            'event': 'request',
            'request_id': getattr(g, 'request_id', None),
            'method': request.method,
            'path': request.path,
            'query': request.query_string.decode('utf-8', errors='ignore'),
            'status': response.status_code,
            'duration_ms': duration_ms,
            'remote_addr': request.remote_addr,
        })
        return response

    @app.teardown_request
    def debug_exception_log(error=None):
        if not error:
            return
        debug_log_event({
            'event': 'exception',
            'request_id': getattr(g, 'request_id', None),
            'path': request.path,
            'error_type': error.__class__.__name__,
            'error': str(error)
        })

    # =============================================================================
    # SEARCH PROVIDERS
    # =============================================================================
    from .search import EXTENSION_KEY, SearchManager

    manager = SearchManager.from_config(app.config)
    app.extensions[EXTENSION_KEY] = manager

    for provider in manager.providers:
        if not provider.is_configured:
            log(f"⚠️ {provider.name}: credentials not set, requests will be rejected upstream")

    # =============================================================================
    # BLUEPRINTS & ROUTES
    # =============================================================================
    from .routes.search_api import search_bp

    app.register_blueprint(search_bp)

    return app

# App instance should be created by the caller (run.py or WSGI entrypoint)
