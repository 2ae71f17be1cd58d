"""
Search aggregation package.

Providers fetch from YouTube, Google Custom Search and Google Scholar;
models/scoring turn their items into ranked records.
"""

from .manager import EXTENSION_KEY, SearchManager, get_search_manager, run_async
from .providers import ProviderError

__all__ = [
    'EXTENSION_KEY',
    'ProviderError',
    'SearchManager',
    'get_search_manager',
    'run_async',
]
