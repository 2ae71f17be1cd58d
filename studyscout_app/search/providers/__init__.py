"""Upstream search providers."""

from .base import BaseSearchProvider, ProviderError
from .custom_search import CustomSearchProvider
from .scholar import ScholarProvider
from .youtube import YouTubeProvider

__all__ = [
    'BaseSearchProvider',
    'CustomSearchProvider',
    'ProviderError',
    'ScholarProvider',
    'YouTubeProvider',
]
