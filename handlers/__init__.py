"""
Handlers package - One handler per release source.
"""

from handlers.base_handler import BaseHandler
from handlers.api_handler import APIHandler
from handlers.web_handler import WebPageHandler
from handlers.search_handler import SearchHandler
from handlers.release_handler import ReleaseHandler

__all__ = [
    'BaseHandler',
    'APIHandler',
    'WebPageHandler',
    'SearchHandler',
    'ReleaseHandler',
]
