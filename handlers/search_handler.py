"""
Discussion search handler.
Looks at the titles of the newest Hacker News stories for a fixed query.
"""

from typing import Dict, Any

from .base_handler import BaseHandler
from models.check_result import CheckResult

DEFAULT_SEARCH_URL = 'https://hn.algolia.com/api/v1/search_by_date'
ITEM_URL = 'https://news.ycombinator.com/item?id={}'


class SearchHandler(BaseHandler):
    """Handler for the HN Algolia search-by-date API."""

    def get_method_name(self) -> str:
        return "search"

    def _check(self) -> CheckResult:
        url = self.config.get('data_url') or DEFAULT_SEARCH_URL
        params = {
            'query': self.config.get('query', 'anthropic claude'),
            'tags': self.config.get('tags', 'story'),
            'hitsPerPage': self.config.get('hits_per_page', 20),
        }

        response = self.http_get(url, headers={'Accept': 'application/json'}, params=params)
        response.raise_for_status()

        data: Dict[str, Any] = response.json() or {}
        for hit in data.get('hits') or []:
            title = hit.get('title') or ''
            if self.classifier.classify(title):
                return CheckResult(
                    found=True,
                    model=self.classifier.extract_model_token(title),
                    source=ITEM_URL.format(hit.get('objectID', '')),
                )

        return CheckResult.not_found()
