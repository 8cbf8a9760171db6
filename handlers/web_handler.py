"""
Web page handler for vendor news and release-notes pages.
Breaks raw HTML into short text fragments and classifies each one.
"""

import re
from typing import Optional, Dict, Any, List

import requests

from .base_handler import BaseHandler
from models.check_result import CheckResult
from utils.classifier import ReleaseClassifier

DEFAULT_PAGES = [
    'https://www.anthropic.com/news',
    'https://www.anthropic.com/claude',
    'https://docs.anthropic.com/en/release-notes/overview',
]

# Fragments at or above this length are long prose blocks and are ignored
DEFAULT_MAX_FRAGMENT_LENGTH = 200

TAG_SPLIT = re.compile(r'[<>]')
ENTITY = re.compile(r'&[^;]+;')


def split_fragments(html: str) -> List[str]:
    """Split markup on angle brackets and blank out entities."""
    fragments = []
    for piece in TAG_SPLIT.split(html or ''):
        cleaned = ENTITY.sub(' ', piece).strip()
        if cleaned:
            fragments.append(cleaned)
    return fragments


class WebPageHandler(BaseHandler):
    """Handler for static HTML pages."""

    def __init__(self, config: Dict[str, Any], settings: Dict[str, Any] = None,
                 classifier: ReleaseClassifier = None):
        super().__init__(config, settings, classifier)
        self.max_fragment_length = int(
            config.get('max_fragment_length', DEFAULT_MAX_FRAGMENT_LENGTH)
        )

    def get_method_name(self) -> str:
        return "web"

    @property
    def urls(self) -> List[str]:
        return self.config.get('urls') or DEFAULT_PAGES

    def _check(self) -> CheckResult:
        for url in self.urls:
            try:
                response = self.http_get(url, headers={'Accept': 'text/html,application/xhtml+xml'})
            except requests.exceptions.RequestException as e:
                self.logger.warning(f"Page fetch failed ({url}): {e}")
                continue

            if not response.ok:
                self.logger.warning(f"Page fetch failed ({url}): HTTP {response.status_code}")
                continue

            token = self._find_in_html(response.text)
            if token:
                return CheckResult(found=True, model=token, source=url)

        return CheckResult.not_found()

    def _find_in_html(self, html: str) -> Optional[str]:
        """Return the matched token of the first qualifying fragment."""
        for fragment in split_fragments(html):
            if len(fragment) >= self.max_fragment_length:
                continue
            token = self.classifier.extract_model_token(fragment)
            if token:
                self.logger.debug(f"Matched fragment: {fragment!r}")
                return token
        return None
