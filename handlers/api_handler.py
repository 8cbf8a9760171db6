"""
API handler for the vendor models catalog.
Lists available models and looks for the target among ids and display names.
"""

from typing import Optional, Dict, Any

from .base_handler import BaseHandler
from models.check_result import CheckResult
from utils.classifier import ReleaseClassifier

DEFAULT_MODELS_URL = 'https://api.anthropic.com/v1/models'
DEFAULT_API_VERSION = '2023-06-01'


class APIHandler(BaseHandler):
    """Handler for the authenticated models catalog endpoint."""

    def __init__(
        self,
        config: Dict[str, Any],
        settings: Dict[str, Any] = None,
        classifier: ReleaseClassifier = None,
        api_key: Optional[str] = None
    ):
        super().__init__(config, settings, classifier)
        self.api_key = api_key or config.get('api_key')
        self._last_etag: Optional[str] = None
        self._last_result = CheckResult.not_found()

    def get_method_name(self) -> str:
        return "api"

    @property
    def data_url(self) -> str:
        return self.config.get('data_url') or DEFAULT_MODELS_URL

    def _check(self) -> CheckResult:
        if not self.api_key:
            self.logger.debug("No API key configured, skipping models catalog")
            return CheckResult.not_found()

        headers = {
            'x-api-key': self.api_key,
            'anthropic-version': self.config.get('api_version', DEFAULT_API_VERSION),
            'Accept': 'application/json',
        }
        if self._last_etag:
            headers['If-None-Match'] = self._last_etag

        response = self.http_get(self.data_url, headers=headers)

        if response.status_code == 304:
            self.logger.debug(f"Catalog unchanged (ETag {self._last_etag})")
            return self._last_result

        etag = response.headers.get('ETag')
        if etag:
            self._last_etag = etag

        response.raise_for_status()

        self._last_result = self._parse_models(response.json())
        return self._last_result

    def _parse_models(self, payload: Any) -> CheckResult:
        """Scan the catalog entries; the first matching entry wins."""
        models = (payload or {}).get('data') or []

        for model in models:
            model_id = model.get('id') or ''
            display_name = model.get('display_name') or ''

            if self.classifier.classify(model_id) or self.classifier.classify(display_name):
                return CheckResult(found=True, model=model_id or display_name, source=self.data_url)

        return CheckResult.not_found()
