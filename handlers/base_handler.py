"""
Abstract base handler for all release sources.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any
import logging

import requests

from models.check_result import CheckResult
from utils.classifier import ReleaseClassifier

DEFAULT_USER_AGENT = 'Sonnet5Checker/1.0'


class BaseHandler(ABC):
    """Abstract base class for all source handlers."""

    def __init__(
        self,
        config: Dict[str, Any],
        settings: Dict[str, Any] = None,
        classifier: ReleaseClassifier = None
    ):
        """
        Initialize handler with source configuration.

        Args:
            config: Source configuration dictionary
            settings: Application settings (http section is used)
            classifier: Classifier instance, shared one is created if omitted
        """
        self.config = config
        self.settings = settings or {}
        self.classifier = classifier or ReleaseClassifier()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def source_id(self) -> str:
        return self.config.get('source_id', 'unknown')

    @property
    def display_name(self) -> str:
        return self.config.get('import_name') or self.source_id

    @abstractmethod
    def get_method_name(self) -> str:
        """
        Get the name of the retrieval method.

        Returns:
            String identifier for this method
        """
        pass

    @abstractmethod
    def _check(self) -> CheckResult:
        """Query the source and classify what comes back. May raise."""
        pass

    def fetch_and_classify(self) -> CheckResult:
        """
        Query the source and reduce the response to a CheckResult.

        Never raises: any failure is logged and reported as not found.

        Returns:
            CheckResult for this source
        """
        try:
            result = self._check()
        except Exception as e:
            self.handle_error(e)
            return CheckResult.not_found()

        if result.found:
            self.logger.info(f"[FOUND] {self.display_name}: {result.source or result.model}")
        else:
            self.logger.debug(f"No match from {self.display_name}")
        return result

    def http_get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None
    ) -> requests.Response:
        """
        GET a URL with the configured user agent, timeout and retry count.

        The last transport error is re-raised once retries are exhausted.
        Status codes are left for the caller to interpret.
        """
        http_settings = self.settings.get('http', {}) or {}
        timeout = http_settings.get('timeout', 30)
        max_retries = max(1, int(http_settings.get('max_retries', 1)))
        user_agent = http_settings.get('user_agent', DEFAULT_USER_AGENT)

        request_headers = {'User-Agent': user_agent}
        if headers:
            request_headers.update(headers)

        for attempt in range(max_retries):
            try:
                self.logger.debug(f"GET {url} (attempt {attempt + 1})")
                return requests.get(
                    url,
                    headers=request_headers,
                    params=params,
                    timeout=timeout
                )
            except requests.exceptions.RequestException as e:
                self.logger.warning(f"Attempt {attempt + 1} failed for {url}: {e}")
                if attempt == max_retries - 1:
                    raise

        raise requests.exceptions.RequestException(f"No attempt made for {url}")

    def handle_error(self, exception: Exception) -> None:
        """
        Handle errors during a source check.

        Args:
            exception: The exception that occurred
        """
        self.logger.error(
            f"Error checking {self.source_id}: "
            f"{type(exception).__name__}: {str(exception)}"
        )
