"""
Source Registry - Maps source ids to handlers and configurations.
"""

import os
import logging
import yaml
from typing import Dict, Any, List, Optional, Type

from handlers.base_handler import BaseHandler
from handlers.api_handler import APIHandler
from handlers.web_handler import WebPageHandler
from handlers.search_handler import SearchHandler
from handlers.release_handler import ReleaseHandler
from utils.classifier import ReleaseClassifier

# Declaration order is priority order when results are reduced.
DEFAULT_SOURCES: Dict[str, Dict[str, Any]] = {
    'anthropic_api': {
        'import_name': 'Anthropic API',
        'method': 'api',
        'data_url': 'https://api.anthropic.com/v1/models',
    },
    'anthropic_website': {
        'import_name': 'Anthropic Website',
        'method': 'web',
    },
    'hacker_news': {
        'import_name': 'Hacker News',
        'method': 'search',
        'query': 'anthropic claude',
    },
    'github_sdk': {
        'import_name': 'GitHub SDK',
        'method': 'releases',
    },
}


class SourceRegistry:
    """Registry that manages source configurations and handler instantiation."""

    # Map method names to handler classes
    HANDLER_MAP: Dict[str, Type[BaseHandler]] = {
        'api': APIHandler,
        'web': WebPageHandler,
        'search': SearchHandler,
        'releases': ReleaseHandler,
    }

    def __init__(
        self,
        config_path: str = None,
        settings_path: str = None,
        api_key: Optional[str] = None
    ):
        """
        Initialize the registry with configuration files.

        Args:
            config_path: Path to sources.yaml
            settings_path: Path to settings.yaml
            api_key: Credential for the models catalog source
        """
        self.base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.logger = logging.getLogger('SourceRegistry')
        self.api_key = api_key

        if config_path is None:
            config_path = os.path.join(self.base_dir, 'config', 'sources.yaml')
        if settings_path is None:
            settings_path = os.path.join(self.base_dir, 'config', 'settings.yaml')

        self.sources = self._load_config(config_path) or dict(DEFAULT_SOURCES)
        self.settings = self._load_config(settings_path)
        self.classifier = ReleaseClassifier()

    def _load_config(self, path: str) -> Dict[str, Any]:
        """Load YAML configuration file."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except FileNotFoundError:
            self.logger.warning(f"Config file not found: {path}")
            return {}
        except yaml.YAMLError as e:
            self.logger.error(f"Error parsing YAML file {path}: {e}")
            return {}

    def get_source(self, source_id: str) -> Optional[Dict[str, Any]]:
        """
        Get source configuration by id.

        Args:
            source_id: Key of the source in sources.yaml

        Returns:
            Source configuration dictionary or None
        """
        return self.sources.get(source_id)

    def get_handler(self, source_id: str) -> Optional[BaseHandler]:
        """
        Get appropriate handler instance for a source.

        Args:
            source_id: Key of the source in sources.yaml

        Returns:
            Handler instance or None if the source is unknown or misconfigured
        """
        source_config = self.get_source(source_id)
        if not source_config:
            self.logger.warning(f"Source not found: {source_id}")
            return None

        method = source_config.get('method')
        handler_class = self.HANDLER_MAP.get(method)
        if not handler_class:
            self.logger.warning(f"Unknown method '{method}' for source: {source_id}")
            return None

        # Add source_id to config for logging
        config = {**source_config, 'source_id': source_id}

        if handler_class is APIHandler:
            if not self.api_key:
                self.logger.warning("ANTHROPIC_API_KEY not set. Models catalog source is disabled.")
            return APIHandler(config, self.settings, self.classifier, api_key=self.api_key)

        return handler_class(config, self.settings, self.classifier)

    def build_handlers(self) -> List[BaseHandler]:
        """Instantiate every configured handler, in priority order."""
        handlers = []
        for source_id in self.list_sources():
            handler = self.get_handler(source_id)
            if handler is not None:
                handlers.append(handler)
        return handlers

    def list_sources(self) -> list:
        """List all configured source ids."""
        return list(self.sources.keys())

    def get_settings(self) -> Dict[str, Any]:
        """Get application settings."""
        return self.settings
