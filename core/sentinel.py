"""
Sentinel - Wires the sources, scheduler and notifier together.
"""

import asyncio
import logging
import os
from typing import List, Optional, Tuple

from core.aggregator import check_all_sources, gather_source_results
from core.context import ServiceContext
from core.notifier import Notifier
from core.registry import SourceRegistry
from core.scheduler import CheckScheduler, DEFAULT_CHECK_INTERVAL
from core.subscription_store import SubscriptionStore
from handlers.base_handler import BaseHandler
from models.check_result import CheckResult, StatusSnapshot
from utils.config import EnvConfig


class Sentinel:
    """Main monitoring agent that owns the service state."""

    def __init__(
        self,
        config_path: str = None,
        settings_path: str = None,
        subscriptions_file: str = None,
        env: EnvConfig = None,
        handlers: Optional[List[BaseHandler]] = None
    ):
        """
        Initialize the Sentinel monitoring agent.

        Args:
            config_path: Path to sources.yaml
            settings_path: Path to settings.yaml
            subscriptions_file: Path to the push subscriptions JSON file
            env: Credentials, read from the environment if omitted
            handlers: Explicit handler list, overrides sources.yaml
        """
        self.logger = logging.getLogger('Sentinel')
        self.env = env or EnvConfig.from_env()
        self.registry = SourceRegistry(config_path, settings_path, api_key=self.env.anthropic_api_key)
        settings = self.registry.get_settings()

        self.handlers = handlers if handlers is not None else self.registry.build_handlers()
        self.context = ServiceContext()

        if subscriptions_file is None:
            subscriptions_file = (settings.get('notifications', {}) or {}).get('subscriptions_file')
            if subscriptions_file and not os.path.isabs(subscriptions_file):
                subscriptions_file = os.path.join(self.registry.base_dir, subscriptions_file)
        self.store = SubscriptionStore(subscriptions_file)
        self.notifier = Notifier(self.context, self.store, self.env, settings)

        interval = (settings.get('scheduler', {}) or {}).get(
            'check_interval_seconds', DEFAULT_CHECK_INTERVAL
        )
        self.scheduler = CheckScheduler(
            check=self.check_all_sources,
            context=self.context,
            notify=self.notifier.notify_target_dropped,
            interval=interval,
        )

    @property
    def status(self) -> StatusSnapshot:
        return self.context.status

    @property
    def source_names(self) -> List[str]:
        return [handler.display_name for handler in self.handlers]

    async def check_all_sources(self) -> CheckResult:
        """Run one aggregate check over every handler."""
        return await check_all_sources(self.handlers)

    async def check_each_source(self) -> List[Tuple[BaseHandler, CheckResult]]:
        """Run every handler and keep the individual results."""
        return await gather_source_results(self.handlers)

    async def perform_check(self) -> StatusSnapshot:
        """Run a guarded check and update the shared status."""
        return await self.scheduler.perform_check()


def check_for_updates() -> CheckResult:
    """
    Convenience function to run one aggregate check synchronously.

    Returns:
        CheckResult object
    """
    sentinel = Sentinel()
    return asyncio.run(sentinel.check_all_sources())
