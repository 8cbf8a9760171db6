"""
Core package - Contains main business logic.
"""

from core.aggregator import check_all_sources, gather_source_results, reduce_results
from core.context import ServiceContext
from core.notifier import Notifier
from core.registry import SourceRegistry
from core.scheduler import CheckScheduler
from core.sentinel import Sentinel, check_for_updates
from core.subscription_store import SubscriptionStore

__all__ = [
    'check_all_sources',
    'gather_source_results',
    'reduce_results',
    'ServiceContext',
    'Notifier',
    'SourceRegistry',
    'CheckScheduler',
    'Sentinel',
    'check_for_updates',
    'SubscriptionStore',
]
