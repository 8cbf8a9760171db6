"""
Models package - Data classes for the application.
"""

from models.check_result import CheckResult, StatusSnapshot
from models.subscription import DispatchOutcome, PushSubscription, subscription_key

__all__ = [
    'CheckResult',
    'StatusSnapshot',
    'DispatchOutcome',
    'PushSubscription',
    'subscription_key',
]
