"""
Push subscription model.
"""

import base64
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional


class DispatchOutcome(Enum):
    """Result of sending one push message to one subscriber."""

    SUCCESS = 'success'
    FAILED = 'failed'
    GONE = 'gone'


def subscription_key(endpoint: str) -> str:
    """Derive the store key for a subscription endpoint."""
    return base64.urlsafe_b64encode(endpoint.encode('utf-8')).decode('ascii').rstrip('=')


@dataclass
class PushSubscription:
    """A browser push subscription as handed to us by the service worker."""

    endpoint: str
    keys: Dict[str, str] = field(default_factory=dict)
    created_at: Optional[str] = None

    @property
    def key(self) -> str:
        return subscription_key(self.endpoint)

    @classmethod
    def from_dict(cls, data: dict) -> 'PushSubscription':
        """Create PushSubscription from a stored or submitted dictionary."""
        keys = data.get('keys') or {}
        return cls(
            endpoint=data.get('endpoint', ''),
            keys={
                'p256dh': keys.get('p256dh', ''),
                'auth': keys.get('auth', ''),
            },
            created_at=data.get('createdAt'),
        )

    def is_valid(self) -> bool:
        return bool(self.endpoint) and bool(self.keys.get('p256dh')) and bool(self.keys.get('auth'))

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            'endpoint': self.endpoint,
            'keys': dict(self.keys),
            'createdAt': self.created_at or datetime.now(timezone.utc).isoformat(),
        }

    def to_subscription_info(self) -> dict:
        """Shape expected by the web push library."""
        return {
            'endpoint': self.endpoint,
            'keys': dict(self.keys),
        }
