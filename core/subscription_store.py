"""
Subscription Store - Persists browser push subscriptions.
"""

import os
import json
import logging
from typing import Dict, Any, List
from threading import Lock

from models.subscription import PushSubscription, subscription_key


class SubscriptionStore:
    """JSON-file key-value store of push subscriptions, keyed by endpoint."""

    def __init__(self, store_file: str = None):
        """
        Initialize the store.

        Args:
            store_file: Path to the subscriptions JSON file
        """
        if store_file is None:
            base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
            store_file = os.path.join(base_dir, 'state', 'push_subscriptions.json')

        self.store_file = store_file
        self.logger = logging.getLogger('SubscriptionStore')
        self._lock = Lock()
        self._records = self._load()

    def _load(self) -> Dict[str, Any]:
        """Load records from file."""
        try:
            if os.path.exists(self.store_file):
                with open(self.store_file, 'r', encoding='utf-8') as f:
                    return json.load(f) or {}
        except (json.JSONDecodeError, IOError) as e:
            self.logger.warning(f"Could not load subscription file: {e}")
        return {}

    def _save(self) -> None:
        """Save records to file."""
        try:
            directory = os.path.dirname(self.store_file)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with open(self.store_file, 'w', encoding='utf-8') as f:
                json.dump(self._records, f, indent=2)
        except IOError as e:
            self.logger.error(f"Error saving subscription file: {e}")

    def save(self, subscription: PushSubscription) -> None:
        """
        Insert or replace a subscription.

        Args:
            subscription: Subscription to store
        """
        with self._lock:
            self._records[subscription.key] = subscription.to_dict()
            self._save()
        self.logger.info("Saved push subscription")

    def remove(self, endpoint: str) -> bool:
        """
        Remove the subscription for an endpoint.

        Args:
            endpoint: Push service endpoint URL

        Returns:
            True if a record was removed
        """
        key = subscription_key(endpoint)
        with self._lock:
            if key not in self._records:
                return False
            del self._records[key]
            self._save()
        self.logger.info("Removed push subscription")
        return True

    def get_all(self) -> List[PushSubscription]:
        """Get every stored subscription."""
        with self._lock:
            records = list(self._records.values())
        return [PushSubscription.from_dict(record) for record in records]

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
