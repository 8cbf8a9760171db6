"""
Notifier - Announces the release once, over web push and an ntfy topic.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import requests
from pywebpush import WebPushException, webpush

from core.context import ServiceContext
from core.subscription_store import SubscriptionStore
from models.subscription import DispatchOutcome, PushSubscription
from utils.config import EnvConfig

NOTIFICATION_TITLE = 'Sonnet 5 has dropped!'
DEFAULT_BODY = 'Claude Sonnet 5 is now available!'
DEFAULT_CLICK_URL = 'https://anthropic.com'
DEFAULT_NTFY_BASE_URL = 'https://ntfy.sh'

# Four weeks. Push services hold the message this long for offline subscribers
DEFAULT_PUSH_TTL = 2419200

# Push services answer these for expired or unsubscribed endpoints
GONE_STATUS_CODES = (404, 410)


def build_message(model: Optional[str]) -> str:
    return f"Model: {model}" if model else DEFAULT_BODY


class Notifier:
    """Fans a single release announcement out to every channel, at most once."""

    def __init__(
        self,
        context: ServiceContext,
        store: SubscriptionStore,
        env: EnvConfig,
        settings: Dict[str, Any] = None
    ):
        """
        Args:
            context: Shared service state holding the sent latch
            store: Push subscription store
            env: Credentials (VAPID keys, ntfy topic)
            settings: Application settings (notifications and http sections)
        """
        self.context = context
        self.store = store
        self.env = env
        self.settings = settings or {}
        self.logger = logging.getLogger('Notifier')

        notification_settings = self.settings.get('notifications', {}) or {}
        self.ntfy_base_url = notification_settings.get('ntfy_base_url', DEFAULT_NTFY_BASE_URL).rstrip('/')
        self.click_url = notification_settings.get('fallback_url', DEFAULT_CLICK_URL)
        self.icon = notification_settings.get('icon', '/favicon.svg')
        self.push_ttl = int(notification_settings.get('push_ttl', DEFAULT_PUSH_TTL))
        self.timeout = (self.settings.get('http', {}) or {}).get('timeout', 30)

        if not self.env.push_enabled:
            self.logger.warning("VAPID keys not configured, Web Push disabled")

    @property
    def ntfy_url(self) -> str:
        return f"{self.ntfy_base_url}/{self.env.ntfy_topic}"

    async def notify_target_dropped(
        self,
        model: Optional[str],
        source: Optional[str]
    ) -> Optional[Dict[str, Any]]:
        """
        Send the release announcement on every channel.

        Only the first call in the process lifetime dispatches anything; the
        latch is set before the first await.

        Args:
            model: Detected model id, if known
            source: URL where the release was seen, if known

        Returns:
            Per-channel outcome, or None when the announcement was already sent
        """
        if self.context.notification_sent:
            self.logger.info("Notification already sent, skipping")
            return None
        self.context.notification_sent = True

        self.logger.info("Sonnet 5 detected! Sending notifications...")

        push_result, ntfy_result = await asyncio.gather(
            self.send_push(model, source),
            self.send_ntfy(model, source),
            return_exceptions=True,
        )

        for channel, outcome in (('web push', push_result), ('ntfy', ntfy_result)):
            if isinstance(outcome, BaseException):
                self.logger.error(f"{channel} channel failed: {type(outcome).__name__}: {outcome}")

        return {
            'push': None if isinstance(push_result, BaseException) else push_result,
            'ntfy': False if isinstance(ntfy_result, BaseException) else ntfy_result,
        }

    def reset(self) -> None:
        """Re-arm the latch."""
        self.context.notification_sent = False

    def build_push_payload(self, model: Optional[str], source: Optional[str]) -> str:
        return json.dumps({
            'title': NOTIFICATION_TITLE,
            'body': build_message(model),
            'url': source or self.click_url,
            'icon': self.icon,
        })

    async def send_push(self, model: Optional[str], source: Optional[str]) -> Optional[Dict[str, int]]:
        """
        Send the payload to every stored subscription.

        Returns:
            Counts of sent, failed and removed subscriptions, or None if disabled
        """
        if not self.env.push_enabled:
            return None

        subscriptions = await asyncio.to_thread(self.store.get_all)
        self.logger.info(f"Sending Web Push to {len(subscriptions)} subscribers")

        payload = self.build_push_payload(model, source)
        outcomes = await asyncio.gather(
            *(asyncio.to_thread(self._send_one, sub, payload) for sub in subscriptions),
            return_exceptions=True,
        )

        summary = self._summarize(outcomes)
        self.logger.info(
            f"Web Push sent: {summary['sent']} succeeded, {summary['failed']} failed "
            f"({summary['removed']} expired subscriptions removed)"
        )
        return summary

    def _send_one(self, subscription: PushSubscription, payload: str) -> DispatchOutcome:
        """Deliver one push message. Runs in a worker thread."""
        try:
            webpush(
                subscription_info=subscription.to_subscription_info(),
                data=payload,
                vapid_private_key=self.env.vapid_private_key,
                vapid_claims={'sub': self.env.vapid_email},
                ttl=self.push_ttl,
                timeout=self.timeout,
            )
            return DispatchOutcome.SUCCESS
        except WebPushException as e:
            status = e.response.status_code if e.response is not None else None
            if status in GONE_STATUS_CODES:
                self.store.remove(subscription.endpoint)
                return DispatchOutcome.GONE
            self.logger.warning(f"Web Push failed (HTTP {status}): {e}")
            return DispatchOutcome.FAILED
        except requests.exceptions.RequestException as e:
            self.logger.warning(f"Web Push transport error: {e}")
            return DispatchOutcome.FAILED

    @staticmethod
    def _summarize(outcomes: List[Any]) -> Dict[str, int]:
        sent = sum(1 for o in outcomes if o is DispatchOutcome.SUCCESS)
        removed = sum(1 for o in outcomes if o is DispatchOutcome.GONE)
        return {
            'sent': sent,
            'failed': len(outcomes) - sent,
            'removed': removed,
        }

    async def send_ntfy(self, model: Optional[str], source: Optional[str]) -> bool:
        """
        Post the announcement to the public ntfy topic.

        Returns:
            True if ntfy accepted the message
        """
        return await asyncio.to_thread(self._post_ntfy, model, source)

    def _post_ntfy(self, model: Optional[str], source: Optional[str]) -> bool:
        headers = {
            'Title': NOTIFICATION_TITLE,
            'Priority': 'urgent',
            'Tags': 'tada,robot',
            'Click': source or self.click_url,
        }
        try:
            response = requests.post(
                self.ntfy_url,
                data=build_message(model).encode('utf-8'),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            self.logger.error(f"ntfy.sh error: {e}")
            return False

        if response.ok:
            self.logger.info(f"ntfy.sh notification sent to topic: {self.env.ntfy_topic}")
            return True

        self.logger.error(f"ntfy.sh failed: {response.status_code}")
        return False
