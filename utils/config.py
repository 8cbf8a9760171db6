"""
Environment configuration.

Secrets and deployment knobs come from the process environment, optionally
seeded from a local .env file.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_NTFY_TOPIC = 'did-sonnet5-drop'
DEFAULT_VAPID_EMAIL = 'mailto:admin@example.com'


@dataclass
class EnvConfig:
    """Credentials and deployment settings read from the environment."""

    anthropic_api_key: Optional[str] = None
    vapid_public_key: str = ''
    vapid_private_key: str = ''
    vapid_email: str = DEFAULT_VAPID_EMAIL
    ntfy_topic: str = DEFAULT_NTFY_TOPIC
    scheduler_secret: Optional[str] = None
    port: int = 8080

    @property
    def push_enabled(self) -> bool:
        return bool(self.vapid_public_key and self.vapid_private_key)

    @classmethod
    def from_env(cls) -> 'EnvConfig':
        """Build configuration from environment variables."""
        try:
            port = int(os.getenv('PORT', '8080'))
        except ValueError:
            port = 8080

        return cls(
            anthropic_api_key=os.getenv('ANTHROPIC_API_KEY') or None,
            vapid_public_key=os.getenv('VAPID_PUBLIC_KEY', ''),
            vapid_private_key=os.getenv('VAPID_PRIVATE_KEY', ''),
            vapid_email=os.getenv('VAPID_EMAIL') or DEFAULT_VAPID_EMAIL,
            ntfy_topic=os.getenv('NTFY_TOPIC') or DEFAULT_NTFY_TOPIC,
            scheduler_secret=os.getenv('SCHEDULER_SECRET') or None,
            port=port,
        )
