"""
Release text classifier.

Decides whether a piece of free text names Claude Sonnet 5, while rejecting
the older 3.5 / 4.5 Sonnet names that share most of their spelling.
"""

import re
from typing import List, Optional, Pattern


class ReleaseClassifier:
    """Pattern-based matcher for the target model name."""

    # Decoys. Any hit here wins over the target patterns below.
    EXCLUDE_PATTERNS = [
        r"\bclaude[-_ ]?3[-_. ]?5[-_ ]?sonnet\b",
        r"\bclaude[-_ ]?4[-_. ]?5[-_ ]?sonnet\b",
        r"\bsonnet[-_ ]?3[-_. ]?5\b",
        r"\bsonnet[-_ ]?4[-_. ]?5\b",
        r"\b3\.5[-_ ]?sonnet\b",
        r"\b4\.5[-_ ]?sonnet\b",
        r"\bclaude[-_ ]?3[-_. ]?5\b",
    ]

    TARGET_PATTERNS = [
        r"\bclaude[-_]?5[-_]?sonnet\b",
        r"\bsonnet[-_]?5\b",
        r"\bclaude[-_]?sonnet[-_]?5\b",
        r"\bclaude[-_]?5\b",
    ]

    def __init__(self):
        self._exclude: List[Pattern] = [re.compile(p, re.IGNORECASE) for p in self.EXCLUDE_PATTERNS]
        self._target: List[Pattern] = [re.compile(p, re.IGNORECASE) for p in self.TARGET_PATTERNS]

    def is_excluded(self, text: str) -> bool:
        """Check whether text mentions one of the decoy names."""
        return any(pattern.search(text) for pattern in self._exclude)

    def classify(self, text: Optional[str]) -> bool:
        """
        Classify a piece of text.

        Args:
            text: Free text (model id, page fragment, title, commit message)

        Returns:
            True if the text names the target model and no decoy
        """
        return self.extract_model_token(text) is not None

    def extract_model_token(self, text: Optional[str]) -> Optional[str]:
        """
        Return the exact token that matched, for display.

        Args:
            text: Free text to search

        Returns:
            Matched substring, or None when the text is a decoy or has no match
        """
        if not text:
            return None

        if self.is_excluded(text):
            return None

        for pattern in self._target:
            match = pattern.search(text)
            if match:
                return match.group(0)

        return None


_default_classifier = ReleaseClassifier()


def is_target(text: Optional[str]) -> bool:
    """
    Convenience function using the shared classifier.

    Args:
        text: Free text to classify

    Returns:
        True on a target match
    """
    return _default_classifier.classify(text)


def extract_model_token(text: Optional[str]) -> Optional[str]:
    """Convenience wrapper around ReleaseClassifier.extract_model_token."""
    return _default_classifier.extract_model_token(text)
