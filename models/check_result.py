"""
Check Result and status snapshot models.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class CheckResult:
    """Outcome of querying one source, or of the aggregate over all sources."""

    found: bool = False
    model: Optional[str] = None
    source: Optional[str] = None

    @classmethod
    def not_found(cls) -> 'CheckResult':
        """Canonical negative result."""
        return cls(found=False, model=None, source=None)

    def __str__(self) -> str:
        if not self.found:
            return "[NOT FOUND]"
        return f"[FOUND] model={self.model or '-'} source={self.source or '-'}"

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'found': self.found,
            'model': self.model,
            'source': self.source,
        }


@dataclass
class StatusSnapshot:
    """Latest known detection state, as served by the status endpoint."""

    found: bool = False
    model: Optional[str] = None
    source: Optional[str] = None
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_result(cls, result: CheckResult, checked_at: datetime = None) -> 'StatusSnapshot':
        return cls(
            found=result.found,
            model=result.model,
            source=result.source,
            checked_at=checked_at or datetime.now(timezone.utc),
        )

    def to_dict(self) -> dict:
        """Convert to the JSON shape exposed over HTTP."""
        return {
            'found': self.found,
            'model': self.model,
            'source': self.source,
            'checkedAt': self.checked_at.isoformat() if self.checked_at else None,
        }
