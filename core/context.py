"""
Service context - The process-wide detection state.
"""

from dataclasses import dataclass, field

from models.check_result import CheckResult, StatusSnapshot


@dataclass
class ServiceContext:
    """
    Mutable state shared by the scheduler, the notifier and the HTTP layer.

    The scheduler is the only writer of `status` and `ever_found`; the
    notifier is the only writer of `notification_sent`. All access happens on
    the event loop thread.
    """

    status: StatusSnapshot = field(default_factory=StatusSnapshot)
    ever_found: bool = False
    notification_sent: bool = False

    def record(self, result: CheckResult) -> bool:
        """
        Store a completed check result.

        Returns:
            True if this is the first time the target has been found
        """
        self.status = StatusSnapshot.from_result(result)
        if result.found and not self.ever_found:
            self.ever_found = True
            return True
        return False
