# budget_insights/notifications/base.py
import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BaseNotifier(ABC):
    """Fire-and-forget sender: delivery errors are logged, never raised."""

    def __init__(self, config=None):
        self.config = config or {}

    def send(self, owner_id, title, message, severity_tag="info", dedupe_key=None):
        try:
            self.deliver(owner_id, title, message, severity_tag, dedupe_key)
        except Exception:
            logger.exception("Error sending notification %r to %s", title, owner_id)
            return False
        return True

    @abstractmethod
    def deliver(self, owner_id, title, message, severity_tag, dedupe_key):
        """Store or push a single notification."""
        pass
