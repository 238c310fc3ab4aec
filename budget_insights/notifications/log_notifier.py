# budget_insights/notifications/log_notifier.py
import logging

from budget_insights.notifications.base import BaseNotifier

logger = logging.getLogger(__name__)


class LogNotifier(BaseNotifier):
    """Writes notifications to the log instead of delivering them."""

    def deliver(self, owner_id, title, message, severity_tag, dedupe_key):
        logger.warning("[%s] %s for %s: %s", severity_tag, title, owner_id or "-", message)
