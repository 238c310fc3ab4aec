# budget_insights/core/alerts.py
from datetime import datetime
from typing import Callable, Iterable, List, Tuple

from budget_insights.core.models import AlertEvent, BudgetEvaluation, BudgetStatus
from budget_insights.utils import format_amount

ALERT_TITLE = "Budget Exceeded!"
ALERT_SEVERITY_TAG = "alert"


def emit_alerts(
    evaluations: Iterable[BudgetEvaluation],
    evaluated_at: datetime,
) -> List[AlertEvent]:
    """One event per over-budget evaluation.

    There is no memory between calls: an unchanged over-budget state yields
    a fresh event every time. Suppression, if any, belongs to the notifier.
    """
    return [
        AlertEvent(
            owner_id=evaluation.owner_id,
            category=evaluation.category,
            spent=evaluation.spent,
            limit=evaluation.limit,
            evaluated_at=evaluated_at,
        )
        for evaluation in evaluations
        if evaluation.status is BudgetStatus.DANGER
    ]


def describe_alert(alert: AlertEvent, formatter: Callable = format_amount) -> Tuple[str, str]:
    """Return the ``(title, message)`` pair handed to a notifier."""
    message = (
        f"You have spent {formatter(alert.spent)} in {alert.category.value}, "
        f"which exceeds your budget of {formatter(alert.limit)}."
    )
    return ALERT_TITLE, message


def dedupe_key(alert: AlertEvent) -> str:
    """Owner, category and calendar month of the evaluation."""
    return f"{alert.owner_id or ''}:{alert.category.value}:{alert.evaluated_at:%Y-%m}"
