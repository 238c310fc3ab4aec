# budget_insights/engine.py
"""Single entry point that re-derives insights and alerts from a snapshot.

Callers invoke :func:`evaluate_snapshot` whenever their transactions or
budgets change. Nothing is retained between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Callable, Dict, Iterable, List

from budget_insights.core.aggregator import aggregate
from budget_insights.core.alerts import emit_alerts
from budget_insights.core.evaluator import evaluate, usable_limit
from budget_insights.core.models import (
    AlertEvent,
    Budget,
    BudgetEvaluation,
    Category,
    Insight,
    Transaction,
)
from budget_insights.core.ranker import DEFAULT_MAX_INSIGHTS, rank
from budget_insights.utils import format_amount, month_to_date_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationReport:
    evaluated_at: datetime
    window_start: date
    window_end: date
    spent: Dict[Category, Decimal]
    evaluations: List[BudgetEvaluation]
    insights: List[Insight]
    alerts: List[AlertEvent]
    skipped_transactions: int = 0
    skipped_budgets: int = 0
    transactions: List[Transaction] = field(default_factory=list, repr=False)


def _as_datetime(now) -> datetime:
    if isinstance(now, datetime):
        return now
    if isinstance(now, date):
        return datetime.combine(now, time.min)
    raise ValueError(f"now must be a date or datetime, got {now!r}")


def evaluate_snapshot(
    now,
    transactions: Iterable[Transaction],
    budgets: Iterable[Budget],
    max_insights: int = DEFAULT_MAX_INSIGHTS,
    formatter: Callable = format_amount,
) -> EvaluationReport:
    """Run aggregate, evaluate, rank and emit for the month-to-date window."""
    evaluated_at = _as_datetime(now)
    transactions = list(transactions)
    budgets = list(budgets)

    window_start, window_end = month_to_date_window(evaluated_at)
    spent = aggregate(transactions, window_start, window_end)
    evaluations = evaluate(spent, budgets)
    insights = rank(evaluations, max_insights, formatter)
    alerts = emit_alerts(evaluations, evaluated_at)

    skipped_budgets = sum(1 for b in budgets if usable_limit(b) is None)
    logger.debug(
        "Evaluated %d budget(s) over %s..%s: %d insight(s), %d alert(s)",
        len(evaluations), window_start, window_end, len(insights), len(alerts),
    )
    return EvaluationReport(
        evaluated_at=evaluated_at,
        window_start=window_start,
        window_end=window_end,
        spent=dict(spent),
        evaluations=evaluations,
        insights=insights,
        alerts=alerts,
        skipped_transactions=spent.skipped,
        skipped_budgets=skipped_budgets,
        transactions=transactions,
    )
