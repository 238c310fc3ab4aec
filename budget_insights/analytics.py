# budget_insights/analytics.py
from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List

from budget_insights.core.aggregator import is_well_formed, usable_amount
from budget_insights.core.models import (
    BudgetEvaluation,
    SavingsGoal,
    Transaction,
    TransactionKind,
)
from budget_insights.utils import filter_transactions_by_month, parse_amount, to_date

logger = logging.getLogger(__name__)

_HUNDRED = Decimal("100")
_ZERO = Decimal("0")


def _well_formed(transactions):
    """Yield ``(tx, amount, day)`` for records the aggregator would accept."""
    for tx in transactions:
        if is_well_formed(tx):
            yield tx, usable_amount(tx), to_date(tx.occurred_on)


def _kind(tx):
    return TransactionKind.parse(tx.kind)


def _percentage(part: Decimal, whole: Decimal) -> Decimal:
    return min(part / whole * _HUNDRED, _HUNDRED)


def overview_metrics(transactions: Iterable[Transaction], now) -> Dict[str, object]:
    """Balance, income, expense and this-month expense across all transactions."""

    rows = list(_well_formed(transactions))
    income = sum((amt for tx, amt, _ in rows if _kind(tx) is TransactionKind.INCOME), _ZERO)
    expenses = sum(
        (amt for tx, amt, _ in rows if _kind(tx) is TransactionKind.EXPENSE), _ZERO
    )
    this_month = filter_transactions_by_month(
        [tx for tx, _, _ in rows], to_date(now).strftime("%Y-%m")
    )
    month_expense = sum(
        (usable_amount(tx) for tx in this_month if _kind(tx) is TransactionKind.EXPENSE),
        _ZERO,
    )
    return {
        "transactions": len(rows),
        "total_income": income,
        "total_expenses": expenses,
        "total_balance": income - expenses,
        "this_month_expense": month_expense,
    }


def summarize_by_category(
    transactions: Iterable[Transaction],
    start_date: date | None = None,
    end_date: date | None = None,
) -> List[Dict[str, object]]:
    """Aggregate expense totals grouped by category (both bounds inclusive)."""

    totals: Dict[object, Decimal] = {}
    counts: Dict[object, int] = {}
    for tx, amount, day in _well_formed(transactions):
        if _kind(tx) is not TransactionKind.EXPENSE:
            continue
        if start_date and day < start_date:
            continue
        if end_date and day > end_date:
            continue
        totals[tx.category] = totals.get(tx.category, _ZERO) + amount
        counts[tx.category] = counts.get(tx.category, 0) + 1
    return [
        {"category": cat.value, "total": total, "transactions": counts[cat]}
        for cat, total in sorted(totals.items(), key=lambda item: item[1], reverse=True)
    ]


def summarize_by_month(
    transactions: Iterable[Transaction],
    months: int = 6,
) -> List[Dict[str, object]]:
    """Income and expense per calendar month, last ``months`` months with data."""

    if months < 0:
        raise ValueError(f"months must be >= 0, got {months}")
    buckets: Dict[tuple, Dict[str, object]] = {}
    for tx, amount, day in _well_formed(transactions):
        key = (day.year, day.month)
        bucket = buckets.setdefault(
            key,
            {"period": day.strftime("%b %Y"), "income": _ZERO, "expense": _ZERO},
        )
        field = "income" if _kind(tx) is TransactionKind.INCOME else "expense"
        bucket[field] += amount
    ordered = [buckets[key] for key in sorted(buckets)]
    return ordered[-months:] if months else []


def budget_progress(evaluations: Iterable[BudgetEvaluation]) -> List[Dict[str, object]]:
    """Progress bar data for each evaluated budget."""

    return [
        {
            "category": ev.category.value,
            "spent": ev.spent,
            "limit": ev.limit,
            "percentage": _percentage(ev.spent, ev.limit),
            "remaining": max(ev.limit - ev.spent, _ZERO),
            "over": ev.spent > ev.limit,
            "status": ev.status.value,
        }
        for ev in evaluations
    ]


def goal_progress(goals: Iterable[SavingsGoal]) -> List[Dict[str, object]]:
    """Savings progress per goal; goals without a positive target are skipped."""

    rows = []
    for goal in goals:
        target = parse_amount(goal.target_amount)
        if target is None or target <= 0:
            logger.warning("Ignoring goal %r with invalid target %r", goal.title, goal.target_amount)
            continue
        current = parse_amount(goal.current_amount) or _ZERO
        percentage = _percentage(max(current, _ZERO), target)
        rows.append(
            {
                "id": goal.id,
                "title": goal.title,
                "current": current,
                "target": target,
                "percentage": percentage,
                "remaining": max(target - current, _ZERO),
                "completed": percentage == _HUNDRED,
                "deadline": goal.deadline.isoformat() if goal.deadline else None,
            }
        )
    return rows
