# budget_insights/core/ranker.py
from typing import Callable, Iterable, List

from budget_insights.core.models import BudgetEvaluation, BudgetStatus, Insight, Severity
from budget_insights.utils import format_amount

DEFAULT_MAX_INSIGHTS = 3


def describe(evaluation: BudgetEvaluation, formatter: Callable = format_amount):
    """Build the insight for a single evaluation, or None for ``ok``."""
    category = evaluation.category.value
    if evaluation.status is BudgetStatus.DANGER:
        overage = formatter(evaluation.spent - evaluation.limit)
        return Insight(
            severity=Severity.DANGER,
            message=f"Over budget in {category} by {overage}!",
            category=evaluation.category,
        )
    if evaluation.status is BudgetStatus.WARNING:
        return Insight(
            severity=Severity.WARNING,
            message=f"You've spent 80% of your {category} budget!",
            category=evaluation.category,
        )
    return None


def rank(
    evaluations: Iterable[BudgetEvaluation],
    max_count: int = DEFAULT_MAX_INSIGHTS,
    formatter: Callable = format_amount,
) -> List[Insight]:
    """Turn evaluations into at most ``max_count`` insights.

    Evaluation order is kept as-is; nothing is re-sorted by severity or
    by how far over budget a category is.
    """
    if max_count < 0:
        raise ValueError(f"max_count must be >= 0, got {max_count}")

    insights = []
    for evaluation in evaluations:
        if len(insights) >= max_count:
            break
        insight = describe(evaluation, formatter)
        if insight is not None:
            insights.append(insight)
    return insights
