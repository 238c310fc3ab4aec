# budget_insights/core/evaluator.py
import logging
from decimal import Decimal
from typing import Iterable, List, Mapping

from budget_insights.core.models import Budget, BudgetEvaluation, BudgetStatus, Category
from budget_insights.utils import parse_amount

logger = logging.getLogger(__name__)

WARNING_RATIO = Decimal("0.8")


def usable_limit(budget):
    """Return the budget's limit as a positive Decimal, or None."""
    limit = parse_amount(budget.limit)
    if limit is None or limit <= 0:
        return None
    return limit


def classify(spent: Decimal, limit: Decimal) -> BudgetStatus:
    # Ranges are disjoint: over the limit wins before the 80% check.
    if spent > limit:
        return BudgetStatus.DANGER
    if spent > limit * WARNING_RATIO:
        return BudgetStatus.WARNING
    return BudgetStatus.OK


def evaluate(
    spent: Mapping[Category, Decimal],
    budgets: Iterable[Budget],
) -> List[BudgetEvaluation]:
    """Classify each budget against what was spent in its category.

    Output follows the order the budgets were supplied. Budgets with a
    missing or non-positive limit are left out.
    """
    evaluations = []
    for budget in budgets:
        limit = usable_limit(budget)
        if limit is None:
            logger.warning(
                "Ignoring %s budget with invalid limit %r", budget.category, budget.limit
            )
            continue
        amount = spent.get(budget.category, Decimal("0"))
        evaluations.append(
            BudgetEvaluation(
                category=budget.category,
                spent=amount,
                limit=limit,
                status=classify(amount, limit),
                owner_id=budget.owner_id,
            )
        )
    return evaluations
