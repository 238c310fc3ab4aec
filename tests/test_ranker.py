from decimal import Decimal
from functools import partial

import pytest

from budget_insights.core.models import BudgetEvaluation, BudgetStatus, Category, Severity
from budget_insights.core.ranker import rank
from budget_insights.utils import format_amount


def _ev(category, spent, limit, status):
    return BudgetEvaluation(
        category=category, spent=Decimal(spent), limit=Decimal(limit), status=status
    )


def test_warning_and_danger_messages():
    insights = rank([
        _ev(Category.FOOD, "4200", "5000", BudgetStatus.WARNING),
        _ev(Category.TRAVEL, "6000", "5000", BudgetStatus.DANGER),
    ])

    assert [i.message for i in insights] == [
        "You've spent 80% of your Food budget!",
        "Over budget in Travel by ₹1,000!",
    ]
    assert [i.severity for i in insights] == [Severity.WARNING, Severity.DANGER]
    assert [i.category for i in insights] == [Category.FOOD, Category.TRAVEL]


def test_ok_statuses_are_not_insights():
    assert rank([_ev(Category.FOOD, "10", "5000", BudgetStatus.OK)]) == []


def test_truncates_to_three_in_input_order():
    evaluations = [
        _ev(Category.FOOD, "4500", "5000", BudgetStatus.WARNING),
        _ev(Category.RENT, "0", "5000", BudgetStatus.OK),
        _ev(Category.BILLS, "4100", "5000", BudgetStatus.WARNING),
        _ev(Category.SHOPPING, "9000", "5000", BudgetStatus.DANGER),
        _ev(Category.TRAVEL, "99000", "5000", BudgetStatus.DANGER),
    ]

    insights = rank(evaluations)

    assert len(insights) == 3
    assert [i.category for i in insights] == [Category.FOOD, Category.BILLS, Category.SHOPPING]


def test_max_count_bounds_the_result():
    evaluations = [_ev(Category.FOOD, "6000", "5000", BudgetStatus.DANGER)] * 5
    for n in range(0, 7):
        assert len(rank(evaluations, n)) == min(n, 5)


def test_negative_max_count_raises():
    with pytest.raises(ValueError):
        rank([], -1)


def test_large_overage_uses_grouping():
    evaluations = [_ev(Category.RENT, "125000.5", "5000", BudgetStatus.DANGER)]

    assert rank(evaluations)[0].message == "Over budget in Rent by ₹1,20,000.5!"
    western = partial(format_amount, symbol="$", grouping="western")
    assert rank(evaluations, formatter=western)[0].message == "Over budget in Rent by $120,000.5!"


def test_rank_is_repeatable():
    evaluations = [_ev(Category.FOOD, "4200", "5000", BudgetStatus.WARNING)]
    assert rank(evaluations) == rank(evaluations)
