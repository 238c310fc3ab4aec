# budget_insights/core/aggregator.py
import logging
from decimal import Decimal

from budget_insights.core.models import TransactionKind
from budget_insights.utils import parse_amount, to_date

logger = logging.getLogger(__name__)


class CategorySpend(dict):
    """Mapping of category to spent amount, plus how many records were skipped."""

    def __init__(self, *args, skipped=0, **kwargs):
        super().__init__(*args, **kwargs)
        self.skipped = skipped


def usable_amount(tx):
    amount = parse_amount(tx.amount)
    if amount is None or amount < 0:
        return None
    return amount


def is_well_formed(tx):
    return (
        TransactionKind.parse(tx.kind) is not None
        and to_date(tx.occurred_on) is not None
        and usable_amount(tx) is not None
    )


def aggregate(transactions, window_start, window_end):
    """Sum expense amounts per category for dates in ``[window_start, window_end)``.

    Income never counts against a budget. Categories only appear when at
    least one matching expense exists. Malformed records are skipped and
    counted on the result rather than raised.
    """
    start, end = to_date(window_start), to_date(window_end)
    if start is None or end is None:
        raise ValueError("window bounds must be dates")
    if start > end:
        raise ValueError(
            f"window_start {start.isoformat()} is after window_end {end.isoformat()}"
        )

    spent = CategorySpend()
    for tx in transactions:
        if not is_well_formed(tx):
            spent.skipped += 1
            logger.debug("Skipping malformed transaction: %r", tx)
            continue
        if TransactionKind.parse(tx.kind) is not TransactionKind.EXPENSE:
            continue
        if not start <= to_date(tx.occurred_on) < end:
            continue
        spent[tx.category] = spent.get(tx.category, Decimal("0")) + usable_amount(tx)

    if spent.skipped:
        logger.info("Skipped %d malformed transaction(s) during aggregation", spent.skipped)
    return spent
