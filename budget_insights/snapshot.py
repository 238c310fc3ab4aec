# budget_insights/snapshot.py
import logging
from dataclasses import dataclass, field
from typing import List

import yaml

from budget_insights.core.models import (
    Budget,
    Category,
    SavingsGoal,
    Transaction,
    TransactionKind,
)
from budget_insights.utils import parse_amount, parse_date

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    transactions: List[Transaction] = field(default_factory=list)
    budgets: List[Budget] = field(default_factory=list)
    goals: List[SavingsGoal] = field(default_factory=list)


def _first(entry, *keys, default=None):
    for key in keys:
        if entry.get(key) is not None:
            return entry[key]
    return default


def _owner(entry, default_owner):
    owner = _first(entry, 'owner_id', 'userId', default=default_owner)
    return str(owner) if owner is not None else None


def transaction_from_entry(entry, default_owner=None):
    """Build a Transaction, leaving unusable fields as None.

    Bad amounts, dates and kinds are not raised here: the aggregator
    skips and counts those records so one typo cannot blank a report.
    """
    raw_category = entry.get('category')
    category = Category.parse(raw_category)
    if category is None:
        logger.warning("Unknown category %r, filing under Other", raw_category)
        category = Category.OTHER
    raw_id = entry.get('id')
    return Transaction(
        id=str(raw_id) if raw_id is not None else None,
        amount=parse_amount(entry.get('amount')),
        kind=TransactionKind.parse(_first(entry, 'type', 'kind')),
        category=category,
        occurred_on=parse_date(entry.get('date')),
        owner_id=_owner(entry, default_owner),
        title=str(entry.get('title', '') or ''),
        payment_method=str(_first(entry, 'payment_method', 'paymentMethod', default='')),
        note=str(entry.get('note', '') or ''),
    )


def budget_from_entry(entry, default_owner=None):
    category = Category.parse(entry.get('category'))
    if category is None:
        raise ValueError(f"Unknown category in budget entry: {entry}")
    return Budget(
        owner_id=_owner(entry, default_owner),
        category=category,
        limit=parse_amount(_first(entry, 'limit', 'amount')),
    )


def goal_from_entry(entry, default_owner=None):
    title = entry.get('title')
    if not title:
        raise ValueError(f"Missing 'title' in goal entry: {entry}")
    raw_id = entry.get('id')
    return SavingsGoal(
        id=str(raw_id) if raw_id is not None else None,
        owner_id=_owner(entry, default_owner),
        title=str(title),
        target_amount=parse_amount(_first(entry, 'target_amount', 'targetAmount')),
        current_amount=parse_amount(_first(entry, 'current_amount', 'currentAmount', default=0)),
        deadline=parse_date(entry.get('deadline')),
    )


def load_snapshot(path, owner_id=None):
    """Load budgets, goals and transactions from a YAML snapshot file.

    A top-level ``owner_id`` is used for entries that do not name one.
    When ``owner_id`` is passed, entries for other owners are dropped.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Snapshot {path} must be a mapping, got {type(data).__name__}")

    default_owner = data.get('owner_id')
    snapshot = Snapshot(
        transactions=[
            transaction_from_entry(e, default_owner) for e in data.get('transactions') or []
        ],
        budgets=[budget_from_entry(e, default_owner) for e in data.get('budgets') or []],
        goals=[goal_from_entry(e, default_owner) for e in data.get('goals') or []],
    )
    if owner_id is not None:
        snapshot = filter_owner(snapshot, owner_id)
    return snapshot


def filter_owner(snapshot, owner_id):
    return Snapshot(
        transactions=[t for t in snapshot.transactions if t.owner_id == owner_id],
        budgets=[b for b in snapshot.budgets if b.owner_id == owner_id],
        goals=[g for g in snapshot.goals if g.owner_id == owner_id],
    )


def snapshot_owners(snapshot):
    """Distinct owner ids named by any record, sorted; unowned records are ignored."""
    records = [*snapshot.transactions, *snapshot.budgets, *snapshot.goals]
    return sorted({r.owner_id for r in records if r.owner_id is not None})
