# budget_insights/core/models.py
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class Category(str, Enum):
    FOOD = "Food"
    SHOPPING = "Shopping"
    TRAVEL = "Travel"
    BILLS = "Bills"
    RECHARGE = "Recharge"
    RENT = "Rent"
    SALARY = "Salary"
    OTHER = "Other"

    @classmethod
    def parse(cls, value, default=None):
        """Match a label case-insensitively, falling back to ``default``."""
        if isinstance(value, cls):
            return value
        label = str(value or "").strip().lower()
        for member in cls:
            if member.value.lower() == label:
                return member
        return default


class TransactionKind(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        label = str(value or "").strip().lower()
        for member in cls:
            if member.value == label:
                return member
        return None


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class BudgetStatus(str, Enum):
    OK = "ok"
    WARNING = "warning"
    DANGER = "danger"


@dataclass(frozen=True)
class Transaction:
    # amount, occurred_on and kind stay None when the source value was unusable;
    # the aggregator counts such records as skipped.
    id: Optional[str]
    amount: Optional[Decimal]
    kind: Optional[TransactionKind]
    category: Category
    occurred_on: Optional[date]
    owner_id: Optional[str] = None
    title: str = ""
    payment_method: str = ""
    note: str = ""


@dataclass(frozen=True)
class Budget:
    owner_id: Optional[str]
    category: Category
    limit: Optional[Decimal]


@dataclass(frozen=True)
class SavingsGoal:
    id: Optional[str]
    owner_id: Optional[str]
    title: str
    target_amount: Optional[Decimal]
    current_amount: Decimal = Decimal("0")
    deadline: Optional[date] = None


@dataclass(frozen=True)
class BudgetEvaluation:
    category: Category
    spent: Decimal
    limit: Decimal
    status: BudgetStatus
    owner_id: Optional[str] = None


@dataclass(frozen=True)
class Insight:
    severity: Severity
    message: str
    category: Category


@dataclass(frozen=True)
class AlertEvent:
    owner_id: Optional[str]
    category: Category
    spent: Decimal
    limit: Decimal
    evaluated_at: datetime
