# budget_insights/utils.py
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

_GROUPING_STYLES = ("indian", "western")
_CENTS = Decimal("0.01")


def to_date(value):
    """Return ``value`` as a plain ``date``; datetimes lose their time part."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return None


def parse_date(value):
    """Best-effort date parsing for loaders; returns None when unusable."""
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return to_date(value)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return None
    return None


def parse_amount(value):
    """Convert a numeric-ish value to ``Decimal``; returns None when unusable.

    Floats go through ``str`` so 0.1 stays 0.1 rather than its binary
    expansion. Booleans are rejected even though they are ints.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        text = str(value).strip().replace(",", "")
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    if not amount.is_finite():
        return None
    return amount


def month_start(day):
    day = to_date(day)
    return day.replace(day=1)


def month_to_date_window(now):
    """Half-open window ``[first day of now's month, now + 1 day)``."""
    today = to_date(now)
    if today is None:
        raise ValueError(f"now must be a date or datetime, got {now!r}")
    return month_start(today), today + timedelta(days=1)


def filter_transactions_by_month(transactions, month_str):
    """
    Return only those transactions whose date falls in the given YYYY-MM.
    """
    year, month = map(int, month_str.split('-'))
    return [
        tx for tx in transactions
        if to_date(tx.occurred_on) is not None
        and tx.occurred_on.year == year and tx.occurred_on.month == month
    ]


def dedupe_transactions(transactions):
    """
    Remove records whose id was already seen. Records without an id pass
    through unchanged: two identical purchases on one day are both real.
    """
    seen = set()
    unique = []
    for tx in transactions:
        if tx.id:
            if tx.id in seen:
                continue
            seen.add(tx.id)
        unique.append(tx)
    return unique


def _group_digits(digits, style):
    if len(digits) <= 3:
        return digits
    # Indian grouping: last three digits, then pairs (1,00,000).
    size = 3 if style == "western" else 2
    head, tail = digits[:-3], digits[-3:]
    parts = []
    while head:
        parts.insert(0, head[-size:])
        head = head[:-size]
    return ",".join(parts + [tail])


def format_amount(value, symbol="₹", grouping="indian"):
    """Render a money amount the way the dashboard shows it.

    >>> format_amount(Decimal("1000"))
    '₹1,000'
    >>> format_amount(Decimal("123456.5"))
    '₹1,23,456.5'
    >>> format_amount(Decimal("123456.5"), grouping="western")
    '₹123,456.5'
    """
    if grouping not in _GROUPING_STYLES:
        raise ValueError(f"Unknown grouping style '{grouping}'.")
    amount = parse_amount(value)
    if amount is None:
        raise ValueError(f"Not an amount: {value!r}")
    amount = amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):.2f}".partition(".")
    fraction = fraction.rstrip("0")
    text = _group_digits(whole, grouping)
    if fraction:
        text = f"{text}.{fraction}"
    return f"{sign}{symbol}{text}"
