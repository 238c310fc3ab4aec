# budget_insights/loaders/csv_export.py
import logging
import re

import pandas as pd

from budget_insights.core.models import Category, Transaction, TransactionKind
from budget_insights.loaders.base import BaseLoader
from budget_insights.utils import parse_amount

logger = logging.getLogger(__name__)

# Regex to strip out any character that's not digit, minus, or dot
_CLEAN_AMOUNT = re.compile(r"[^\d\-.]")


class CSVExportLoader(BaseLoader):
    """
    Loader for the transaction history CSV export.
    Expected headers (case-insensitive, extra columns ignored):
      Date, Title, Type, Category, Amount, Payment Method, Note

    Dates are written in the browser's locale, so ``csv_dayfirst`` in the
    config decides whether 03/04/2026 is 3 April or 4 March. Lines with
    too many fields (unquoted commas in a title) are skipped and counted
    in ``bad_lines``.
    """

    def __init__(self, config=None):
        super().__init__(config)
        self.dayfirst = bool(self.config.get('csv_dayfirst', False))
        self.bad_lines = 0

    def _on_bad_line(self, fields):
        self.bad_lines += 1
        logger.warning("Skipping unreadable CSV line: %s", fields)
        return None

    def load(self, file_path, owner_id=None):
        df = pd.read_csv(
            file_path,
            dtype=str,
            keep_default_na=False,
            engine='python',
            on_bad_lines=self._on_bad_line,
        )

        cols = {str(c).strip().lower(): c for c in df.columns}
        def find(frag):
            frag = frag.lower()
            if frag in cols:
                return cols[frag]
            return next((orig for low, orig in cols.items() if frag in low), None)

        date_col    = find('date')
        title_col   = find('title')
        type_col    = find('type')
        cat_col     = find('category')
        amt_col     = find('amount')
        method_col  = find('payment')
        note_col    = find('note')

        for name, col in (('date', date_col), ('type', type_col),
                          ('category', cat_col), ('amount', amt_col)):
            if col is None:
                raise RuntimeError(f"Missing required column '{name}' in {file_path}")

        for _, row in df.iterrows():
            d = pd.to_datetime(row[date_col], errors='coerce', dayfirst=self.dayfirst)
            occurred_on = None if pd.isna(d) else d.date()

            cleaned = _CLEAN_AMOUNT.sub('', str(row[amt_col]))
            amount = parse_amount(cleaned)

            raw_cat = str(row[cat_col]).strip()
            category = Category.parse(raw_cat, default=Category.OTHER)

            yield Transaction(
                id=None,
                amount=amount,
                kind=TransactionKind.parse(row[type_col]),
                category=category,
                occurred_on=occurred_on,
                owner_id=owner_id,
                title=str(row[title_col]).strip() if title_col else '',
                payment_method=str(row[method_col]).strip() if method_col else '',
                note=str(row[note_col]).strip() if note_col else '',
            )
