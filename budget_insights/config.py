# budget_insights/config.py
from __future__ import annotations

import copy
import os
from functools import partial
from pathlib import Path
from typing import Dict

import yaml

from budget_insights.utils import format_amount

DEFAULT_CONFIG: Dict[str, object] = {
    "transaction_loaders": {
        "csv": "budget_insights.loaders.csv_export.CSVExportLoader",
    },
    "output_modules": {
        "console": "budget_insights.outputs.console_output.ConsoleOutput",
        "excel": "budget_insights.outputs.excel_output.ExcelOutput",
    },
    "notifiers": {
        "log": "budget_insights.notifications.log_notifier.LogNotifier",
        "sqlite": "budget_insights.notifications.sqlite_notifier.SQLiteNotifier",
    },
    "owner_id": None,
    "max_insights": 3,
    "currency_symbol": "₹",
    "number_grouping": "indian",
    "output_dir": "./data",
    "notifications_db": "notifications.db",
    "suppress_repeat_alerts": False,
    "csv_dayfirst": False,
    "log_level": "INFO",
}

LOG_LEVEL_ENV = "BUDGET_INSIGHTS_LOG_LEVEL"


def _merge_defaults(current: Dict[str, object], defaults: Dict[str, object]) -> Dict[str, object]:
    """Merge missing default keys into the current config recursively."""
    merged = dict(current)
    for key, value in defaults.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(merged[key], dict):
            merged[key] = _merge_defaults(merged[key], value)
    return merged


def load_config(path: str | Path | None = None) -> Dict[str, object]:
    if path is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    target = Path(path)
    with target.open("r", encoding="utf-8") as fp:
        data = yaml.safe_load(fp) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {target} must be a mapping")
    return _merge_defaults(data, DEFAULT_CONFIG)


def log_level(config: Dict[str, object]) -> str:
    return str(os.getenv(LOG_LEVEL_ENV) or config.get("log_level") or "INFO").upper()


def amount_formatter(config: Dict[str, object]):
    return partial(
        format_amount,
        symbol=config.get("currency_symbol", "₹"),
        grouping=config.get("number_grouping", "indian"),
    )
