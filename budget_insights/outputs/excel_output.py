# budget_insights/outputs/excel_output.py

"""Excel output module backed by XlsxWriter.

One workbook per evaluated month, named ``Insights<YYYY-MM>.xlsx``. It
holds the ranked insights, a progress table per budget, month-to-date
spend by category with a pie chart, the last six months of income and
expense with a column chart, and savings goal progress when goals are
supplied.
"""

from __future__ import annotations

import os
from datetime import timedelta

import xlsxwriter

from budget_insights.analytics import (
    budget_progress,
    goal_progress,
    summarize_by_category,
    summarize_by_month,
)
from budget_insights.outputs.base import BaseOutput


class ExcelOutput(BaseOutput):
    """Generate a local Excel workbook for one evaluation report."""

    INSIGHTS = "Insights"
    BUDGETS = "Budgets"
    CATEGORIES = "Categories"
    MONTHLY = "Monthly"
    GOALS = "Goals"

    def __init__(self, config: dict):
        self.config = config
        self.output_dir = config.get("output_dir", "data")
        self.symbol = config.get("currency_symbol", "₹")
        os.makedirs(self.output_dir, exist_ok=True)

    def path_for(self, report) -> str:
        return os.path.join(
            self.output_dir, f"Insights{report.evaluated_at:%Y-%m}.xlsx"
        )

    def write(self, report, goals=None):
        out_path = self.path_for(report)
        workbook = xlsxwriter.Workbook(out_path)
        amount_fmt = workbook.add_format({"num_format": f'"{self.symbol}"#,##0.00'})
        pct_fmt = workbook.add_format({"num_format": "0.0"})

        # Insights worksheet, in ranked order
        ws = workbook.add_worksheet(self.INSIGHTS)
        ws.write_row(0, 0, ["severity", "category", "message"])
        if not report.insights:
            ws.write(1, 2, "Everything looks good!")
        for idx, insight in enumerate(report.insights, start=1):
            ws.write_row(idx, 0, [insight.severity.value, insight.category.value, insight.message])
        ws.set_column(2, 2, 60)

        # Budgets worksheet with progress per budget
        ws = workbook.add_worksheet(self.BUDGETS)
        ws.freeze_panes(1, 0)
        headers = ["category", "spent", "limit", "remaining", "percentage", "status"]
        ws.write_row(0, 0, headers)
        rows = budget_progress(report.evaluations)
        for idx, row in enumerate(rows, start=1):
            ws.write(idx, 0, row["category"])
            ws.write_number(idx, 1, float(row["spent"]), amount_fmt)
            ws.write_number(idx, 2, float(row["limit"]), amount_fmt)
            ws.write_number(idx, 3, float(row["remaining"]), amount_fmt)
            ws.write_number(idx, 4, float(row["percentage"]), pct_fmt)
            ws.write(idx, 5, row["status"])
        if rows:
            ws.add_table(0, 0, len(rows), len(headers) - 1, {
                "columns": [{"header": h} for h in headers]
            })

        # Categories worksheet: month-to-date spend (summaries take an inclusive end)
        ws = workbook.add_worksheet(self.CATEGORIES)
        ws.write_row(0, 0, ["Category", "Total"])
        cats = summarize_by_category(
            report.transactions,
            start_date=report.window_start,
            end_date=report.window_end - timedelta(days=1),
        )
        for idx, row in enumerate(cats, start=1):
            ws.write(idx, 0, row["category"])
            ws.write_number(idx, 1, float(row["total"]), amount_fmt)
        if cats:
            chart = workbook.add_chart({"type": "pie"})
            chart.add_series({
                "categories": [ws.name, 1, 0, len(cats), 0],
                "values": [ws.name, 1, 1, len(cats), 1],
                "name": "Spending by category",
            })
            chart.set_title({"name": "Spending by category"})
            ws.insert_chart(0, 3, chart)

        # Monthly worksheet: income vs expense over the last six months
        ws = workbook.add_worksheet(self.MONTHLY)
        ws.write_row(0, 0, ["Month", "Income", "Expense"])
        months = summarize_by_month(report.transactions)
        for idx, row in enumerate(months, start=1):
            ws.write(idx, 0, row["period"])
            ws.write_number(idx, 1, float(row["income"]), amount_fmt)
            ws.write_number(idx, 2, float(row["expense"]), amount_fmt)
        if months:
            chart = workbook.add_chart({"type": "column"})
            for col, name in ((1, "Income"), (2, "Expense")):
                chart.add_series({
                    "categories": [ws.name, 1, 0, len(months), 0],
                    "values": [ws.name, 1, col, len(months), col],
                    "name": name,
                })
            chart.set_title({"name": "Income vs expense"})
            chart.set_legend({"position": "bottom"})
            ws.insert_chart(0, 4, chart)

        if goals:
            ws = workbook.add_worksheet(self.GOALS)
            ws.write_row(0, 0, ["title", "current", "target", "percentage", "deadline"])
            for idx, row in enumerate(goal_progress(goals), start=1):
                ws.write(idx, 0, row["title"])
                ws.write_number(idx, 1, float(row["current"]), amount_fmt)
                ws.write_number(idx, 2, float(row["target"]), amount_fmt)
                ws.write_number(idx, 3, float(row["percentage"]), pct_fmt)
                ws.write(idx, 4, row["deadline"] or "")

        workbook.close()
        print(f"Written Excel workbook {out_path}")
        return out_path
