import yaml
from click.testing import CliRunner

from budget_insights import cli as cli_module
from budget_insights.cli import main as cli
from budget_insights.notifications.sqlite_notifier import fetch_notifications


def write_snapshot(path, food_spent=4200):
    snapshot = {
        "owner_id": "u1",
        "budgets": [
            {"category": "Food", "limit": 5000},
            {"category": "Rent", "limit": 15000},
            {"category": "Bills", "limit": 0},
        ],
        "goals": [
            {"title": "Bike", "target_amount": 80000, "current_amount": 20000},
        ],
        "transactions": [
            {"id": "t1", "date": "2026-10-05", "type": "expense",
             "category": "Food", "amount": food_spent},
            {"id": "t2", "date": "2026-10-01", "type": "income",
             "category": "Salary", "amount": 50000},
            {"id": "t3", "date": "2026-10-02", "type": "expense",
             "category": "Rent", "amount": "oops"},
        ],
    }
    with open(path, "w") as f:
        yaml.safe_dump(snapshot, f)
    return path


def test_cli_prints_insights(tmp_path):
    snap = write_snapshot(tmp_path / "snapshot.yaml")

    res = CliRunner().invoke(cli, ["--snapshot", str(snap), "--as-of", "2026-10-19"])

    assert res.exit_code == 0, res.output
    assert "You've spent 80% of your Food budget!" in res.output
    assert "Bike" in res.output
    assert "Skipped 1 malformed transaction(s)." in res.output
    assert "Ignored 1 budget(s) without a positive limit." in res.output
    assert "Evaluated 2 budget(s) against 3 transaction(s)." in res.output


def test_cli_everything_looks_good(tmp_path):
    snap = write_snapshot(tmp_path / "snapshot.yaml", food_spent=100)

    res = CliRunner().invoke(cli, ["--snapshot", str(snap), "--as-of", "2026-10-19"])

    assert res.exit_code == 0, res.output
    assert "Everything looks good!" in res.output


def test_cli_merges_history_csv_and_notifies(tmp_path):
    snap = write_snapshot(tmp_path / "snapshot.yaml")
    history = tmp_path / "history.csv"
    history.write_text(
        "Date,Title,Type,Category,Amount,Payment Method,Note\n"
        "2026-10-10,Restaurant,expense,Food,1800,Card,\n",
        encoding="utf-8",
    )
    db_path = tmp_path / "notifications.db"
    config_path = tmp_path / "config.yaml"
    with open(config_path, "w") as f:
        yaml.safe_dump({"notifications_db": str(db_path)}, f)

    res = CliRunner().invoke(cli, [
        "--snapshot", str(snap),
        "--transactions", str(history),
        "--config", str(config_path),
        "--as-of", "2026-10-19",
        "--notify", "sqlite",
        "--owner", "u1",
    ])

    assert res.exit_code == 0, res.output
    assert "Over budget in Food by ₹1,000!" in res.output
    assert "Sent 1 of 1 budget alert(s) via sqlite." in res.output
    rows = fetch_notifications(str(db_path), owner_id="u1")
    assert len(rows) == 1
    assert rows[0]["message"] == (
        "You have spent ₹6,000 in Food, which exceeds your budget of ₹5,000."
    )


def test_cli_excel_output(tmp_path):
    snap = write_snapshot(tmp_path / "snapshot.yaml")
    config_path = tmp_path / "config.yaml"
    with open(config_path, "w") as f:
        yaml.safe_dump({"output_dir": str(tmp_path / "out")}, f)

    res = CliRunner().invoke(cli, [
        "--snapshot", str(snap),
        "--config", str(config_path),
        "--as-of", "2026-10-19",
        "--output", "excel",
    ])

    assert res.exit_code == 0, res.output
    assert (tmp_path / "out" / "Insights2026-10.xlsx").exists()


def test_cli_owner_filter(tmp_path):
    snap = write_snapshot(tmp_path / "snapshot.yaml", food_spent=9000)

    res = CliRunner().invoke(cli, [
        "--snapshot", str(snap), "--as-of", "2026-10-19", "--owner", "someone-else",
    ])

    assert res.exit_code == 0, res.output
    assert "Evaluated 0 budget(s) against 0 transaction(s)." in res.output


def test_cli_rejects_bad_date(tmp_path):
    snap = write_snapshot(tmp_path / "snapshot.yaml")
    res = CliRunner().invoke(cli, ["--snapshot", str(snap), "--as-of", "19/10/2026"])
    assert res.exit_code != 0
    assert "YYYY-MM-DD" in res.output


def test_cli_reports_bad_snapshot(tmp_path):
    snap = tmp_path / "snapshot.yaml"
    snap.write_text("budgets:\n  - category: Gadgets\n    limit: 10\n")
    res = CliRunner().invoke(cli, ["--snapshot", str(snap)])
    assert res.exit_code == 1
    assert "Error loading snapshot" in res.output


def test_cli_skips_unknown_transaction_format(tmp_path):
    snap = write_snapshot(tmp_path / "snapshot.yaml")
    other = tmp_path / "statement.pdf"
    other.write_text("binary")
    res = CliRunner().invoke(cli, [
        "--snapshot", str(snap), "--transactions", str(other), "--as-of", "2026-10-19",
    ])
    assert res.exit_code == 0, res.output
    assert "Skipping file with unknown format" in res.output


def write_history(path, *rows):
    lines = ["Date,Title,Type,Category,Amount,Payment Method,Note", *rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def test_cli_counts_identical_history_rows_separately(tmp_path):
    snap = tmp_path / "snapshot.yaml"
    with open(snap, "w") as f:
        yaml.safe_dump({"owner_id": "u1", "budgets": [{"category": "Food", "limit": 100}]}, f)
    history = write_history(
        tmp_path / "history.csv",
        "2026-10-10,Tea,expense,Food,60,UPI,",
        "2026-10-10,Tea,expense,Food,60,UPI,",
    )

    res = CliRunner().invoke(cli, [
        "--snapshot", str(snap), "--transactions", str(history), "--as-of", "2026-10-19",
    ])

    assert res.exit_code == 0, res.output
    assert "Over budget in Food by ₹20!" in res.output
    assert "Evaluated 1 budget(s) against 2 transaction(s)." in res.output


def test_cli_history_rows_join_the_single_snapshot_owner(tmp_path, monkeypatch):
    snap = write_snapshot(tmp_path / "snapshot.yaml")
    history = write_history(
        tmp_path / "history.csv", "2026-10-10,Restaurant,expense,Food,1800,Card,"
    )
    seen = {}

    real_evaluate = cli_module.evaluate_snapshot

    def recording_evaluate(now, transactions, budgets, **kwargs):
        seen["owners"] = {tx.owner_id for tx in transactions}
        return real_evaluate(now, transactions, budgets, **kwargs)

    monkeypatch.setattr(cli_module, "evaluate_snapshot", recording_evaluate)

    res = CliRunner().invoke(cli, [
        "--snapshot", str(snap), "--transactions", str(history), "--as-of", "2026-10-19",
    ])

    assert res.exit_code == 0, res.output
    assert seen["owners"] == {"u1"}
    assert "Over budget in Food by ₹1,000!" in res.output


def write_two_owner_snapshot(path):
    snapshot = {
        "budgets": [
            {"owner_id": "a", "category": "Food", "limit": 5000},
            {"owner_id": "b", "category": "Food", "limit": 5000},
        ],
        "transactions": [
            {"id": "a1", "owner_id": "a", "date": "2026-10-05", "type": "expense",
             "category": "Food", "amount": 3000},
            {"id": "b1", "owner_id": "b", "date": "2026-10-06", "type": "expense",
             "category": "Food", "amount": 3000},
        ],
    }
    with open(path, "w") as f:
        yaml.safe_dump(snapshot, f)
    return path


def test_cli_rejects_several_owners_without_owner_option(tmp_path):
    snap = write_two_owner_snapshot(tmp_path / "snapshot.yaml")

    res = CliRunner().invoke(cli, ["--snapshot", str(snap), "--as-of", "2026-10-19"])

    assert res.exit_code == 1
    assert "several owners (a, b)" in res.output
    assert "Over budget" not in res.output


def test_cli_evaluates_one_owner_of_several(tmp_path):
    snap = write_two_owner_snapshot(tmp_path / "snapshot.yaml")

    res = CliRunner().invoke(cli, [
        "--snapshot", str(snap), "--as-of", "2026-10-19", "--owner", "a",
    ])

    assert res.exit_code == 0, res.output
    assert "Over budget" not in res.output
    assert "Everything looks good!" in res.output
    assert "Evaluated 1 budget(s) against 1 transaction(s)." in res.output
