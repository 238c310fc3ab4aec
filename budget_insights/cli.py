# budget_insights/cli.py
import logging
import os
from datetime import date

import click
import yaml
from dotenv import load_dotenv

from budget_insights.config import amount_formatter, load_config, log_level
from budget_insights.engine import evaluate_snapshot
from budget_insights.loaders import get_loader
from budget_insights.notifications import dispatch_alerts, get_notifier
from budget_insights.outputs import get_output
from budget_insights.snapshot import load_snapshot, snapshot_owners
from budget_insights.utils import dedupe_transactions


def _parse_as_of(ctx, param, value):
    if value is None:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"expected YYYY-MM-DD, got '{value}'") from None


@click.command()
@click.option(
    '--snapshot', 'snapshot_path',
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help='YAML file with budgets, savings goals and (optionally) transactions.'
)
@click.option(
    '--transactions', 'transaction_files',
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help='Extra transaction files (history CSV export). May be repeated.'
)
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to config.yaml (defaults are used when omitted)'
)
@click.option(
    '--owner', 'owner_id',
    default=None,
    help='Only evaluate records belonging to this owner id.'
)
@click.option(
    '--as-of', 'as_of',
    default=None,
    callback=_parse_as_of,
    help='Evaluation date (YYYY-MM-DD). Defaults to today.'
)
@click.option(
    '--max-insights',
    default=None,
    type=click.IntRange(min=0),
    help='Maximum number of insights to show (config default: 3).'
)
@click.option(
    '--output', 'output_format',
    default='console',
    type=click.Choice(['console', 'excel']),
    help='Report target: console or excel'
)
@click.option(
    '--notify', 'notifier_name',
    default='none',
    type=click.Choice(['none', 'log', 'sqlite']),
    help='Send an alert for every exceeded budget through this notifier.'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file (e.g. BUDGET_INSIGHTS_LOG_LEVEL)'
)
def main(snapshot_path, transaction_files, config_path, owner_id, as_of,
         max_insights, output_format, notifier_name, env_file):
    """
    Evaluate month-to-date spending against per-category budgets, print
    the top insights (or write an Excel report), and optionally hand an
    alert for each exceeded budget to a notifier.
    """
    if env_file:
        load_dotenv(env_file)

    cfg = load_config(config_path)
    logging.basicConfig(level=log_level(cfg))
    owner_id = owner_id or cfg.get('owner_id')
    if max_insights is None:
        max_insights = int(cfg.get('max_insights', 3))

    try:
        snapshot = load_snapshot(snapshot_path, owner_id=owner_id)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Error loading snapshot {snapshot_path}: {e}")

    if owner_id is None:
        owners = snapshot_owners(snapshot)
        if len(owners) > 1:
            raise click.ClickException(
                f"Snapshot {snapshot_path} holds records for several owners "
                f"({', '.join(owners)}); choose one with --owner."
            )
        # A single-owner snapshot also owns the rows of imported files.
        owner_id = owners[0] if owners else None

    all_txs = list(snapshot.transactions)
    for path in transaction_files:
        ext = os.path.splitext(path)[1].lstrip('.').lower()
        if ext not in cfg['transaction_loaders']:
            click.echo(f"⚠️  Skipping file with unknown format: {path}", err=True)
            continue
        loader = get_loader(ext, cfg)
        try:
            all_txs.extend(loader.load(path, owner_id=owner_id))
        except Exception as e:
            raise click.ClickException(f"Error loading transactions from {path}: {e}")

    unique_txs = dedupe_transactions(all_txs)
    fmt = amount_formatter(cfg)
    report = evaluate_snapshot(
        as_of, unique_txs, snapshot.budgets, max_insights=max_insights, formatter=fmt
    )

    outputter = get_output(output_format, cfg)
    outputter.write(report, goals=snapshot.goals)

    if report.skipped_transactions:
        click.echo(
            f"Skipped {report.skipped_transactions} malformed transaction(s).", err=True
        )
    if report.skipped_budgets:
        click.echo(
            f"Ignored {report.skipped_budgets} budget(s) without a positive limit.", err=True
        )

    if notifier_name != 'none' and report.alerts:
        notifier = get_notifier(notifier_name, cfg)
        sent = dispatch_alerts(report.alerts, notifier, fmt)
        click.echo(f"Sent {sent} of {len(report.alerts)} budget alert(s) via {notifier_name}.")

    click.echo(
        f"Evaluated {len(report.evaluations)} budget(s) against "
        f"{len(unique_txs)} transaction(s)."
    )
