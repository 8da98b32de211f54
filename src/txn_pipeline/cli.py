"""
Command-line interface for the transaction pipeline.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional
import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from .classification.predicates import (
    has_accounts_payable_payment,
    has_accounts_receivable_payment,
    is_cash_only_transaction,
    is_credit_to_account,
    is_pos_sale_transaction,
    is_receipt_transaction,
    is_statement_transaction,
    resolve_transaction_kind,
)
from .classification.status import audit_badge, is_reporting_ready
from .config import PipelineConfig, generate_default_config, load_config
from .context import BusinessContext
from .ledger import build_ledger, ledger_total, parse_account_type
from .loader import TransactionLoader
from .models.transaction import AccountType
from .models.views import DateRange, PipelineColumn, TransactionStub
from .pipelines.columns import Pipeline
from .pipelines.engine import PipelineClassifier
from .presentation import filter_stubs, format_amount, group_by_date
from .reports.excel_generator import ExcelReportGenerator
from .utils.exceptions import PipelineError
from .utils.logging_config import parse_level, setup_logging

console = Console()

PIPELINE_CHOICES = [p.value for p in Pipeline]
ACCOUNT_TYPE_CHOICES = [t.value for t in AccountType]


def _prepare(config_path: Optional[Path], verbose: bool) -> PipelineConfig:
    """Load configuration and set up logging from it."""
    app_config = load_config(config_path)
    level = logging.DEBUG if verbose else parse_level(app_config.logging.level)
    log_file = Path(app_config.logging.file) if app_config.logging.file else None
    setup_logging(level, log_file=log_file, log_format=app_config.logging.format)
    return app_config


def _classifier(config: PipelineConfig, business_id: Optional[str]) -> PipelineClassifier:
    context = BusinessContext(business_id) if business_id else None
    return PipelineClassifier(config, context=context)


def _fail(message: str, verbose: bool) -> None:
    console.print(f"[red]Error: {message}[/red]")
    if verbose:
        console.print_exception()
    sys.exit(1)


@click.group()
@click.version_option(version="0.1.0")
def main():
    """Transaction lifecycle pipelines and account ledgers."""
    pass


@main.command()
@click.argument("transactions_file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-p",
    "--pipeline",
    type=click.Choice(PIPELINE_CHOICES),
    required=True,
    help="Pipeline to build",
)
@click.option("--all", "show_all", is_flag=True, help="Show every transaction per column")
@click.option("--business-id", default=None, help="Only classify this business's records")
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("--export", type=click.Path(path_type=Path), help="Excel file, or directory for a templated file name")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def board(
    transactions_file: Path,
    pipeline: str,
    show_all: bool,
    business_id: Optional[str],
    config: Optional[Path],
    export: Optional[Path],
    verbose: bool,
):
    """
    Classify transactions into a pipeline board.

    TRANSACTIONS_FILE: JSON list, list response or partitions document
    """
    try:
        app_config = _prepare(config, verbose)
        partitions = TransactionLoader().load_partitions(transactions_file)
        selected = Pipeline(pipeline)

        columns = _classifier(app_config, business_id).classify(
            selected, partitions, show_all=show_all
        )
        for column in columns:
            _display_column(column)

        if export:
            generator = ExcelReportGenerator(app_config)
            if export.is_dir():
                export = export / generator.board_filename(selected)
            generator.generate_board_report(selected, columns, export)
            console.print(f"\n[green]Report generated: {export}[/green]")

    except PipelineError as e:
        _fail(str(e), verbose)


@main.command("view-all")
@click.argument("transactions_file", type=click.Path(exists=True, path_type=Path))
@click.option("-p", "--pipeline", type=click.Choice(PIPELINE_CHOICES), required=True)
@click.option("--column", "column_title", required=True, help="Column title, e.g. 'All done'")
@click.option("--search", default=None, help="Filter by title, amount, name or description")
@click.option("--business-id", default=None)
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
@click.option("-v", "--verbose", is_flag=True)
def view_all(
    transactions_file: Path,
    pipeline: str,
    column_title: str,
    search: Optional[str],
    business_id: Optional[str],
    config: Optional[Path],
    verbose: bool,
):
    """List every transaction in one pipeline column."""
    try:
        app_config = _prepare(config, verbose)
        partitions = TransactionLoader().load_partitions(transactions_file)
        stubs = _classifier(app_config, business_id).view_all(
            Pipeline(pipeline), column_title, partitions
        )
        stubs = filter_stubs(stubs, search)
        _display_column(
            PipelineColumn(title=column_title, transactions=stubs, total_count=len(stubs))
        )
    except PipelineError as e:
        _fail(str(e), verbose)


@main.command()
@click.argument("transactions_file", type=click.Path(exists=True, path_type=Path))
@click.option("-v", "--verbose", is_flag=True)
def classify(transactions_file: Path, verbose: bool):
    """Show how each transaction is classified."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)

    try:
        transactions = TransactionLoader().load_file(transactions_file)
    except PipelineError as e:
        _fail(str(e), verbose)
        return

    table = Table(title=f"Classification: {transactions_file.name}")
    table.add_column("ID")
    table.add_column("Kind")
    table.add_column("Statement")
    table.add_column("POS")
    table.add_column("Receipt")
    table.add_column("Payment")
    table.add_column("Credit")
    table.add_column("Reporting ready")
    table.add_column("Audit")

    for tx in transactions:
        if has_accounts_receivable_payment(tx):
            payment = "receivable"
        elif has_accounts_payable_payment(tx):
            payment = "payable"
        elif is_cash_only_transaction(tx):
            payment = "cash"
        else:
            payment = "-"
        badge = audit_badge(tx)
        table.add_row(
            tx.id,
            resolve_transaction_kind(tx).value,
            _yes(is_statement_transaction(tx)),
            _yes(is_pos_sale_transaction(tx)),
            _yes(is_receipt_transaction(tx)),
            payment,
            _yes(is_credit_to_account(tx)),
            _yes(is_reporting_ready(tx)),
            badge.value if badge else "-",
        )

    console.print(table)
    console.print(f"\nTotal transactions: {len(transactions)}")


@main.command()
@click.argument("transactions_file", type=click.Path(exists=True, path_type=Path))
@click.option("-a", "--account", "account_name", required=True, help="Chart-of-accounts name")
@click.option(
    "-t",
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPE_CHOICES),
    required=True,
    help="Account type",
)
@click.option("--start", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("--end", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
@click.option("--export", type=click.Path(path_type=Path), help="Excel file, or directory for a templated file name")
@click.option("-v", "--verbose", is_flag=True)
def ledger(
    transactions_file: Path,
    account_name: str,
    account_type: str,
    start: Optional[datetime],
    end: Optional[datetime],
    config: Optional[Path],
    export: Optional[Path],
    verbose: bool,
):
    """
    Show the ledger of one account.

    TRANSACTIONS_FILE: JSON list, list response or partitions document
    """
    try:
        app_config = _prepare(config, verbose)
        transactions = TransactionLoader().load_file(transactions_file)
        date_range = None
        if start or end:
            date_range = DateRange(
                start=start.date() if start else None,
                end=end.date() if end else None,
            )

        rows = build_ledger(transactions, account_name, account_type, date_range)

        table = Table(title=f"{account_name} ({account_type})")
        table.add_column("Date")
        table.add_column("Description")
        table.add_column("Amount", justify="right")
        table.add_column("Balance", justify="right")
        for row in rows:
            table.add_row(
                row.date.strftime("%Y-%m-%d"),
                row.description,
                f"{row.signed_amount:,.2f}",
                f"{row.running_balance:,.2f}",
            )
        console.print(table)
        console.print(f"\nClosing balance: {ledger_total(rows):,.2f}")

        if export:
            resolved = parse_account_type(account_type)
            generator = ExcelReportGenerator(app_config)
            if export.is_dir():
                export = export / generator.ledger_filename(account_name)
            generator.generate_ledger_report(
                account_name, resolved.value if resolved else account_type, rows, export
            )
            console.print(f"\n[green]Report generated: {export}[/green]")

    except PipelineError as e:
        _fail(str(e), verbose)


@main.command()
@click.argument("transactions_file", type=click.Path(exists=True, path_type=Path))
@click.option("--search", default=None, help="Filter by title, amount, name or description")
@click.option("--business-id", default=None)
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
@click.option("-v", "--verbose", is_flag=True)
def ready(
    transactions_file: Path,
    search: Optional[str],
    business_id: Optional[str],
    config: Optional[Path],
    verbose: bool,
):
    """List reporting-ready transactions grouped by day."""
    try:
        app_config = _prepare(config, verbose)
        partitions = TransactionLoader().load_partitions(transactions_file)
        feed = _classifier(app_config, business_id).reporting_ready(partitions)
        stubs = filter_stubs(feed, search)
        default_currency = app_config.pipeline.default_currency

        for group in group_by_date(stubs, default_currency):
            total = format_amount(
                group.total_amount, group.currency, group.currency == default_currency
            )
            table = Table(title=f"{group.label} ({total})")
            table.add_column("ID", style="cyan")
            table.add_column("Title")
            table.add_column("Amount", justify="right")
            table.add_column("")
            for stub in group.items:
                table.add_row(stub.id, stub.title, stub.amount, _flags(stub))
            console.print(table)

        console.print(f"\nReporting-ready transactions: {len(stubs)}")
    except PipelineError as e:
        _fail(str(e), verbose)


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


def _yes(value: bool) -> str:
    return "yes" if value else "-"


def _display_column(column: PipelineColumn) -> None:
    """Display one pipeline column in the console."""
    table = Table(title=f"{column.title} ({column.total_count})")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Amount", justify="right")
    table.add_column("")

    for stub in column.transactions:
        table.add_row(stub.id, stub.title, stub.amount, _flags(stub))

    console.print(table)

    if column.has_more:
        console.print(f"... and {column.total_count - len(column.transactions)} more")


def _flags(stub: TransactionStub) -> str:
    flags = []
    if stub.is_credit:
        flags.append("credit")
    badge = audit_badge(stub.original_transaction)
    if badge is not None:
        flags.append(badge.value)
    return ", ".join(flags)


if __name__ == "__main__":
    main()
