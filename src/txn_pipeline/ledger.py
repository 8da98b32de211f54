"""
Account ledger aggregation.

Walks the accounting lines of reporting-ready transactions for a single
chart-of-accounts account and produces signed rows with a running balance.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Optional, Union
import logging

from .classification.status import is_reporting_ready
from .models.transaction import AccountingEntry, AccountType, Transaction
from .models.views import DateRange, LedgerRow

logger = logging.getLogger(__name__)

# Which side of the books increases each account type
DEBIT_NORMAL_TYPES = frozenset({AccountType.EXPENSE, AccountType.ASSET})
CREDIT_NORMAL_TYPES = frozenset({AccountType.INCOME, AccountType.LIABILITY, AccountType.EQUITY})


def parse_account_type(account_type: Union[str, AccountType]) -> Optional[AccountType]:
    """Return the AccountType for a name, or None when it is not recognized."""
    if isinstance(account_type, AccountType):
        return account_type
    try:
        return AccountType(str(account_type).strip().lower())
    except ValueError:
        return None


def _matching(entries: Iterable[AccountingEntry], account_name: str) -> list[AccountingEntry]:
    return [e for e in entries if e.chart_name == account_name and e.amount]


def _signed_amounts(
    tx: Transaction, account_name: str, account_type: AccountType
) -> list[Decimal]:
    """Signed contributions of one transaction's lines to the account."""
    accounting = tx.accounting
    amounts: list[Decimal] = []

    if account_type in DEBIT_NORMAL_TYPES:
        amounts.extend(e.amount for e in _matching(accounting.debits, account_name))
        if account_type is AccountType.ASSET:
            # Credits to an asset reduce it
            amounts.extend(-e.amount for e in _matching(accounting.credits, account_name))
    elif account_type in CREDIT_NORMAL_TYPES:
        amounts.extend(e.amount for e in _matching(accounting.credits, account_name))

    return amounts


def _describe(tx: Transaction, account_type: AccountType) -> str:
    summary = tx.summary
    return summary.third_party_name or summary.description or account_type.value.capitalize()


def build_ledger(
    transactions: Iterable[Transaction],
    account_name: str,
    account_type: Union[str, AccountType],
    date_range: Optional[DateRange] = None,
) -> list[LedgerRow]:
    """
    Build the ledger for one account.

    Args:
        transactions: Candidate transactions (any order)
        account_name: Chart-of-accounts name matched against entry ``chartName``
        account_type: expense, asset, income, liability or equity
        date_range: Optional inclusive reporting period

    Returns:
        Rows sorted oldest first, each carrying the running balance. An
        unrecognized account type yields no rows.
    """
    resolved_type = parse_account_type(account_type)
    if resolved_type is None:
        logger.warning(
            f"Unrecognized account type '{account_type}' for account '{account_name}'; "
            f"ledger is empty"
        )
        return []

    rows: list[LedgerRow] = []
    in_range_count = 0
    ready_count = 0

    for tx in transactions:
        moment = tx.transaction_datetime
        if date_range is not None and not date_range.contains(moment):
            continue
        in_range_count += 1

        if not is_reporting_ready(tx):
            continue
        ready_count += 1

        description = _describe(tx, resolved_type)
        for amount in _signed_amounts(tx, account_name, resolved_type):
            rows.append(
                LedgerRow(
                    transaction=tx,
                    signed_amount=amount,
                    date=moment,
                    description=description,
                )
            )

    # Stable sort keeps entry order within a transaction
    rows.sort(key=lambda row: row.date)

    balance = Decimal("0")
    for row in rows:
        balance += row.signed_amount
        row.running_balance = balance

    logger.debug(
        f"Ledger {account_name} ({resolved_type.value}): {in_range_count} in range, "
        f"{ready_count} reporting ready, {len(rows)} rows"
    )
    return rows


def ledger_total(rows: list[LedgerRow]) -> Decimal:
    """Closing balance of a ledger."""
    return rows[-1].running_balance if rows else Decimal("0")
