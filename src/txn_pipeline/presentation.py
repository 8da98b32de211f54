"""
Presentation adapter: turns classified transactions into display stubs.

Amount formatting is delegated to an injectable formatter with the
signature ``(amount, currency, is_default_currency) -> str``.
"""

from collections.abc import Callable, Iterable
from datetime import date
from decimal import Decimal
from typing import Optional
import logging

from .classification.predicates import is_credit_to_account
from .classification.status import is_reporting_ready
from .models.transaction import Transaction
from .models.views import DateGroup, TransactionStub

logger = logging.getLogger(__name__)

AmountFormatter = Callable[[Decimal, str, bool], str]

DEFAULT_TITLE_LENGTH = 24
UNKNOWN_TITLE = "Unknown"


def format_amount(
    amount: Decimal,
    currency: str = "GBP",
    is_default_currency: bool = False,
) -> str:
    """
    Format an amount with two decimals and thousands separators.

    Amounts in the business's own currency are shown as a bare number;
    foreign amounts are prefixed with their currency code.
    """
    formatted = f"{Decimal(amount):,.2f}"
    if is_default_currency:
        return formatted
    return f"{currency.upper()}{formatted}"


def truncate_title(title: Optional[str], max_length: int = DEFAULT_TITLE_LENGTH) -> str:
    if not title:
        return ""
    return title[:max_length] + "..." if len(title) > max_length else title


def deduplicate_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """
    Keep the first occurrence of each transaction id.

    Records without an id cannot be told apart and are dropped.
    """
    seen: set[str] = set()
    unique: list[Transaction] = []
    for tx in transactions:
        if not tx.id:
            logger.debug("Dropping transaction without an id")
            continue
        if tx.id in seen:
            continue
        seen.add(tx.id)
        unique.append(tx)
    return unique


def to_stub(
    tx: Transaction,
    formatter: AmountFormatter = format_amount,
    title_fallback: bool = False,
    max_title_length: int = DEFAULT_TITLE_LENGTH,
) -> TransactionStub:
    """
    Build the display stub for a transaction.

    Args:
        tx: Transaction to project
        formatter: Amount formatter collaborator
        title_fallback: Fall back to the description, then "Unknown", when
            the third-party name is empty
        max_title_length: Title length before ellipsis

    Returns:
        TransactionStub referencing the original transaction
    """
    summary = tx.summary
    title = summary.third_party_name
    if title_fallback:
        title = title or summary.description or UNKNOWN_TITLE

    return TransactionStub(
        id=tx.id,
        title=truncate_title(title, max_title_length),
        amount=formatter(summary.total_amount, summary.currency, True),
        original_transaction=tx,
        is_credit=is_credit_to_account(tx),
        is_reporting_ready=is_reporting_ready(tx),
    )


def sort_most_recent_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    return sorted(transactions, key=lambda tx: tx.summary.transaction_date, reverse=True)


def filter_stubs(stubs: Iterable[TransactionStub], query: Optional[str]) -> list[TransactionStub]:
    """Case-insensitive search over title, amount, third-party name and description."""
    stubs = list(stubs)
    if not query or not query.strip():
        return stubs

    needle = query.strip().lower()
    matches: list[TransactionStub] = []
    for stub in stubs:
        summary = stub.original_transaction.summary
        haystacks = (
            stub.title,
            stub.amount,
            summary.third_party_name or "",
            summary.description or "",
        )
        if any(needle in text.lower() for text in haystacks):
            matches.append(stub)
    return matches


def date_label(day: date) -> str:
    """Long day label, e.g. ``Monday 4 March``."""
    return f"{day:%A} {day.day} {day:%B}"


def group_by_date(
    stubs: Iterable[TransactionStub],
    default_currency: str = "GBP",
) -> list[DateGroup]:
    """
    Group stubs by local calendar day.

    Days are ordered newest first, as are the items within a day. Each
    group's total is the sum of absolute amounts in its dominant currency,
    the currency with the largest such sum.
    """
    by_day: dict[date, list[TransactionStub]] = {}
    for stub in stubs:
        day = stub.original_transaction.transaction_datetime.date()
        by_day.setdefault(day, []).append(stub)

    groups: list[DateGroup] = []
    for day, items in by_day.items():
        currency_totals: dict[str, Decimal] = {}
        for item in items:
            summary = item.original_transaction.summary
            item_currency = summary.currency or default_currency
            currency_totals[item_currency] = currency_totals.get(
                item_currency, Decimal("0")
            ) + abs(summary.total_amount)

        currency = default_currency
        max_total = Decimal("0")
        for candidate, total in currency_totals.items():
            if total > max_total:
                currency, max_total = candidate, total

        groups.append(
            DateGroup(
                date=day,
                label=date_label(day),
                items=sorted(items, key=lambda s: s.transaction_date, reverse=True),
                total_amount=currency_totals.get(currency, Decimal("0")),
                currency=currency,
            )
        )

    groups.sort(key=lambda g: g.date, reverse=True)
    return groups
