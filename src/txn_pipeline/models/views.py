"""Derived, display-oriented views over transactions. Never persisted."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional

from .transaction import Transaction


@dataclass
class TransactionStub:
    """Minimal display projection of a classified transaction."""

    id: str

    # Third-party name, truncated for list display
    title: str

    # Formatted total amount
    amount: str

    original_transaction: Transaction

    # True when money flows into the business
    is_credit: Optional[bool] = None
    is_reporting_ready: Optional[bool] = None

    @property
    def transaction_date(self) -> int:
        return self.original_transaction.summary.transaction_date


@dataclass
class PipelineColumn:
    """One stage of a pipeline board, as produced by a single classification pass."""

    title: str
    actions: list[str] = field(default_factory=list)
    transactions: list[TransactionStub] = field(default_factory=list)

    # Number of matching transactions before the display cap
    total_count: int = 0

    @property
    def has_more(self) -> bool:
        """Whether the column was capped."""
        return self.total_count > len(self.transactions)


@dataclass
class LedgerRow:
    """A signed contribution of one accounting entry to an account."""

    transaction: Transaction
    signed_amount: Decimal
    date: datetime
    description: str
    running_balance: Decimal = Decimal("0")


@dataclass
class DateGroup:
    """Stubs sharing a local calendar day."""

    date: date
    label: str
    items: list[TransactionStub]
    total_amount: Decimal
    currency: str


@dataclass(frozen=True)
class DateRange:
    """
    Inclusive reporting period.

    Either end may be open. Bounds are widened to whole local days: the
    start to midnight and the end to 23:59:59.999.
    """

    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def start_bound(self) -> Optional[datetime]:
        if self.start is None:
            return None
        return datetime.combine(_as_date(self.start), time.min)

    @property
    def end_bound(self) -> Optional[datetime]:
        if self.end is None:
            return None
        return datetime.combine(_as_date(self.end), time(23, 59, 59, 999000))

    def contains(self, moment: datetime) -> bool:
        """Check whether a local datetime falls inside the range."""
        start = self.start_bound
        end = self.end_bound
        if start is not None and moment < start:
            return False
        if end is not None and moment > end:
            return False
        return True


def _as_date(value: date) -> date:
    # datetime is a subclass of date
    return value.date() if isinstance(value, datetime) else value
