"""
Pipeline column definitions.

Each pipeline is an ordered list of columns. A column names the partition
it reads from and the membership test a transaction must pass. Columns are
not required to be disjoint.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from ..classification.predicates import (
    has_accounting_entries,
    has_accounts_payable_payment,
    has_accounts_receivable_payment,
    is_bank_transaction,
    is_cash_only_transaction,
    is_credit_card_transaction,
    is_pos_sale_transaction,
    is_purchase_kind,
    is_sale_transaction,
)
from ..classification.status import (
    is_audit_ready,
    is_done,
    is_pending_bank_match,
    is_reconciled,
    is_unreconciled,
    is_unverified,
    is_verified,
)
from ..models.transaction import ReconciliationType, Transaction

Predicate = Callable[[Transaction], bool]

VIEW_ALL = "View all"
ADD_RULES = "+ Add rules"


class Pipeline(Enum):
    """Pipelines a transaction collection can be classified into."""

    SALES = "sales"
    PURCHASES = "purchases"
    BANK_STATEMENTS = "bank"
    CARD_STATEMENTS = "card"


class Partition(Enum):
    """Server-side collection a column reads from."""

    PENDING = "pending"
    SOURCE_OF_TRUTH = "source_of_truth"
    # Both collections, deduplicated
    ALL = "all"


@dataclass(frozen=True)
class ColumnSpec:
    """Definition of one pipeline column."""

    title: str
    partition: Partition
    predicate: Predicate
    actions: tuple[str, ...] = field(default=(VIEW_ALL,))

    # Use description/"Unknown" for transactions without a third-party name
    title_fallback: bool = False

    def matches(self, tx: Transaction) -> bool:
        return self.predicate(tx)


# Sales


def _non_pos_sale(tx: Transaction) -> bool:
    return (
        not is_purchase_kind(tx)
        and is_sale_transaction(tx)
        and not is_pos_sale_transaction(tx)
    )


def is_unpaid_invoice(tx: Transaction) -> bool:
    return _non_pos_sale(tx) and has_accounts_receivable_payment(tx)


def is_sale_awaiting_bank_match(tx: Transaction) -> bool:
    return (
        _non_pos_sale(tx)
        and is_verified(tx)
        and not is_cash_only_transaction(tx)
        and is_pending_bank_match(tx)
    )


def is_verified_pos_sale(tx: Transaction) -> bool:
    return is_pos_sale_transaction(tx) and is_verified(tx)


def is_settled_sales_invoice(tx: Transaction) -> bool:
    return _non_pos_sale(tx) and is_reconciled(tx)


SALES_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("Unpaid invoices", Partition.ALL, is_unpaid_invoice),
    ColumnSpec("Awaiting bank match", Partition.ALL, is_sale_awaiting_bank_match),
    ColumnSpec("POS Sales", Partition.ALL, is_verified_pos_sale),
    ColumnSpec("Sales Invoices", Partition.ALL, is_settled_sales_invoice),
)


# Purchases


def is_purchase_needing_verification(tx: Transaction) -> bool:
    return is_purchase_kind(tx) and is_unverified(tx)


def is_unpaid_purchase(tx: Transaction) -> bool:
    return (
        is_purchase_kind(tx)
        and is_verified(tx)
        and has_accounts_payable_payment(tx)
        and not is_reconciled(tx)
        and not is_cash_only_transaction(tx)
    )


def _purchase_awaiting(reconciliation_type: ReconciliationType) -> Predicate:
    def predicate(tx: Transaction) -> bool:
        return (
            is_purchase_kind(tx)
            and is_verified(tx)
            and is_pending_bank_match(tx)
            and tx.metadata.reconciliation.type == reconciliation_type.value
        )

    predicate.__name__ = f"is_purchase_awaiting_{reconciliation_type.value}_match"
    return predicate


is_purchase_awaiting_bank_match = _purchase_awaiting(ReconciliationType.BANK_TRANSFER)
is_purchase_awaiting_card_match = _purchase_awaiting(ReconciliationType.CARD)


def is_purchase_done(tx: Transaction) -> bool:
    return is_purchase_kind(tx) and is_verified(tx) and is_done(tx)


PURCHASES_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("Needs verification", Partition.PENDING, is_purchase_needing_verification),
    ColumnSpec("Unpaid purchases", Partition.SOURCE_OF_TRUTH, is_unpaid_purchase),
    ColumnSpec("Awaiting bank match", Partition.SOURCE_OF_TRUTH, is_purchase_awaiting_bank_match),
    ColumnSpec("Awaiting card match", Partition.SOURCE_OF_TRUTH, is_purchase_awaiting_card_match),
    ColumnSpec("All done", Partition.SOURCE_OF_TRUTH, is_purchase_done),
)


# Statements


def statement_columns(is_statement_type: Predicate) -> tuple[ColumnSpec, ...]:
    """
    Columns for a statement pipeline.

    Args:
        is_statement_type: Selects the statement family (bank or card)

    Returns:
        Ordered column specs
    """

    def needs_verification(tx: Transaction) -> bool:
        return is_statement_type(tx) and has_accounting_entries(tx)

    def needs_matching(tx: Transaction) -> bool:
        return is_statement_type(tx) and not has_accounting_entries(tx)

    def could_not_be_matched(tx: Transaction) -> bool:
        return is_statement_type(tx) and is_verified(tx) and is_unreconciled(tx)

    def all_done(tx: Transaction) -> bool:
        return (
            is_statement_type(tx)
            and is_verified(tx)
            and not is_unreconciled(tx)
            and (is_audit_ready(tx) or has_accounting_entries(tx))
        )

    return (
        ColumnSpec(
            "Needs verification",
            Partition.PENDING,
            needs_verification,
            actions=(VIEW_ALL, ADD_RULES),
        ),
        ColumnSpec("Needs matching", Partition.PENDING, needs_matching),
        ColumnSpec(
            "Couldn't be matched",
            Partition.SOURCE_OF_TRUTH,
            could_not_be_matched,
            title_fallback=True,
        ),
        ColumnSpec("All done", Partition.SOURCE_OF_TRUTH, all_done),
    )


PIPELINE_COLUMNS: dict[Pipeline, tuple[ColumnSpec, ...]] = {
    Pipeline.SALES: SALES_COLUMNS,
    Pipeline.PURCHASES: PURCHASES_COLUMNS,
    Pipeline.BANK_STATEMENTS: statement_columns(is_bank_transaction),
    Pipeline.CARD_STATEMENTS: statement_columns(is_credit_card_transaction),
}
