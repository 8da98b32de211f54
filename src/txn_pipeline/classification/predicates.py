"""
Classification predicates.

Each predicate is a pure ``(Transaction) -> bool`` function. They read only
validated fields, so a missing section simply fails the condition.
"""

from typing import Optional

from ..models.transaction import CaptureSource, Transaction, TransactionKind
from .payment_methods import payment_method_types

BANK_STATEMENT_SOURCES = frozenset(
    {
        CaptureSource.BANK_STATEMENT_UPLOAD.value,
        CaptureSource.BANK_STATEMENT_OCR.value,
    }
)
RECEIPT_SOURCES = frozenset(
    {
        CaptureSource.PURCHASE_INVOICE_OCR.value,
        CaptureSource.MANUAL_ENTRY.value,
    }
)
RECEIPT_MECHANISMS = frozenset({"ocr", "manual"})

ACCOUNTS_RECEIVABLE_NAMES = frozenset(
    {"accounts_receivable", "accountsreceivable", "accounts receivable"}
)
ACCOUNTS_PAYABLE_NAMES = frozenset(
    {"accounts_payable", "accountspayable", "accounts payable"}
)
CASH = "cash"

BANK_CHART_NAME = "Bank"
CARD_CHART_NAME = "Card"


def is_bank_transaction(tx: Transaction) -> bool:
    """Bank statement entry, uploaded or from the legacy OCR import."""
    return tx.metadata.capture.source in BANK_STATEMENT_SOURCES


def is_credit_card_transaction(tx: Transaction) -> bool:
    """Credit card statement entry."""
    return tx.metadata.capture.source == CaptureSource.CREDIT_CARD_STATEMENT_UPLOAD.value


def is_statement_transaction(tx: Transaction) -> bool:
    return is_bank_transaction(tx) or is_credit_card_transaction(tx)


def is_pos_sale_transaction(tx: Transaction) -> bool:
    """One-off point-of-sale item that is also classified as a sale."""
    return (
        tx.metadata.capture.source == CaptureSource.POS_ONE_OFF_ITEM.value
        and tx.kind == TransactionKind.SALE.value
    )


def is_receipt_transaction(tx: Transaction) -> bool:
    """Purchase captured from a receipt photo or typed in by hand."""
    capture = tx.metadata.capture
    source = capture.source or ""
    return (
        source in RECEIPT_SOURCES
        or capture.mechanism in RECEIPT_MECHANISMS
        or "purchase" in source
    )


def kind_from_classification(tx: Transaction) -> Optional[TransactionKind]:
    """Explicit backend classification, if it says sale or purchase."""
    if tx.kind == TransactionKind.SALE.value:
        return TransactionKind.SALE
    if tx.kind == TransactionKind.PURCHASE.value:
        return TransactionKind.PURCHASE
    return None


def kind_from_accounting(tx: Transaction) -> Optional[TransactionKind]:
    """An income credit line means the transaction is a sale."""
    if any(credit.is_income is True for credit in tx.accounting.credits):
        return TransactionKind.SALE
    return None


def sale_kind_from_capture_source(tx: Transaction) -> Optional[TransactionKind]:
    """
    Weakest signal: guess a sale from the capture source string.

    Matches sources containing "sale" or "invoice", or exactly "manual".
    Manual purchases are also tagged "manual" by some clients, so this can
    misclassify them; keep it last and separate from the stronger tiers.
    """
    source = (tx.metadata.capture.source or "").lower()
    if "sale" in source or "invoice" in source or source == "manual":
        return TransactionKind.SALE
    return None


KIND_RESOLVERS = (
    kind_from_classification,
    kind_from_accounting,
    sale_kind_from_capture_source,
)


def resolve_transaction_kind(tx: Transaction) -> TransactionKind:
    """
    Resolve sale/purchase from the strongest available signal.

    Returns:
        SALE or PURCHASE from the first resolver that decides, else UNKNOWN
    """
    for resolver in KIND_RESOLVERS:
        kind = resolver(tx)
        if kind is not None:
            return kind
    return TransactionKind.UNKNOWN


def is_sale_transaction(tx: Transaction) -> bool:
    return resolve_transaction_kind(tx) is TransactionKind.SALE


def is_purchase_kind(tx: Transaction) -> bool:
    """Explicitly classified as a purchase by the backend."""
    return tx.kind == TransactionKind.PURCHASE.value


def has_accounts_receivable_payment(tx: Transaction) -> bool:
    return any(name in ACCOUNTS_RECEIVABLE_NAMES for name in payment_method_types(tx))


def has_accounts_payable_payment(tx: Transaction) -> bool:
    return any(name in ACCOUNTS_PAYABLE_NAMES for name in payment_method_types(tx))


def is_cash_only_transaction(tx: Transaction) -> bool:
    """Paid entirely in cash. An unknown payment method is not cash-only."""
    names = payment_method_types(tx)
    return bool(names) and all(name == CASH for name in names)


def has_accounting_entries(tx: Transaction) -> bool:
    return bool(tx.accounting.debits) or bool(tx.accounting.credits)


def _has_debit(tx: Transaction, chart_name: str, flag: str) -> bool:
    return any(
        debit.chart_name == chart_name and getattr(debit, flag) is True
        for debit in tx.accounting.debits
    )


def is_credit_to_account(tx: Transaction) -> bool:
    """
    Whether the transaction brings money into the business.

    Statement entries are decided by the ingestion flag when it is set, then
    by the bank (asset) or card (liability) debit line. Other transactions
    count as credits when classified as sales or carrying an income line.
    """
    explicit_credit = tx.metadata.statement_context.is_credit

    if is_bank_transaction(tx):
        if explicit_credit is not None:
            return explicit_credit
        if _has_debit(tx, BANK_CHART_NAME, "is_asset"):
            return True

    if is_credit_card_transaction(tx):
        if explicit_credit is not None:
            return explicit_credit
        # Card liability decreasing: a repayment
        if _has_debit(tx, CARD_CHART_NAME, "is_liability"):
            return True

    if tx.kind == TransactionKind.SALE.value:
        return True

    return kind_from_accounting(tx) is TransactionKind.SALE
