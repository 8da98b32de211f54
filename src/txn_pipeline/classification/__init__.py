"""Classification and status predicates over transactions."""

from .payment_methods import (
    PaymentMethod,
    PaymentMethodSource,
    AccountingBreakdownSource,
    DetailsFieldSource,
    extract_payment_methods,
)
from .predicates import (
    is_bank_transaction,
    is_credit_card_transaction,
    is_statement_transaction,
    is_pos_sale_transaction,
    is_receipt_transaction,
    is_sale_transaction,
    is_purchase_kind,
    resolve_transaction_kind,
    has_accounts_receivable_payment,
    has_accounts_payable_payment,
    is_cash_only_transaction,
    has_accounting_entries,
    is_credit_to_account,
)
from .status import (
    AuditBadge,
    audit_badge,
    is_verified,
    is_unverified,
    is_reconciled,
    is_audit_ready,
    is_unreconciled,
    is_pending_bank_match,
    is_done,
    is_reporting_ready,
)

__all__ = [
    "PaymentMethod",
    "PaymentMethodSource",
    "AccountingBreakdownSource",
    "DetailsFieldSource",
    "extract_payment_methods",
    "is_bank_transaction",
    "is_credit_card_transaction",
    "is_statement_transaction",
    "is_pos_sale_transaction",
    "is_receipt_transaction",
    "is_sale_transaction",
    "is_purchase_kind",
    "resolve_transaction_kind",
    "has_accounts_receivable_payment",
    "has_accounts_payable_payment",
    "is_cash_only_transaction",
    "has_accounting_entries",
    "is_credit_to_account",
    "AuditBadge",
    "audit_badge",
    "is_verified",
    "is_unverified",
    "is_reconciled",
    "is_audit_ready",
    "is_unreconciled",
    "is_pending_bank_match",
    "is_done",
    "is_reporting_ready",
]
