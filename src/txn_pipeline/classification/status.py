"""Predicates over verification and reconciliation state."""

from enum import Enum
from typing import Optional

from ..models.transaction import ReconciliationStatus, Transaction, VerificationStatus
from .predicates import has_accounting_entries

VERIFIED_STATUSES = frozenset(
    {VerificationStatus.VERIFIED.value, VerificationStatus.EXCEPTION.value}
)

# Settled against a statement (or flagged as an exception to settlement)
RECONCILED_STATUSES = frozenset(
    {
        ReconciliationStatus.MATCHED.value,
        ReconciliationStatus.RECONCILED.value,
        ReconciliationStatus.EXCEPTION.value,
    }
)
AUDIT_READY_STATUSES = RECONCILED_STATUSES | {ReconciliationStatus.NOT_REQUIRED.value}
DONE_STATUSES = frozenset(
    {ReconciliationStatus.RECONCILED.value, ReconciliationStatus.NOT_REQUIRED.value}
)
REPORTING_READY_STATUSES = DONE_STATUSES | {ReconciliationStatus.MATCHED.value}


class AuditBadge(Enum):
    """Audit indicator shown next to a transaction."""

    AUDIT_READY = "audit_ready"
    UNRECONCILED = "unreconciled"


def verification_status(tx: Transaction) -> Optional[str]:
    return tx.metadata.verification.status


def reconciliation_status(tx: Transaction) -> Optional[str]:
    return tx.metadata.reconciliation.status


def is_verified(tx: Transaction) -> bool:
    """Verified, including transactions verified as exceptions."""
    return verification_status(tx) in VERIFIED_STATUSES


def is_unverified(tx: Transaction) -> bool:
    return verification_status(tx) == VerificationStatus.UNVERIFIED.value


def is_reconciled(tx: Transaction) -> bool:
    return reconciliation_status(tx) in RECONCILED_STATUSES


def is_audit_ready(tx: Transaction) -> bool:
    return reconciliation_status(tx) in AUDIT_READY_STATUSES


def is_unreconciled(tx: Transaction) -> bool:
    return reconciliation_status(tx) == ReconciliationStatus.UNRECONCILED.value


def is_pending_bank_match(tx: Transaction) -> bool:
    return reconciliation_status(tx) == ReconciliationStatus.PENDING_BANK_MATCH.value


def is_done(tx: Transaction) -> bool:
    """Reconciled, or reconciliation was never needed."""
    return reconciliation_status(tx) in DONE_STATUSES


def is_reporting_ready(tx: Transaction) -> bool:
    """Verified, and either settled or already posted to the books."""
    if not is_verified(tx):
        return False
    return reconciliation_status(tx) in REPORTING_READY_STATUSES or has_accounting_entries(tx)


def audit_badge(tx: Transaction) -> Optional[AuditBadge]:
    """Audit-ready wins if upstream data claims both states."""
    if is_audit_ready(tx):
        return AuditBadge.AUDIT_READY
    if is_unreconciled(tx):
        return AuditBadge.UNRECONCILED
    return None
