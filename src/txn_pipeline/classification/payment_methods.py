"""
Payment-method extraction.

Payment information has lived in several places as the transaction schema
evolved. Each location is a source; sources are tried in a fixed order and
the first one that yields any entries wins. Locations are never merged.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional
import logging

from ..models.transaction import PaymentMethodEntry, Transaction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentMethod:
    """A payment method with its normalized (lower-case, trimmed) name."""

    type: str


def normalize_method_name(entry: Any) -> Optional[str]:
    """
    Read a payment method name from an entry.

    ``type`` is preferred, ``paymentType`` is the fallback. Entries may be
    validated models or raw mappings from the free-form ``details`` payload.

    Returns:
        Lower-cased, trimmed name, or None when the entry names no method
    """
    if isinstance(entry, PaymentMethodEntry):
        name = entry.type or entry.payment_type
    elif isinstance(entry, Mapping):
        name = entry.get("type") or entry.get("paymentType") or entry.get("payment_type")
    else:
        raise TypeError(f"Unsupported payment entry: {type(entry).__name__}")

    if not name:
        return None
    return str(name).strip().lower() or None


class PaymentMethodSource(ABC):
    """A location on a transaction that may hold payment breakdown entries."""

    name: str = "source"

    @abstractmethod
    def entries(self, tx: Transaction) -> Iterable[Any]:
        """
        Return the raw entries held at this location.

        Args:
            tx: Transaction to read

        Returns:
            Entries (possibly empty)
        """
        pass

    def extract(self, tx: Transaction) -> list[PaymentMethod]:
        """Normalize the entries at this location, dropping unnamed ones."""
        methods: list[PaymentMethod] = []
        for entry in self.entries(tx):
            method_name = normalize_method_name(entry)
            if method_name:
                methods.append(PaymentMethod(type=method_name))
        return methods


class AccountingBreakdownSource(PaymentMethodSource):
    """Current location: ``accounting.paymentBreakdown``."""

    name = "accounting.paymentBreakdown"

    def entries(self, tx: Transaction) -> Iterable[Any]:
        return tx.accounting.payment_breakdown


class DetailsFieldSource(PaymentMethodSource):
    """Legacy locations inside the free-form ``details`` payload."""

    def __init__(self, field_name: str):
        """
        Args:
            field_name: Wire name of the list under ``details``
        """
        self.field_name = field_name
        self.name = f"details.{field_name}"

    def entries(self, tx: Transaction) -> Iterable[Any]:
        value = tx.details.get(self.field_name)
        if value is None:
            return []
        if isinstance(value, (str, bytes, Mapping)):
            raise TypeError(f"{self.name} is not a list")
        return value


# Precedence order; add or retire legacy locations here
DEFAULT_SOURCES: tuple[PaymentMethodSource, ...] = (
    AccountingBreakdownSource(),
    DetailsFieldSource("paymentType"),
    DetailsFieldSource("paymentBreakdown"),
)


def extract_payment_methods(
    tx: Transaction,
    sources: Iterable[PaymentMethodSource] = DEFAULT_SOURCES,
) -> list[PaymentMethod]:
    """
    Find the payment methods used by a transaction.

    Args:
        tx: Transaction to inspect
        sources: Locations to try, in precedence order

    Returns:
        Methods from the first non-empty location, or an empty list when
        no location holds any (or a location is malformed)
    """
    for source in sources:
        try:
            methods = source.extract(tx)
        except (AttributeError, TypeError, ValueError) as e:
            logger.warning(
                f"Transaction {tx.id or '<no id>'}: unreadable payment methods at {source.name}: {e}"
            )
            return []
        if methods:
            return methods
    return []


def payment_method_types(tx: Transaction) -> list[str]:
    """Normalized payment method names, in source order."""
    return [method.type for method in extract_payment_methods(tx)]
