"""Active business selection."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from .models.transaction import Transaction

PERSONAL_MARKER = "personal"


def _is_personal(business_id: str) -> bool:
    return PERSONAL_MARKER in business_id.lower()


def select_business_id(
    user_business_id: Optional[str],
    memberships: Optional[Mapping[str, Any]] = None,
) -> Optional[str]:
    """
    Choose the business a user is working in.

    The user's own business wins unless it is a personal one; otherwise the
    first non-personal membership, then any membership.

    Args:
        user_business_id: Business id on the signed-in user, if any
        memberships: Membership records keyed by business id

    Returns:
        Selected business id, or None when there is nothing to choose from
    """
    if user_business_id and not _is_personal(user_business_id):
        return user_business_id

    membership_ids = list(memberships or {})
    non_personal = next((m for m in membership_ids if not _is_personal(m)), None)
    if non_personal is not None:
        return non_personal
    return membership_ids[0] if membership_ids else None


@dataclass(frozen=True)
class BusinessContext:
    """The business whose transactions are being classified."""

    business_id: str

    @classmethod
    def from_memberships(
        cls,
        user_business_id: Optional[str],
        memberships: Optional[Mapping[str, Any]] = None,
    ) -> Optional["BusinessContext"]:
        business_id = select_business_id(user_business_id, memberships)
        return cls(business_id) if business_id else None

    def owns(self, tx: Transaction) -> bool:
        """Records without a business id are assumed to belong to the caller's query."""
        tx_business = tx.metadata.business_id
        return tx_business is None or tx_business == self.business_id

    def scope(self, transactions: Iterable[Transaction]) -> list[Transaction]:
        return [tx for tx in transactions if self.owns(tx)]
