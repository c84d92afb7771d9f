from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Optional


class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    CANCELED = "canceled"
    EXPIRED = "expired"
    TERMINATED = "terminated"


TRANSITIONS: Dict[SubscriptionStatus, FrozenSet[SubscriptionStatus]] = {
    SubscriptionStatus.ACTIVE: frozenset(
        {
            SubscriptionStatus.SUSPENDED,
            SubscriptionStatus.CANCELED,
            SubscriptionStatus.EXPIRED,
            SubscriptionStatus.TERMINATED,
        }
    ),
    SubscriptionStatus.SUSPENDED: frozenset(
        {
            SubscriptionStatus.ACTIVE,
            SubscriptionStatus.CANCELED,
            SubscriptionStatus.TERMINATED,
        }
    ),
    SubscriptionStatus.CANCELED: frozenset(),
    SubscriptionStatus.EXPIRED: frozenset(),
    SubscriptionStatus.TERMINATED: frozenset(),
}


def parse_status(value: Optional[str]) -> Optional[SubscriptionStatus]:
    """Map a vendor status string to the enum; unknown values give None."""
    if not value:
        return None
    try:
        return SubscriptionStatus(str(value).strip().lower())
    except ValueError:
        return None


def can_transition(current: Optional[str], target: SubscriptionStatus) -> bool:
    status = parse_status(current)
    return status is not None and target in TRANSITIONS[status]


def is_terminal(value: Optional[str]) -> bool:
    status = parse_status(value)
    return status is not None and not TRANSITIONS[status]


def is_cancellable(value: Optional[str]) -> bool:
    return can_transition(value, SubscriptionStatus.CANCELED)
