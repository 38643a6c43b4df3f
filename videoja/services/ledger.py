"""
Optimistic credit ledger.

A reservation is a plain debit on the balance; success leaves it in place and
failure refunds it. There is no pending sub-balance, so the balance is only
guaranteed non-negative once a failed job has been refunded. No lock is held:
the generation service allows a single outstanding job per session.
"""

import logging

from videoja.config import settings
from videoja.models.generation import Resolution

logger = logging.getLogger(__name__)


def cost_for(resolution: Resolution) -> int:
    """Credits charged for one video at the given resolution."""
    if Resolution(resolution) is Resolution.FULL_HD:
        return settings.COST_1080P
    return settings.COST_720P


class CreditLedger:
    def __init__(self, balance: int = 0, credits_per_payment_unit: int | None = None):
        self._balance = balance
        self._rate = (
            credits_per_payment_unit
            if credits_per_payment_unit is not None
            else settings.CREDITS_PER_PAYMENT_UNIT
        )

    @property
    def balance(self) -> int:
        return self._balance

    def can_afford(self, cost: int) -> bool:
        return self._balance >= cost

    def reserve(self, cost: int) -> None:
        """Debit `cost`. Affordability is the caller's check."""
        self._balance -= cost
        logger.info(f"Reserved {cost} credits, balance now {self._balance}")

    def refund(self, cost: int) -> None:
        self._balance += cost
        logger.info(f"Refunded {cost} credits, balance now {self._balance}")

    def top_up(self, payment_amount: int) -> int:
        """Credit a (simulated) payment. Returns the number of credits added."""
        if payment_amount < 0:
            raise ValueError("Top-up amount must not be negative")
        added = payment_amount * self._rate
        self._balance += added
        logger.info(f"Topped up {added} credits for payment of {payment_amount}")
        return added
