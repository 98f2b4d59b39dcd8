"""Service offer value object derived from the paid amount."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

# Amounts at or above this many cents buy the premium consultation
PREMIUM_THRESHOLD_MINOR_UNITS = 1000

PREMIUM_SERVICE_LABEL = "Consultation Ressenti"
STANDARD_SERVICE_LABEL = "Réponse Oui / Non"


@dataclass(frozen=True)
class ServiceOffer:
    """Service bought with a checkout payment."""

    label: str
    amount: Decimal

    @classmethod
    def from_amount_total(cls, amount_total: Optional[int]) -> "ServiceOffer":
        """
        Derive the service offer from a payment amount in minor units.

        Args:
            amount_total: Paid amount in cents (None counts as 0)

        Returns:
            Service offer with its label and amount in currency units

        Raises:
            ValueError: If the amount is negative
        """
        cents = amount_total or 0
        if cents < 0:
            raise ValueError("Payment amount cannot be negative")

        if cents >= PREMIUM_THRESHOLD_MINOR_UNITS:
            label = PREMIUM_SERVICE_LABEL
        else:
            label = STANDARD_SERVICE_LABEL

        return cls(label=label, amount=(Decimal(cents) / 100).quantize(Decimal("0.01")))

    @property
    def is_premium(self) -> bool:
        """Check if this is the premium service."""
        return self.label == PREMIUM_SERVICE_LABEL
