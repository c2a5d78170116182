from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping

from capitalgains.conv import to_dec_strict
from capitalgains.model import Operation

from .money import truncate_tax

DEFAULT_MIN_EXEMPT_NOTIONAL = Decimal("20000")
DEFAULT_TAX_RATE = Decimal("0.20")


@dataclass(frozen=True)
class TaxConfig:
    min_exempt_notional: Decimal = DEFAULT_MIN_EXEMPT_NOTIONAL  # sells at/below are exempt
    tax_rate: Decimal = DEFAULT_TAX_RATE  # flat fraction of the taxable gain

    def __post_init__(self) -> None:
        if self.min_exempt_notional < 0:
            raise ValueError("min_exempt_notional cannot be negative")
        if not Decimal("0") <= self.tax_rate <= Decimal("1"):
            raise ValueError("tax_rate must be between 0 and 1")


@dataclass(frozen=True)
class PortfolioState:
    quantity: Decimal = Decimal("0")
    cost: Decimal = Decimal("0")
    weighted_average_price: Decimal = Decimal("0")
    deficit: Decimal = Decimal("0")  # carried-forward loss, never negative


@dataclass(frozen=True)
class Tax:
    """Tax owed on one operation.

    The engine keeps full precision; encoding truncates toward zero so a
    decoded Tax never carries the original fraction.
    """

    tax: Decimal = Decimal("0")

    @property
    def truncated(self) -> int:
        return truncate_tax(self.tax)

    def to_dict(self) -> dict[str, int]:
        return {"tax": self.truncated}

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> Tax:
        if "tax" not in obj:
            raise ValueError("Tax record missing 'tax'")
        value = to_dec_strict(obj["tax"])
        if value < 0:
            raise ValueError(f"Tax cannot be negative: {value}")
        return cls(tax=value)


@dataclass
class LedgerEvent:
    operation: Operation
    tax: Tax
    state_after: PortfolioState
    realized_pl: Decimal | None = None  # None for buys
    exempt: bool = False
    deficit_used: Decimal = field(default_factory=lambda: Decimal("0"))
