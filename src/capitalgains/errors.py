from __future__ import annotations

from decimal import Decimal


class CapitalGainsError(Exception):
    """Base class for every error raised by this package."""


class ConverterError(CapitalGainsError):
    """A whole batch of operations was rejected."""


class InvalidInputError(ConverterError, ValueError):
    """Raw input could not be decoded into operations."""


class InvalidOperationError(ConverterError):
    """An operation was rejected by the portfolio; the batch is discarded."""


class InvalidTaxConversionError(ConverterError):
    """Computed taxes could not be serialized."""


class InsufficientPositionError(CapitalGainsError, ValueError):
    def __init__(self, requested: Decimal, available: Decimal) -> None:
        self.requested = requested
        self.available = available
        super().__init__(
            f"Not enough quantity: requested={requested}, available={available}"
        )
