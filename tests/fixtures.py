"""Builders for operations used across tests.

Production code builds operations only through parse_operations; tests
construct them directly to exercise the portfolio without JSON.
"""

from __future__ import annotations

from decimal import Decimal

from capitalgains.model import Operation, OperationType


def buy(unit_cost: str | int, quantity: str | int) -> Operation:
    return Operation(OperationType.BUY, Decimal(str(unit_cost)), Decimal(str(quantity)))


def sell(unit_cost: str | int, quantity: str | int) -> Operation:
    return Operation(OperationType.SELL, Decimal(str(unit_cost)), Decimal(str(quantity)))
