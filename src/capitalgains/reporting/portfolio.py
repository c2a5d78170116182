from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from capitalgains.errors import InsufficientPositionError
from capitalgains.model import Operation, OperationType

from .events import LedgerRecorder
from .money import abs_decimal
from .portfolio_domain import LedgerEvent, PortfolioState, Tax, TaxConfig

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")


class Portfolio:
    """Weighted-average position with loss carryforward.

    One instance replays one ordered sequence of operations. Not thread-safe;
    the caller owns sequencing.
    """

    def __init__(
        self,
        config: Optional[TaxConfig] = None,
        *,
        recorder: Optional[LedgerRecorder] = None,
    ) -> None:
        self.config = config or TaxConfig()
        self.recorder = recorder
        self.quantity = _ZERO
        self.cost = _ZERO
        self.weighted_average_price = _ZERO
        self.deficit = _ZERO

    def snapshot(self) -> PortfolioState:
        return PortfolioState(
            quantity=self.quantity,
            cost=self.cost,
            weighted_average_price=self.weighted_average_price,
            deficit=self.deficit,
        )

    def execute(self, operation: Operation) -> Tax:
        if operation.operation is OperationType.BUY:
            return self._buy(operation)
        elif operation.operation is OperationType.SELL:
            return self._sell(operation)
        raise ValueError(f"unsupported operation type: {operation.operation!r}")

    def calculate_tax(self, operation_cost: Decimal, profit: Decimal) -> Tax:
        """Apply the exemption threshold to the sale notional, then the flat rate."""
        if operation_cost > self.config.min_exempt_notional:
            return Tax(tax=profit * self.config.tax_rate)
        return Tax()

    def _buy(self, operation: Operation) -> Tax:
        self.cost += operation.op_cost()
        self.quantity += operation.quantity
        # A zero-quantity buy on an empty position has no average to compute.
        if self.quantity > 0:
            self.weighted_average_price = self.cost / self.quantity

        logger.debug(
            "BUY %s @ %s -> qty=%s wap=%s",
            operation.quantity,
            operation.unit_cost,
            self.quantity,
            self.weighted_average_price,
        )
        tax = Tax()
        self._record(operation, tax)
        return tax

    def _sell(self, operation: Operation) -> Tax:
        if operation.quantity > self.quantity:
            logger.warning(
                "Rejected SELL of %s: only %s held", operation.quantity, self.quantity
            )
            raise InsufficientPositionError(operation.quantity, self.quantity)

        self.quantity -= operation.quantity
        # Reduced by sale value, not by average cost. The average is only
        # recomputed on buys so this never reaches the tax result directly.
        self.cost -= operation.op_cost()

        profit = operation.get_profit(self.weighted_average_price)
        # Exemption depends on the sale total only, whatever the result.
        exempt = operation.op_cost() <= self.config.min_exempt_notional
        deficit_used = _ZERO

        if operation.unit_cost < self.weighted_average_price:
            self.deficit += abs_decimal(profit)
            tax = Tax()
        elif profit > self.deficit:
            deficit_used = self.deficit
            taxable = profit - self.deficit
            self.deficit = _ZERO
            tax = self.calculate_tax(operation.op_cost(), taxable)
        else:
            deficit_used = profit
            self.deficit -= profit
            tax = Tax()

        logger.debug(
            "SELL %s @ %s -> profit=%s tax=%s deficit=%s%s",
            operation.quantity,
            operation.unit_cost,
            profit,
            tax.tax,
            self.deficit,
            " (exempt)" if exempt else "",
        )
        self._record(operation, tax, profit, exempt, deficit_used)
        return tax

    def _record(
        self,
        operation: Operation,
        tax: Tax,
        realized_pl: Decimal | None = None,
        exempt: bool = False,
        deficit_used: Decimal = _ZERO,
    ) -> None:
        if self.recorder is None:
            return
        self.recorder.record(
            LedgerEvent(
                operation=operation,
                tax=tax,
                state_after=self.snapshot(),
                realized_pl=realized_pl,
                exempt=exempt,
                deficit_used=deficit_used,
            )
        )
