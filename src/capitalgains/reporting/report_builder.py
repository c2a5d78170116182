from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from capitalgains.model import OperationType

from .portfolio_domain import LedgerEvent

logger = logging.getLogger(__name__)


@dataclass
class LedgerLine:
    replay: int
    seq: int
    operation: str
    unit_cost: Decimal
    quantity: Decimal
    proceeds: Decimal | None  # sells only
    realized_pl: Decimal | None
    deficit_used: Decimal
    exempt: bool
    tax: int  # truncated, as encoded
    held_quantity: Decimal
    held_cost: Decimal
    weighted_average_price: Decimal
    deficit: Decimal


@dataclass
class ReplayTotals:
    replay: int
    rejected: bool = False
    error: str | None = None
    operations: int = 0
    total_tax: int = 0
    proceeds: Decimal = field(default_factory=lambda: Decimal("0"))
    realized_gains: Decimal = field(default_factory=lambda: Decimal("0"))
    realized_losses: Decimal = field(default_factory=lambda: Decimal("0"))
    exempt_sells: int = 0
    final_deficit: Decimal = field(default_factory=lambda: Decimal("0"))


class ReportBuilder:
    """Turn recorded ledger events into report lines and per-replay totals."""

    def __init__(self) -> None:
        self.ledger_lines: list[LedgerLine] = []
        self.totals: list[ReplayTotals] = []

    @property
    def next_replay(self) -> int:
        return len(self.totals) + 1

    def add_replay(self, events: list[LedgerEvent]) -> ReplayTotals:
        """Add the ledger of a replay that completed."""
        number = self.next_replay
        totals = ReplayTotals(replay=number, operations=len(events))
        for seq, ev in enumerate(events, start=1):
            self.ledger_lines.append(self._line(number, seq, ev))
            totals.total_tax += ev.tax.truncated
            if ev.operation.operation is OperationType.SELL:
                totals.proceeds += ev.operation.op_cost()
                if ev.exempt:
                    totals.exempt_sells += 1
            if ev.realized_pl is not None:
                if ev.realized_pl >= 0:
                    totals.realized_gains += ev.realized_pl
                else:
                    totals.realized_losses += ev.realized_pl.copy_abs()
        if events:
            totals.final_deficit = events[-1].state_after.deficit
        self.totals.append(totals)
        return totals

    def add_rejected(self, error: str) -> ReplayTotals:
        """Record a replay whose batch was rejected; it contributes no ledger lines."""
        totals = ReplayTotals(replay=self.next_replay, rejected=True, error=error)
        logger.debug("Replay %d rejected: %s", totals.replay, error)
        self.totals.append(totals)
        return totals

    @staticmethod
    def _line(replay: int, seq: int, ev: LedgerEvent) -> LedgerLine:
        op = ev.operation
        is_sell = op.operation is OperationType.SELL
        return LedgerLine(
            replay=replay,
            seq=seq,
            operation=op.operation.value,
            unit_cost=op.unit_cost,
            quantity=op.quantity,
            proceeds=op.op_cost() if is_sell else None,
            realized_pl=ev.realized_pl,
            deficit_used=ev.deficit_used,
            exempt=ev.exempt,
            tax=ev.tax.truncated,
            held_quantity=ev.state_after.quantity,
            held_cost=ev.state_after.cost,
            weighted_average_price=ev.state_after.weighted_average_price,
            deficit=ev.state_after.deficit,
        )
