from __future__ import annotations

from .portfolio_domain import LedgerEvent


class LedgerRecorder:
    """Collect one ledger event per applied operation for a single replay."""

    def __init__(self) -> None:
        self._events: list[LedgerEvent] = []

    def record(self, event: LedgerEvent) -> None:
        self._events.append(event)

    @property
    def events(self) -> list[LedgerEvent]:
        return self._events
