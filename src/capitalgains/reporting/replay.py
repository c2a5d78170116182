from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Optional

from capitalgains.errors import (
    InsufficientPositionError,
    InvalidInputError,
    InvalidOperationError,
    InvalidTaxConversionError,
)
from capitalgains.model import Operation, parse_operations

from .events import LedgerRecorder
from .portfolio import Portfolio
from .portfolio_domain import Tax, TaxConfig

logger = logging.getLogger(__name__)


def replay(
    operations: Iterable[Operation],
    config: Optional[TaxConfig] = None,
    recorder: Optional[LedgerRecorder] = None,
) -> list[Tax]:
    """Apply operations in order on a fresh portfolio.

    All or nothing: the first rejected operation discards every tax computed
    so far and raises InvalidOperationError.
    """
    portfolio = Portfolio(config, recorder=recorder)
    taxes: list[Tax] = []
    for i, op in enumerate(operations):
        try:
            taxes.append(portfolio.execute(op))
        except InsufficientPositionError as e:
            raise InvalidOperationError(f"Operation #{i} rejected: {e}") from e
    return taxes


def encode_taxes(taxes: Iterable[Tax]) -> str:
    try:
        return json.dumps([t.to_dict() for t in taxes], separators=(",", ":"))
    except (TypeError, ValueError, ArithmeticError) as e:
        raise InvalidTaxConversionError(f"Cannot serialize taxes: {e}") from e


def decode_taxes(raw: str) -> list[Tax]:
    try:
        data = json.loads(raw, parse_float=Decimal, parse_int=Decimal)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Malformed JSON: {e}") from e
    if not isinstance(data, list):
        raise InvalidInputError("Expected a JSON array of taxes")
    try:
        return [Tax.from_dict(obj) for obj in data]
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Invalid tax record: {e}") from e


def converter_raw_json(
    raw_json: str,
    config: Optional[TaxConfig] = None,
    recorder: Optional[LedgerRecorder] = None,
) -> str:
    """Parse, replay and encode one batch of operations."""
    operations = parse_operations(raw_json)
    taxes = replay(operations, config, recorder)
    logger.info("Replayed %d operation(s)", len(taxes))
    return encode_taxes(taxes)
