from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from capitalgains.conv import to_dec_strict
from capitalgains.errors import InvalidInputError

logger = logging.getLogger(__name__)

FIELD_OPERATION = "operation"
FIELD_UNIT_COST = "unit-cost"
FIELD_QUANTITY = "quantity"

REQUIRED_FIELDS = (FIELD_OPERATION, FIELD_UNIT_COST, FIELD_QUANTITY)


class OperationType(str, Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class Operation:
    """A single buy or sell at a per-unit price."""

    operation: OperationType
    unit_cost: Decimal
    quantity: Decimal

    def op_cost(self) -> Decimal:
        return self.quantity * self.unit_cost

    def get_profit(self, weighted_average_price: Decimal) -> Decimal:
        return (self.unit_cost - weighted_average_price) * self.quantity


def _non_negative(value: Any, field_name: str, index: int) -> Decimal:
    # to_dec_strict accepts numeric strings; JSON input must carry numbers
    if isinstance(value, str):
        raise InvalidInputError(
            f"Operation #{index}: {field_name!r} must be a number, got {value!r}"
        )
    try:
        dec = to_dec_strict(value)
    except ValueError as e:
        raise InvalidInputError(
            f"Operation #{index}: invalid {field_name!r}: {e}"
        ) from e
    if dec < 0:
        raise InvalidInputError(
            f"Operation #{index}: {field_name!r} must be non-negative, got {dec}"
        )
    return dec


def operation_from_dict(obj: Any, index: int = 0) -> Operation:
    """Validate one decoded JSON record. Unknown keys are ignored."""
    if not isinstance(obj, Mapping):
        raise InvalidInputError(
            f"Operation #{index}: expected an object, got {type(obj).__name__}"
        )
    missing = [f for f in REQUIRED_FIELDS if f not in obj]
    if missing:
        raise InvalidInputError(f"Operation #{index}: missing fields {missing}")

    kind = obj[FIELD_OPERATION]
    try:
        op_type = OperationType(kind)
    except ValueError as e:
        raise InvalidInputError(
            f"Operation #{index}: unknown operation {kind!r}"
        ) from e

    return Operation(
        operation=op_type,
        unit_cost=_non_negative(obj[FIELD_UNIT_COST], FIELD_UNIT_COST, index),
        quantity=_non_negative(obj[FIELD_QUANTITY], FIELD_QUANTITY, index),
    )


def parse_operations(raw: str) -> list[Operation]:
    """Decode a JSON array of operations.

    Numbers are parsed straight into Decimal so no binary float rounding
    leaks into the cost basis.
    """
    try:
        data = json.loads(raw, parse_float=Decimal, parse_int=Decimal)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"Malformed JSON: {e}") from e

    if not isinstance(data, list):
        raise InvalidInputError(
            f"Expected a JSON array of operations, got {type(data).__name__}"
        )

    operations = [operation_from_dict(obj, i) for i, obj in enumerate(data)]
    logger.debug("Parsed %d operation(s)", len(operations))
    return operations
