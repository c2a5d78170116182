from decimal import Decimal

import pytest

from capitalgains.errors import InvalidInputError
from capitalgains.model import Operation, OperationType, operation_from_dict, parse_operations


def test_parse_operations_reads_ints_and_floats_as_decimal():
    raw = (
        '[{"operation":"buy", "unit-cost":10.00, "quantity": 100},'
        ' {"operation":"sell", "unit-cost":15.10, "quantity": 50}]'
    )
    ops = parse_operations(raw)

    assert ops == [
        Operation(OperationType.BUY, Decimal("10.00"), Decimal("100")),
        Operation(OperationType.SELL, Decimal("15.10"), Decimal("50")),
    ]
    assert isinstance(ops[1].unit_cost, Decimal)
    # no binary float artefacts
    assert str(ops[1].unit_cost) == "15.10"


def test_parse_operations_empty_array():
    assert parse_operations("[]") == []


def test_parse_operations_ignores_unknown_fields():
    ops = parse_operations(
        '[{"operation":"buy", "unit-cost":1, "quantity": 2, "ticker": "NU"}]'
    )
    assert ops[0].quantity == Decimal("2")


def test_operation_helpers():
    op = Operation(OperationType.SELL, Decimal("12.34"), Decimal("5"))
    assert op.op_cost() == Decimal("61.70")
    assert op.get_profit(Decimal("10")) == Decimal("11.70")


@pytest.mark.parametrize(
    "raw",
    [
        '[{"operation":"buy", "unit-cost":10',
        "not json",
        "",
    ],
)
def test_malformed_json_is_invalid_input(raw):
    with pytest.raises(InvalidInputError, match="Malformed JSON"):
        parse_operations(raw)


def test_top_level_must_be_array():
    with pytest.raises(InvalidInputError, match="Expected a JSON array"):
        parse_operations('{"operation":"buy", "unit-cost":10, "quantity": 1}')


def test_misspelled_field_is_invalid_input():
    raw = (
        '[{"operation":"buy", "unitcost":10.00, "quantity": 100},'
        ' {"operation":"sell", "unit-cost":15.00, "quantity": 50}]'
    )
    with pytest.raises(InvalidInputError, match=r"Operation #0: missing fields \['unit-cost'\]"):
        parse_operations(raw)


def test_unknown_operation_is_invalid_input():
    with pytest.raises(InvalidInputError, match="unknown operation 'hold'"):
        parse_operations('[{"operation":"hold", "unit-cost":10, "quantity": 1}]')


def test_operation_kind_is_case_sensitive():
    with pytest.raises(InvalidInputError):
        parse_operations('[{"operation":"BUY", "unit-cost":10, "quantity": 1}]')


def test_element_must_be_object():
    with pytest.raises(InvalidInputError, match="Operation #1: expected an object"):
        parse_operations('[{"operation":"buy", "unit-cost":10, "quantity": 1}, 5]')


@pytest.mark.parametrize(
    "value",
    ['"10"', "true", "null", "[1]", "NaN", "Infinity"],
)
def test_non_numeric_values_are_invalid_input(value):
    raw = f'[{{"operation":"buy", "unit-cost":{value}, "quantity": 1}}]'
    with pytest.raises(InvalidInputError, match="unit-cost"):
        parse_operations(raw)


def test_negative_values_are_invalid_input():
    with pytest.raises(InvalidInputError, match="must be non-negative"):
        parse_operations('[{"operation":"sell", "unit-cost":10, "quantity": -1}]')


def test_operation_from_dict_reports_index():
    with pytest.raises(InvalidInputError, match="Operation #7"):
        operation_from_dict({"operation": "buy"}, 7)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        parse_operations("[1]")
