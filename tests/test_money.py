from decimal import Decimal

from capitalgains.reporting.money import abs_decimal, truncate_tax


def test_truncate_tax_drops_fraction():
    assert truncate_tax(Decimal("12.99")) == 12
    assert truncate_tax(Decimal("20.18")) == 20
    assert truncate_tax(Decimal("10000.00")) == 10000
    assert truncate_tax(Decimal("0.999")) == 0


def test_truncate_tax_returns_int():
    assert type(truncate_tax(Decimal("3000.0000"))) is int


def test_truncate_tax_moves_toward_zero_for_negatives():
    assert truncate_tax(Decimal("-1.5")) == -1


def test_abs_decimal_uses_copy_abs():
    value = Decimal("-10.5")
    assert abs_decimal(value) == Decimal("10.5")
    assert value == Decimal("-10.5")


def test_truncate_tax_is_exact_beyond_context_precision():
    value = Decimal("123456789012345678901234567890.9")
    assert truncate_tax(value) == 123456789012345678901234567890
    assert truncate_tax(Decimal("2E+28")) == 2 * 10**28
