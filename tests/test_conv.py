from decimal import Decimal

import pytest

from capitalgains.conv import to_dec_strict


def test_to_dec_strict_standard():
    assert to_dec_strict("100") == Decimal("100")
    assert to_dec_strict(" 1.5 ") == Decimal("1.5")
    assert to_dec_strict(10) == Decimal("10")
    assert to_dec_strict(Decimal("5.5")) == Decimal("5.5")


def test_to_dec_strict_float_goes_through_str():
    assert to_dec_strict(0.1) == Decimal("0.1")
    assert to_dec_strict(10.5) == Decimal("10.5")


def test_to_dec_strict_scientific_notation():
    assert to_dec_strict("1.5E2") == Decimal("150")
    assert to_dec_strict("1E-2") == Decimal("0.01")


def test_to_dec_strict_raises():
    with pytest.raises(ValueError, match="Value is None"):
        to_dec_strict(None)

    with pytest.raises(ValueError, match="Value is empty string"):
        to_dec_strict("  ")

    with pytest.raises(ValueError, match="Invalid decimal format"):
        to_dec_strict("abc")

    with pytest.raises(ValueError, match="Invalid decimal format"):
        to_dec_strict("1,234.56")


def test_to_dec_strict_rejects_booleans():
    with pytest.raises(ValueError, match="boolean"):
        to_dec_strict(True)
    with pytest.raises(ValueError, match="boolean"):
        to_dec_strict(False)


def test_to_dec_strict_rejects_non_finite():
    with pytest.raises(ValueError, match="not finite"):
        to_dec_strict(float("nan"))
    with pytest.raises(ValueError, match="not finite"):
        to_dec_strict("Infinity")
    with pytest.raises(ValueError, match="not finite"):
        to_dec_strict(Decimal("-Infinity"))


def test_to_dec_strict_rejects_other_types():
    with pytest.raises(ValueError, match="Unsupported numeric type: list"):
        to_dec_strict([1])
