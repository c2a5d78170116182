from __future__ import annotations

from decimal import Decimal, InvalidOperation


def to_dec_strict(s: str | float | int | Decimal | None) -> Decimal:
    """Convert a JSON numeric value to Decimal.

    Raises ValueError on missing, boolean or non-finite values.
    Floats go through ``str`` so 0.1 stays Decimal("0.1").
    """
    if s is None:
        raise ValueError("Value is None")
    # bool is an int subclass; json "true" must not become 1
    if isinstance(s, bool):
        raise ValueError(f"Value is a boolean: {s!r}")
    if isinstance(s, Decimal):
        dec = s
    elif isinstance(s, (int, float)):
        dec = Decimal(str(s))
    elif isinstance(s, str):
        s_stripped = s.strip()
        if not s_stripped:
            raise ValueError("Value is empty string")
        try:
            dec = Decimal(s_stripped)
        except InvalidOperation as e:
            raise ValueError(f"Invalid decimal format: {s!r}") from e
    else:
        raise ValueError(f"Unsupported numeric type: {type(s).__name__}")

    if not dec.is_finite():
        raise ValueError(f"Value is not finite: {s!r}")
    return dec
