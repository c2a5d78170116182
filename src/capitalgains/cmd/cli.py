"""
Compute capital gains tax for buy/sell operations on a single stock position.

Each input line is a JSON array of operations and is replayed on its own fresh
portfolio (weighted average cost, loss carryforward, exemption for small
sales). For every line the CLI prints the tax owed per operation, or a fixed
error line when the batch is rejected.

Usage
-----
    # Read from stdin until the first empty line (per file when given files)
    capitalgains < operations.txt

    # Files, custom rules and a ledger workbook
    python -m capitalgains.cmd.cli \
        --tax-rate 0.15 \
        --exempt-threshold 35000 \
        --xlsx ./ledger.xlsx \
        ./operations.txt

Input line schema:
    [{"operation":"buy", "unit-cost":10.00, "quantity": 10000},
     {"operation":"sell", "unit-cost":20.00, "quantity": 5000}]

Output line schema:
    [{"tax":0},{"tax":10000}]
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Iterator
from contextlib import ExitStack
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext
from pathlib import Path
from typing import Optional, TextIO

from capitalgains.errors import ConverterError
from capitalgains.logging import configure_logging
from capitalgains.reporting import (
    DEFAULT_MIN_EXEMPT_NOTIONAL,
    DEFAULT_TAX_RATE,
    ExcelReportSink,
    LedgerRecorder,
    ReportBuilder,
    TaxConfig,
    converter_raw_json,
)

# Monetary precision and rounding
getcontext().prec = 28
getcontext().rounding = ROUND_HALF_UP

ERROR_LINE = "There was an error in the input"

logger = logging.getLogger(__name__)


def iter_input_lines(streams: Iterable[TextIO]) -> Iterator[str]:
    """Yield stripped lines from each stream in turn.

    A blank line ends the stream it appears in; reading resumes with the next.
    """
    for stream in streams:
        for line in stream:
            line = line.strip()
            if not line:
                break
            yield line


def process_lines(
    lines: Iterable[str],
    config: TaxConfig,
    out: TextIO,
    report: Optional[ReportBuilder] = None,
) -> int:
    """Replay each line independently; return the number of rejected lines."""
    failures = 0
    for n, line in enumerate(lines, start=1):
        recorder = LedgerRecorder() if report is not None else None
        try:
            result = converter_raw_json(line, config, recorder)
        except ConverterError as e:
            failures += 1
            logger.error("Line %d rejected (%s): %s", n, type(e).__name__, e)
            if report is not None:
                report.add_rejected(str(e))
            print(ERROR_LINE, file=out)
            continue

        if report is not None and recorder is not None:
            report.add_replay(recorder.events)
        print(result, file=out)
    return failures


def _non_negative_decimal(value: str) -> Decimal:
    try:
        dec = Decimal(value)
    except InvalidOperation as e:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from e
    if not dec.is_finite() or dec < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative number: {value!r}")
    return dec


def _rate(value: str) -> Decimal:
    dec = _non_negative_decimal(value)
    if dec > 1:
        raise argparse.ArgumentTypeError(f"rate must be a fraction <= 1: {value!r}")
    return dec


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Capital gains tax per operation for a weighted-average position"
    )
    p.add_argument(
        "input",
        type=str,
        nargs="*",
        help="Files with one JSON array of operations per line (default: stdin)",
    )
    p.add_argument(
        "--tax-rate",
        type=_rate,
        default=DEFAULT_TAX_RATE,
        help=f"Flat tax rate applied to taxable gains (default: {DEFAULT_TAX_RATE})",
    )
    p.add_argument(
        "--exempt-threshold",
        type=_non_negative_decimal,
        default=DEFAULT_MIN_EXEMPT_NOTIONAL,
        help=(
            "Sales with total value at or below this amount pay no tax "
            f"(default: {DEFAULT_MIN_EXEMPT_NOTIONAL})"
        ),
    )
    p.add_argument(
        "--xlsx",
        type=str,
        default=None,
        help="Also write a ledger workbook (e.g., ledger.xlsx)",
    )
    p.add_argument(
        "--locale",
        type=str,
        default="EN",
        choices=["EN", "PT"],
        help="Locale for workbook headers and sheet names",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity: -v (INFO), -vv (DEBUG)",
    )
    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_argparser()
    args = parser.parse_args(argv)

    # Configure logging based on verbosity
    verbosity_map = {
        0: logging.WARNING,  # Default: quiet
        1: logging.INFO,  # -v: informational
        2: logging.DEBUG,  # -vv and above: debug
    }
    level = verbosity_map.get(min(args.verbose, 2), logging.WARNING)
    configure_logging(level=level)

    config = TaxConfig(
        min_exempt_notional=args.exempt_threshold, tax_rate=args.tax_rate
    )
    logger.info(
        "Tax rate %s, exemption threshold %s",
        config.tax_rate,
        config.min_exempt_notional,
    )
    report = ReportBuilder() if args.xlsx else None

    if args.input:
        logger.info("Reading %d file(s): %s", len(args.input), ", ".join(args.input))
        with ExitStack() as stack:
            handles = [stack.enter_context(open(p, encoding="utf-8")) for p in args.input]
            failures = process_lines(
                iter_input_lines(handles), config, sys.stdout, report
            )
    else:
        failures = process_lines(iter_input_lines([sys.stdin]), config, sys.stdout, report)

    if report is not None:
        sink = ExcelReportSink(out_path=Path(args.xlsx), locale=args.locale)
        out_path = sink.write(report)
        logger.info("Wrote workbook to %s", out_path)

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
