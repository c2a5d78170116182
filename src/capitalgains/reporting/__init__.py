from .events import LedgerRecorder
from .portfolio import Portfolio
from .portfolio_domain import (
    DEFAULT_MIN_EXEMPT_NOTIONAL,
    DEFAULT_TAX_RATE,
    LedgerEvent,
    PortfolioState,
    Tax,
    TaxConfig,
)
from .replay import converter_raw_json, decode_taxes, encode_taxes, replay
from .report_builder import ReportBuilder
from .report_sink import ExcelReportSink, ReportSink

__all__ = [
    "LedgerRecorder",
    "Portfolio",
    "DEFAULT_MIN_EXEMPT_NOTIONAL",
    "DEFAULT_TAX_RATE",
    "LedgerEvent",
    "PortfolioState",
    "Tax",
    "TaxConfig",
    "converter_raw_json",
    "decode_taxes",
    "encode_taxes",
    "replay",
    "ReportBuilder",
    "ExcelReportSink",
    "ReportSink",
]
