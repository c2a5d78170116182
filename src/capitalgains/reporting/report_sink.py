from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Protocol

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from .report_builder import ReportBuilder


class ReportSink(Protocol):
    def write(self, report: ReportBuilder) -> Path:  # returns written file path
        ...


def _num(value: Decimal | None) -> float | None:
    return None if value is None else float(value)


@dataclass
class ExcelReportSink:
    out_path: Path
    locale: str = "EN"  # "EN" (default) or "PT"

    def _labels(self):
        loc = (self.locale or "EN").upper()
        if loc == "PT":
            return {
                "sheet": {"summary": "Resumo", "ledger": "Operações"},
                "summary": {
                    "replay": "Simulação",
                    "status": "Estado",
                    "operations": "Operações",
                    "total_tax": "Imposto Total",
                    "proceeds": "Valor de Venda",
                    "gains": "Mais-valias",
                    "losses": "Menos-valias",
                    "exempt": "Vendas Isentas",
                    "deficit": "Prejuízo a Reportar",
                    "error": "Erro",
                    "ok": "OK",
                    "rejected": "Rejeitada",
                },
                "ledger": {
                    "replay": "Simulação",
                    "seq": "#",
                    "operation": "Operação",
                    "unit_cost": "Custo Unitário",
                    "quantity": "Quantidade",
                    "proceeds": "Valor de Venda",
                    "realized": "Resultado Realizado",
                    "deficit_used": "Prejuízo Deduzido",
                    "exempt": "Isenta",
                    "tax": "Imposto",
                    "held_qty": "Quantidade Detida",
                    "held_cost": "Custo Detido",
                    "wap": "Preço Médio Ponderado",
                    "deficit": "Prejuízo Acumulado",
                    "yes": "Sim",
                    "no": "Não",
                },
            }
        return {
            "sheet": {"summary": "Summary", "ledger": "Ledger"},
            "summary": {
                "replay": "Replay",
                "status": "Status",
                "operations": "Operations",
                "total_tax": "Total Tax",
                "proceeds": "Sale Proceeds",
                "gains": "Realized Gains",
                "losses": "Realized Losses",
                "exempt": "Exempt Sells",
                "deficit": "Carried Deficit",
                "error": "Error",
                "ok": "OK",
                "rejected": "Rejected",
            },
            "ledger": {
                "replay": "Replay",
                "seq": "#",
                "operation": "Operation",
                "unit_cost": "Unit Cost",
                "quantity": "Quantity",
                "proceeds": "Sale Proceeds",
                "realized": "Realized P/L",
                "deficit_used": "Deficit Used",
                "exempt": "Exempt",
                "tax": "Tax",
                "held_qty": "Held Quantity",
                "held_cost": "Held Cost",
                "wap": "Weighted Average Price",
                "deficit": "Deficit",
                "yes": "Yes",
                "no": "No",
            },
        }

    def write(self, report: ReportBuilder) -> Path:
        out_path = Path(self.out_path)
        wb = Workbook()

        # Remove the default sheet
        wb.remove(wb.active)

        labels = self._labels()
        money_fmt = "#,##0.00"
        tax_fmt = "#,##0"
        qty_fmt = "0.########"

        ls = labels["summary"]
        ws = wb.create_sheet(title=labels["sheet"]["summary"])
        ws.append(
            [
                ls["replay"],
                ls["status"],
                ls["operations"],
                ls["total_tax"],
                ls["proceeds"],
                ls["gains"],
                ls["losses"],
                ls["exempt"],
                ls["deficit"],
                ls["error"],
            ]
        )
        for t in report.totals:
            ws.append(
                [
                    t.replay,
                    ls["rejected"] if t.rejected else ls["ok"],
                    t.operations,
                    t.total_tax,
                    float(t.proceeds),
                    float(t.realized_gains),
                    float(t.realized_losses),
                    t.exempt_sells,
                    float(t.final_deficit),
                    t.error,
                ]
            )
            r = ws.max_row
            ws.cell(row=r, column=4).number_format = tax_fmt
            for c in (5, 6, 7, 9):
                ws.cell(row=r, column=c).number_format = money_fmt

        ll = labels["ledger"]
        ws = wb.create_sheet(title=labels["sheet"]["ledger"])
        ws.append(
            [
                ll["replay"],
                ll["seq"],
                ll["operation"],
                ll["unit_cost"],
                ll["quantity"],
                ll["proceeds"],
                ll["realized"],
                ll["deficit_used"],
                ll["exempt"],
                ll["tax"],
                ll["held_qty"],
                ll["held_cost"],
                ll["wap"],
                ll["deficit"],
            ]
        )
        for line in report.ledger_lines:
            ws.append(
                [
                    line.replay,
                    line.seq,
                    line.operation,
                    float(line.unit_cost),
                    float(line.quantity),
                    _num(line.proceeds),
                    _num(line.realized_pl),
                    float(line.deficit_used),
                    ll["yes"] if line.exempt else ll["no"],
                    line.tax,
                    float(line.held_quantity),
                    float(line.held_cost),
                    float(line.weighted_average_price),
                    float(line.deficit),
                ]
            )
            r = ws.max_row
            for c in (5, 11):
                ws.cell(row=r, column=c).number_format = qty_fmt
            for c in (4, 6, 7, 8, 12, 13, 14):
                ws.cell(row=r, column=c).number_format = money_fmt
            ws.cell(row=r, column=10).number_format = tax_fmt

        def autosize(sheet, max_width: int = 60, min_width: int = 8) -> None:
            for col in range(1, sheet.max_column + 1):
                max_len = 0
                for row in range(1, sheet.max_row + 1):
                    v = sheet.cell(row=row, column=col).value
                    if v is None:
                        continue
                    max_len = max(max_len, len(str(v)))
                width = min(max_width, max(min_width, max_len + 2))
                sheet.column_dimensions[get_column_letter(col)].width = width

        for _ws in wb.worksheets:
            autosize(_ws)

        out_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(out_path)
        return out_path
