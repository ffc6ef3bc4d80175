"""
Excel export for the dashboard profit summary and the period financial report.
"""

import io
from datetime import date
from typing import List

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter

from schemas.billing import AggregateStatistics


class ExcelExporter:
    """Builds .xlsx workbooks and returns them as bytes."""

    HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
    HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
    TITLE_FONT = Font(bold=True, size=14)
    BOLD_FONT = Font(bold=True, size=11)
    BORDER = Border(
        left=Side(style='thin'), right=Side(style='thin'),
        top=Side(style='thin'), bottom=Side(style='thin')
    )
    WARNING_FILL = PatternFill(start_color="FFEB9C", end_color="FFEB9C", fill_type="solid")
    CENTER = Alignment(horizontal='center', vertical='center')

    def _save(self, wb: Workbook) -> bytes:
        buf = io.BytesIO()
        wb.save(buf)
        buf.seek(0)
        return buf.getvalue()

    def _header_row(self, ws, row: int, headers: List[str]):
        for c, h in enumerate(headers, 1):
            cell = ws.cell(row=row, column=c, value=h)
            cell.font = self.HEADER_FONT
            cell.fill = self.HEADER_FILL
            cell.border = self.BORDER
            cell.alignment = self.CENTER

    def _data_row(self, ws, row: int, values: list, bold: bool = False):
        for c, v in enumerate(values, 1):
            cell = ws.cell(row=row, column=c, value=v)
            cell.border = self.BORDER
            if bold:
                cell.font = self.BOLD_FONT

    def _widths(self, ws, widths: List[int]):
        for idx, w in enumerate(widths, 1):
            ws.column_dimensions[get_column_letter(idx)].width = w

    # ==================== PROFIT SUMMARY ====================

    def generate_profit_summary(self, stats: AggregateStatistics) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = "Profit Summary"

        ws['A1'] = "PROFIT SUMMARY"
        ws['A1'].font = self.TITLE_FONT
        ws['A2'] = f"As of: {stats.as_of.isoformat()}"

        headers = ["Bandwidth", "Users", "Paid", "Pending", "Profit", "Company Payable"]
        self._header_row(ws, 4, headers)
        row = 4
        for tier, bw in stats.bandwidth_stats.items():
            row += 1
            self._data_row(ws, row, [tier, bw.count, bw.paid, bw.pending, bw.profit, bw.company_payable])

        row += 1
        self._data_row(ws, row, [
            "TOTAL",
            stats.paid_count + stats.pending_count,
            stats.paid_count,
            stats.pending_count,
            stats.total_profit,
            stats.total_company_payable,
        ], bold=True)

        row += 2
        for label, value in [
            ("Active users", stats.total_active),
            ("Terminated users", stats.total_terminated),
            ("Total billed", stats.total_collected),
            ("Outstanding balances", stats.total_pending_balance),
        ]:
            self._data_row(ws, row, [label, value])
            row += 1

        self._widths(ws, [22, 10, 10, 10, 14, 18])
        return self._save(wb)

    # ==================== PERIOD REPORT ====================

    def generate_period_report(self, report: dict) -> bytes:
        wb = Workbook()
        ws = wb.active
        ws.title = "Financial Report"

        as_of: date = report["as_of"]
        ws['A1'] = "FINANCIAL REPORT"
        ws['A1'].font = self.TITLE_FONT
        ws['A2'] = f"Filter: {report['filter_type']}   As of: {as_of.isoformat()}"

        headers = ["Username", "Name", "Bandwidth", "Total Collected",
                   "Pending Balance", "Company Share", "My Profit", "Area"]
        self._header_row(ws, 4, headers)
        row = 4
        for d in report["details"]:
            row += 1
            self._data_row(ws, row, [
                d["username"], d["full_name"], d["bandwidth_tier"], d["total"],
                d["pending_balance"], d["company"], d["profit"], d["area"],
            ])
            if d["pending_balance"] > 0:
                ws.cell(row=row, column=5).fill = self.WARNING_FILL

        row += 2
        for label, value in [
            ("Total collected", report["total_collected"]),
            ("Company share", report["company_share"]),
            ("My profit", report["my_profit"]),
            ("Outstanding (as of)", report["total_pending"]),
            ("Payments", report["user_count"]),
        ]:
            self._data_row(ws, row, [label, value], bold=True)
            row += 1

        self._widths(ws, [18, 28, 12, 16, 16, 15, 12, 18])
        return self._save(wb)


excel_exporter = ExcelExporter()
