import io
from datetime import date

from openpyxl import Workbook, load_workbook

from services.billing import BillingService
from services.reports import ReportService
from services.excel_export import excel_exporter


AS_OF = date(2026, 2, 28)


def test_profit_summary_workbook(db_session, make_customer) -> None:
    make_customer(bandwidth="12")
    make_customer(bandwidth="17", expiry_date=date(2026, 3, 20))

    content = excel_exporter.generate_profit_summary(BillingService(db_session).get_stats(AS_OF))
    ws = load_workbook(io.BytesIO(content)).active

    assert ws.title == "Profit Summary"
    assert ws["A5"].value == "12 MB"
    assert ws["B5"].value == 1
    assert ws["A6"].value == "17 MB"
    assert ws["C6"].value == 1
    assert ws["A7"].value == "TOTAL"
    assert ws["E7"].value == 715 + 865


def test_period_report_workbook(db_session, make_customer) -> None:
    c = make_customer(username="enl212")
    BillingService(db_session).record_payment(c.id, 900, date(2026, 2, 10), 1400)

    report = ReportService(db_session).get_period_report(AS_OF, month=2, year=2026)
    ws = load_workbook(io.BytesIO(excel_exporter.generate_period_report(report))).active

    assert ws["A5"].value == "enl212"
    assert ws["D5"].value == 900
    assert ws["E5"].value == 500
    assert ws["F5"].value == 535
    assert ws["G5"].value == 365


def test_export_endpoints(client, make_customer) -> None:
    make_customer()
    xlsx = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    stats = client.get("/api/stats/export.xlsx", params={"as_of": "2026-02-28"})
    assert stats.status_code == 200
    assert stats.headers["content-type"] == xlsx
    assert "profit_summary_2026-02-28.xlsx" in stats.headers["content-disposition"]

    report = client.get("/api/reports/export.xlsx", params={"month": 2, "year": 2026})
    assert report.status_code == 200
    assert load_workbook(io.BytesIO(report.content)).active.title == "Financial Report"


def test_column_widths_past_z() -> None:
    ws = Workbook().active
    excel_exporter._widths(ws, [7] * 30)

    assert ws.column_dimensions["A"].width == 7
    assert ws.column_dimensions["Z"].width == 7
    assert ws.column_dimensions["AD"].width == 7
