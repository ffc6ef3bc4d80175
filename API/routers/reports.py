"""
Pending, paid and unpaid lists plus the period financial report.
Endpoint: /api/reports/...
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from database import get_db
from core.dependencies import get_as_of, parse_date
from schemas.customer import CustomerResponse
from schemas.report import (
    PendingReportItem, PendingReportResponse,
    PaidReportItem, PaidReportResponse,
    UnpaidReportResponse, PeriodFinancialReport,
)
from services.reports import ReportService
from services.excel_export import excel_exporter
from routers.billing import XLSX_MEDIA_TYPE

router = APIRouter()


# ==================== CUSTOMER LISTS ====================

@router.get("/pending", response_model=PendingReportResponse)
async def pending_report(
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """Customers with a remaining balance (stored + unpaid current bill)."""
    rows = ReportService(db).get_pending_report(as_of)
    data = []
    for r in rows:
        base = CustomerResponse.model_validate(r["customer"]).model_dump()
        data.append(PendingReportItem(
            **base,
            stored_pending_balance=r["stored_pending_balance"],
            projected_pending_balance=r["projected_pending_balance"],
            last_paid_amount=r["last_paid_amount"],
            last_payment_date=r["last_payment_date"],
        ))
    return PendingReportResponse(
        as_of=as_of,
        data=data,
        count=len(data),
        total_pending=sum(d.projected_pending_balance for d in data),
    )


@router.get("/paid", response_model=PaidReportResponse)
async def paid_report(
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """Paid this period with nothing carried forward."""
    rows = ReportService(db).get_paid_report(as_of)
    data = [
        PaidReportItem(
            **CustomerResponse.model_validate(c).model_dump(),
            amount_paid=p.amount_paid,
            payment_date=p.payment_date,
        )
        for c, p in rows
    ]
    return PaidReportResponse(as_of=as_of, data=data, count=len(data))


@router.get("/unpaid", response_model=UnpaidReportResponse)
async def unpaid_report(
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """Active / inactive-on-expiry customers with no payment this period."""
    customers = ReportService(db).get_unpaid_report(as_of)
    data = [CustomerResponse.model_validate(c) for c in customers]
    return UnpaidReportResponse(as_of=as_of, data=data, count=len(data))


# ==================== FINANCIAL REPORT ====================

def _period_report(
    db: Session, as_of: date,
    on_date: Optional[str], start_date: Optional[str], end_date: Optional[str],
    month: Optional[int], year: Optional[int],
) -> dict:
    if month is not None and not 1 <= month <= 12:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "month must be 1-12")
    return ReportService(db).get_period_report(
        as_of,
        on_date=parse_date(on_date),
        date_from=parse_date(start_date),
        date_to=parse_date(end_date),
        month=month,
        year=year,
    )


@router.get("", response_model=PeriodFinancialReport)
async def period_report(
    on_date: Optional[str] = Query(None, alias="date"),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    month: Optional[int] = Query(None),
    year: Optional[int] = Query(None),
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """
    Collections filtered by date, date range or month/year.
    total_pending is always the ledger-wide figure as of the reference date.
    """
    return _period_report(db, as_of, on_date, start_date, end_date, month, year)


@router.get("/export.xlsx")
async def export_period_report(
    on_date: Optional[str] = Query(None, alias="date"),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    month: Optional[int] = Query(None),
    year: Optional[int] = Query(None),
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    report = _period_report(db, as_of, on_date, start_date, end_date, month, year)
    content = excel_exporter.generate_period_report(report)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="financial_report_{as_of.isoformat()}.xlsx"'},
    )
