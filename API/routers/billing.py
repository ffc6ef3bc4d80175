"""
Dashboard statistics and the pricing table.
Endpoint: /api/...
"""

from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from database import get_db
from core.dependencies import get_as_of
from core.pricing import get_all_tiers
from schemas.billing import AggregateStatistics
from services.billing import BillingService
from services.excel_export import excel_exporter

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/stats", response_model=AggregateStatistics)
async def get_stats(
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """Profit, company payable, paid/pending counts, tier and area breakdowns."""
    return BillingService(db).get_stats(as_of)


@router.get("/stats/export.xlsx")
async def export_stats(
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    stats = BillingService(db).get_stats(as_of)
    content = excel_exporter.generate_profit_summary(stats)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="profit_summary_{as_of.isoformat()}.xlsx"'},
    )


@router.get("/pricing")
async def get_pricing():
    """Bandwidth tiers with company cost and resale price."""
    data = get_all_tiers()
    return {"data": data, "count": len(data)}
