"""
Report schemas: read-only projections over the ledger and journal.
"""

from typing import Optional, List
from datetime import date
from pydantic import BaseModel

from .customer import CustomerResponse


class PendingReportItem(CustomerResponse):
    """
    stored_pending_balance is the ledger value.
    projected_pending_balance adds this period's bill when it is still unpaid.
    """

    stored_pending_balance: int
    projected_pending_balance: int
    last_paid_amount: Optional[int] = None
    last_payment_date: Optional[date] = None


class PaidReportItem(CustomerResponse):
    amount_paid: int
    payment_date: date


class PendingReportResponse(BaseModel):
    as_of: date
    data: List[PendingReportItem]
    count: int
    total_pending: int


class PaidReportResponse(BaseModel):
    as_of: date
    data: List[PaidReportItem]
    count: int


class UnpaidReportResponse(BaseModel):
    as_of: date
    data: List[CustomerResponse]
    count: int


class PeriodReportDetail(BaseModel):
    payment_id: int
    customer_id: int
    username: str
    full_name: str
    bandwidth: str
    bandwidth_tier: str
    area: str
    month: int
    year: int
    payment_date: date
    total: int
    pending_balance: int
    company: int
    profit: int


class PeriodFinancialReport(BaseModel):
    """
    total_collected/company_share/my_profit cover the filtered payments.
    total_pending is the ledger-wide outstanding amount as of the reference date.
    """

    as_of: date
    filter_type: str  # range, date, month, all
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    month: Optional[int] = None
    year: Optional[int] = None
    total_collected: int
    company_share: int
    my_profit: int
    total_pending: int
    user_count: int
    details: List[PeriodReportDetail]
