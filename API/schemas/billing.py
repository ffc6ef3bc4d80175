"""
Billing schemas: payment recording and aggregate statistics.
"""

from typing import Dict, Optional
from datetime import date
from pydantic import BaseModel, Field


class RecordPaymentBody(BaseModel):
    """Payment against the billing period that contains `date`."""

    amount: Optional[int] = None
    date: Optional[str] = None  # YYYY-MM-DD, defaults to the reference date
    total_bill: Optional[int] = Field(default=None, alias="totalBill")

    model_config = {"populate_by_name": True}


class PaymentResponse(BaseModel):
    id: int
    customer_id: int
    amount_paid: int
    payment_date: date
    month: int
    year: int

    model_config = {"from_attributes": True}


class RecordPaymentResponse(BaseModel):
    success: bool = True
    message: str
    payment: PaymentResponse
    pending_balance: int


class BandwidthStat(BaseModel):
    count: int = 0
    profit: int = 0
    company_payable: int = 0
    paid: int = 0
    pending: int = 0


class AggregateStatistics(BaseModel):
    """Whole-ledger summary for one reference date."""

    as_of: date
    total_active: int = 0
    total_terminated: int = 0
    paid_count: int = 0
    pending_count: int = 0
    paid_profit: int = 0
    pending_profit: int = 0
    total_collected: int = 0
    total_profit: int = 0
    total_company_payable: int = 0
    total_pending_balance: int = 0
    bandwidth_stats: Dict[str, BandwidthStat] = Field(default_factory=dict)
    area_stats: Dict[str, int] = Field(default_factory=dict)

    def to_prompt_dict(self) -> dict:
        """Plain JSON-safe key-value structure for text generation prompts."""
        return self.model_dump(mode="json")
