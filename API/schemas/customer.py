"""
Customer (subscriber ledger) schemas.
"""

from typing import Optional, List
from datetime import date
from pydantic import BaseModel, field_validator


class CustomerResponse(BaseModel):
    """Subscriber as stored in the ledger."""

    id: int
    username: str
    full_name: str
    status: Optional[str] = None
    status_raw: Optional[str] = None
    package: str
    bandwidth: str
    bandwidth_tier: str
    expiry_date: Optional[date] = None
    area: str
    address: str
    mobile_number: str
    custom_price: Optional[int] = None
    pending_balance: int

    model_config = {"from_attributes": True}


class CustomerListItem(CustomerResponse):
    """Subscriber joined with the current period's payment (absent if unpaid)."""

    amount_paid: Optional[int] = None
    payment_date: Optional[date] = None


class CustomerListResponse(BaseModel):
    data: List[CustomerListItem]
    total: int


class CustomerUpdate(BaseModel):
    """
    Partial edit of a subscriber.
    Only fields present in the request body are written.
    """

    full_name: Optional[str] = None
    area: Optional[str] = None
    address: Optional[str] = None
    mobile_number: Optional[str] = None
    custom_price: Optional[int] = None
    expiry_date: Optional[date] = None

    @field_validator("expiry_date", mode="before")
    @classmethod
    def empty_date_is_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class CustomerImportRow(BaseModel):
    """One normalized spreadsheet row for bulk import."""

    username: Optional[str] = None
    full_name: Optional[str] = ""
    status: Optional[str] = ""
    package: Optional[str] = ""
    bandwidth: Optional[str] = ""
    expiry_date: Optional[str] = ""
    area: Optional[str] = ""
    address: Optional[str] = ""
    mobile_number: Optional[str] = ""

    @field_validator(
        "username", "full_name", "status", "package", "bandwidth",
        "expiry_date", "area", "address", "mobile_number",
        mode="before"
    )
    @classmethod
    def coerce_to_text(cls, v):
        # spreadsheets hand us numbers for usernames and bandwidth
        if v is None:
            return None
        return str(v).strip()


class BulkImportResponse(BaseModel):
    success: bool = True
    count: int
    created: int
    updated: int
    skipped: int
