"""
ISP subscriber ledger — one row per customer.
"""

from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import Column, String, Integer, Date, Index
from sqlalchemy.orm import relationship

from core.pricing import tier_label
from ..base import BaseModel


class CustomerStatus(PyEnum):
    """Known subscriber statuses (values are the canonical display text)."""
    active = "Active"
    inactive_on_expiry = "Inactive on Expiry"
    terminated = "Terminated"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["CustomerStatus"]:
        """Case-insensitive parse. Unknown text returns None."""
        if raw is None:
            return None
        key = " ".join(str(raw).split()).lower()
        for member in cls:
            if member.value.lower() == key:
                return member
        return None


BILLABLE_STATUSES = (CustomerStatus.active, CustomerStatus.inactive_on_expiry)


class IspCustomer(BaseModel):
    """
    Subscriber record.

    pending_balance is the stored running carry-forward (negative = credit).
    Only the payment operation changes it; reports never write it back.
    """

    __tablename__ = 'isp_customers'

    username = Column(String(100), unique=True, nullable=False, index=True)
    full_name = Column(String(300), default="", nullable=False)

    # Canonical CustomerStatus value, NULL when the source text was not recognized
    status = Column(String(30), nullable=True)
    status_raw = Column(String(100), nullable=True)

    package = Column(String(100), default="", nullable=False)
    bandwidth = Column(String(20), default="", nullable=False)  # "17" -> tier "17 MB"
    expiry_date = Column(Date, nullable=True)

    area = Column(String(200), default="", nullable=False)
    address = Column(String(500), default="", nullable=False)
    mobile_number = Column(String(50), default="", nullable=False)

    custom_price = Column(Integer, nullable=True)
    pending_balance = Column(Integer, default=0, nullable=False)

    payments = relationship("Payment", back_populates="customer", order_by="Payment.id")

    __table_args__ = (
        Index('ix_isp_customers_status', 'status'),
    )

    def __repr__(self):
        return f"<IspCustomer(id={self.id}, username='{self.username}')>"

    @property
    def customer_status(self) -> Optional[CustomerStatus]:
        if self.status is None:
            return None
        try:
            return CustomerStatus(self.status)
        except ValueError:
            return None

    @property
    def is_billable(self) -> bool:
        """Active and Inactive-on-Expiry customers take part in billing."""
        return self.customer_status in BILLABLE_STATUSES

    @property
    def bandwidth_tier(self) -> str:
        return tier_label(self.bandwidth)

    def set_status(self, raw: Optional[str]):
        """Store a normalized status, quarantining unknown text in status_raw."""
        parsed = CustomerStatus.parse(raw)
        if parsed is not None:
            self.status = parsed.value
            self.status_raw = None
        else:
            self.status = None
            self.status_raw = (raw or "").strip() or None
