"""
Payment journal, one row per customer per billing period (month + year).
"""

from sqlalchemy import (
    Column, Integer, Date, ForeignKey, UniqueConstraint, CheckConstraint, Index
)
from sqlalchemy.orm import relationship

from ..base import BaseModel


class Payment(BaseModel):
    """
    Cumulative payment for one customer in one period.

    A second payment in the same period adds to amount_paid and moves
    payment_date forward; it never creates another row.
    """

    __tablename__ = 'payments'

    customer_id = Column(
        Integer,
        ForeignKey('isp_customers.id', ondelete='RESTRICT'),
        nullable=False,
        index=True
    )
    amount_paid = Column(Integer, default=0, nullable=False)
    payment_date = Column(Date, nullable=False)  # most recent contribution

    # Period
    month = Column(Integer, nullable=False)  # 1-12
    year = Column(Integer, nullable=False)

    customer = relationship("IspCustomer", back_populates="payments")

    __table_args__ = (
        UniqueConstraint('customer_id', 'month', 'year', name='uq_payments_customer_period'),
        CheckConstraint('month >= 1 AND month <= 12', name='ck_payments_month_range'),
        Index('ix_payments_period', 'year', 'month'),
        Index('ix_payments_payment_date', 'payment_date'),
    )

    def __repr__(self):
        return f"<Payment(id={self.id}, customer_id={self.customer_id}, period={self.year}-{self.month:02d})>"
