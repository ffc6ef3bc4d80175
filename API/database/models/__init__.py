"""
Database models package.
Export all models for easy importing.
"""

# Subscriber ledger (MUST be imported first - payments reference it)
from .customer import (
    IspCustomer,
    CustomerStatus,
    BILLABLE_STATUSES,
)

# Payment journal
from .payment import Payment


__all__ = [
    # Ledger
    'IspCustomer',
    'CustomerStatus',
    'BILLABLE_STATUSES',

    # Journal
    'Payment',
]
