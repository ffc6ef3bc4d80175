"""
Billing service — settlement checks, payment recording and
profit / company-payable statistics across the subscriber ledger.

Every calculation takes an explicit reference date (`as_of`);
nothing here reads the clock.
"""

from datetime import date
from typing import Optional, Tuple

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.pricing import price_of, tier_order
from database.models import IspCustomer, Payment, CustomerStatus, BILLABLE_STATUSES
from schemas.billing import AggregateStatistics, BandwidthStat


# ==================== BILLING RULES ====================

def is_period_settled(expiry_date: Optional[date], as_of: date) -> bool:
    """
    Paid for the current period when expiry falls in a later month than as_of.
    Expiry in the current month or earlier means the period is still owed.
    """
    if expiry_date is None:
        return False
    if expiry_date.year != as_of.year:
        return expiry_date.year > as_of.year
    return expiry_date.month > as_of.month


def monthly_bill(customer: IspCustomer) -> int:
    """Custom price when set, otherwise the tier's resale price (0 if unpriced)."""
    if customer.custom_price:
        return customer.custom_price
    entry = price_of(customer.bandwidth_tier)
    return entry.resale_price if entry else 0


def current_period_due(customer: IspCustomer, has_period_payment: bool, as_of: date) -> int:
    """
    Bill that comes due for the current period and is not yet in the ledger:
    billable, nothing paid this period, expired on or before as_of.
    """
    if has_period_payment or not customer.is_billable:
        return 0
    if customer.expiry_date is None or customer.expiry_date > as_of:
        return 0
    return monthly_bill(customer)


def projected_pending_balance(customer: IspCustomer, has_period_payment: bool, as_of: date) -> int:
    """Stored balance plus the unrecorded current-period bill. Never persisted."""
    return (customer.pending_balance or 0) + current_period_due(customer, has_period_payment, as_of)


class BillingService:
    def __init__(self, db: Session):
        self.db = db

    # ==================== PAYMENTS ====================

    def record_payment(
        self, customer_id: int, amount: Optional[int],
        payment_date: date, total_bill: Optional[int],
    ) -> Tuple[bool, str, Optional[Payment]]:
        """
        Record a payment against the period (month/year) of payment_date.

        First payment in a period:   insert row, balance += total_bill - amount
        Later payment, same period:  amount_paid += amount, balance -= amount

        Journal row and balance change commit together or not at all.
        """
        amount = amount or 0
        total_bill = total_bill or 0
        month, year = payment_date.month, payment_date.year

        try:
            customer = self.db.query(IspCustomer).filter(
                IspCustomer.id == customer_id
            ).with_for_update().first()
            if not customer:
                self.db.rollback()
                return False, "Customer not found", None

            payment = self.db.query(Payment).filter(
                Payment.customer_id == customer_id,
                Payment.month == month,
                Payment.year == year,
            ).with_for_update().first()

            if payment:
                payment.amount_paid = Payment.amount_paid + amount
                payment.payment_date = payment_date
                customer.pending_balance = IspCustomer.pending_balance - amount
                first_in_period = False
            else:
                payment = Payment(
                    customer_id=customer_id,
                    amount_paid=amount,
                    payment_date=payment_date,
                    month=month,
                    year=year,
                )
                self.db.add(payment)
                customer.pending_balance = IspCustomer.pending_balance + (total_bill - amount)
                first_in_period = True

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Payment for customer {customer_id} rolled back: {e}")
            raise

        self.db.refresh(payment)
        self.db.refresh(customer)
        logger.info(
            f"💰 Payment {amount} for {customer.username} "
            f"({year}-{month:02d}, {'first' if first_in_period else 'additional'}), "
            f"balance now {customer.pending_balance}"
        )
        return True, "Payment recorded", payment

    # ==================== STATISTICS ====================

    def get_stats(self, as_of: date) -> AggregateStatistics:
        """
        Profit, company payable and paid/pending tallies for the period of as_of.

        Terminated and unrecognized statuses stay out of every tally except
        total_pending_balance. Unpriced tiers still count toward area_stats.
        """
        customers = self.db.query(IspCustomer).order_by(IspCustomer.id).all()

        stats = AggregateStatistics(as_of=as_of)
        bandwidth = {}
        areas = {}

        for c in customers:
            stats.total_pending_balance += c.pending_balance or 0

            status = c.customer_status
            if status == CustomerStatus.terminated:
                stats.total_terminated += 1
                continue
            if status not in BILLABLE_STATUSES:
                continue

            if status == CustomerStatus.active:
                stats.total_active += 1

            area = c.area or "Unknown"
            areas[area] = areas.get(area, 0) + 1

            tier = c.bandwidth_tier
            entry = price_of(tier)
            if not entry:
                continue

            bw = bandwidth.setdefault(tier, BandwidthStat())
            bw.count += 1
            bw.profit += entry.profit
            bw.company_payable += entry.company_cost

            stats.total_collected += entry.resale_price
            stats.total_profit += entry.profit
            stats.total_company_payable += entry.company_cost

            if is_period_settled(c.expiry_date, as_of):
                stats.paid_count += 1
                stats.paid_profit += entry.profit
                bw.paid += 1
            else:
                stats.pending_count += 1
                stats.pending_profit += entry.profit
                bw.pending += 1

        stats.bandwidth_stats = {
            k: bandwidth[k] for k in sorted(bandwidth, key=lambda t: (tier_order(t), t))
        }
        stats.area_stats = {k: areas[k] for k in sorted(areas)}
        return stats
