"""
Report service — pending / paid / unpaid customer lists and the
period financial report.

Read-only: nothing in this module writes to the ledger or journal.
"""

from datetime import date
from typing import Optional, List

from sqlalchemy import and_, or_, func
from sqlalchemy.orm import Session

from core.pricing import price_of
from database.models import IspCustomer, Payment, CustomerStatus
from services.billing import current_period_due, projected_pending_balance


BILLABLE_VALUES = [CustomerStatus.active.value, CustomerStatus.inactive_on_expiry.value]


class ReportService:
    def __init__(self, db: Session):
        self.db = db

    def _paid_customer_ids(self, month: int, year: int) -> set:
        rows = self.db.query(Payment.customer_id).filter(
            Payment.month == month,
            Payment.year == year,
        ).all()
        return {r[0] for r in rows}

    def _last_payments(self) -> dict:
        """customer_id -> most recent Payment (highest id)."""
        latest = self.db.query(
            func.max(Payment.id).label("id")
        ).group_by(Payment.customer_id).subquery()
        rows = self.db.query(Payment).join(latest, Payment.id == latest.c.id).all()
        return {p.customer_id: p for p in rows}

    # ==================== PENDING ====================

    def get_pending_report(self, as_of: date) -> List[dict]:
        """
        Customers still owing money as of the reference date.

        Candidates: billable statuses, or anyone with a stored balance > 0.
        Display total = stored balance + this period's bill when unpaid and expired.
        """
        customers = self.db.query(IspCustomer).filter(
            or_(
                IspCustomer.status.in_(BILLABLE_VALUES),
                IspCustomer.pending_balance > 0,
            )
        ).order_by(IspCustomer.id).all()

        paid_ids = self._paid_customer_ids(as_of.month, as_of.year)
        last_payments = self._last_payments()

        result = []
        for c in customers:
            projected = projected_pending_balance(c, c.id in paid_ids, as_of)
            if projected <= 0:
                continue
            last = last_payments.get(c.id)
            result.append({
                "customer": c,
                "stored_pending_balance": c.pending_balance or 0,
                "projected_pending_balance": projected,
                "last_paid_amount": last.amount_paid if last else None,
                "last_payment_date": last.payment_date if last else None,
            })
        return result

    # ==================== PAID / UNPAID ====================

    def get_paid_report(self, as_of: date) -> List[tuple]:
        """Customers with a payment this period and a zero stored balance."""
        rows = self.db.query(IspCustomer, Payment).join(
            Payment, Payment.customer_id == IspCustomer.id
        ).filter(
            Payment.month == as_of.month,
            Payment.year == as_of.year,
            IspCustomer.pending_balance == 0,
        ).order_by(IspCustomer.id).all()
        return [(c, p) for c, p in rows]

    def get_unpaid_report(self, as_of: date) -> List[IspCustomer]:
        """Billable customers without a payment row for this period."""
        return self.db.query(IspCustomer).outerjoin(
            Payment,
            and_(
                Payment.customer_id == IspCustomer.id,
                Payment.month == as_of.month,
                Payment.year == as_of.year,
            )
        ).filter(
            Payment.id.is_(None),
            IspCustomer.status.in_(BILLABLE_VALUES),
        ).order_by(IspCustomer.id).all()

    # ==================== PERIOD FINANCIAL REPORT ====================

    def get_total_outstanding(self, as_of: date) -> int:
        """
        Ledger-wide outstanding amount as of the reference date:
        every stored balance plus every unrecorded current-period bill.
        """
        paid_ids = self._paid_customer_ids(as_of.month, as_of.year)
        total = 0
        for c in self.db.query(IspCustomer).order_by(IspCustomer.id).all():
            total += c.pending_balance or 0
            total += current_period_due(c, c.id in paid_ids, as_of)
        return total

    def get_period_report(
        self, as_of: date,
        on_date: Optional[date] = None,
        date_from: Optional[date] = None, date_to: Optional[date] = None,
        month: Optional[int] = None, year: Optional[int] = None,
    ) -> dict:
        """
        Collections for a date, a date range or a month/year (range wins,
        then date, then month/year; no filter = all payments).

        company/profit are derived per payment row from its tier:
        profit = amount_paid - company cost (0 cost when unpriced).
        total_pending is NOT filtered; it is get_total_outstanding(as_of).
        """
        q = self.db.query(Payment, IspCustomer).join(
            IspCustomer, Payment.customer_id == IspCustomer.id
        )

        if date_from and date_to:
            filter_type = "range"
            q = q.filter(Payment.payment_date >= date_from, Payment.payment_date <= date_to)
        elif on_date:
            filter_type = "date"
            date_from = date_to = on_date
            q = q.filter(Payment.payment_date == on_date)
        elif month and year:
            filter_type = "month"
            q = q.filter(Payment.month == month, Payment.year == year)
        else:
            filter_type = "all"

        records = q.order_by(Payment.payment_date, Payment.id).all()

        total_collected = 0
        company_share = 0
        my_profit = 0
        details = []
        for p, c in records:
            entry = price_of(c.bandwidth_tier)
            company = entry.company_cost if entry else 0
            profit = p.amount_paid - company

            total_collected += p.amount_paid
            company_share += company
            my_profit += profit

            details.append({
                "payment_id": p.id,
                "customer_id": c.id,
                "username": c.username,
                "full_name": c.full_name,
                "bandwidth": c.bandwidth,
                "bandwidth_tier": c.bandwidth_tier,
                "area": c.area,
                "month": p.month,
                "year": p.year,
                "payment_date": p.payment_date,
                "total": p.amount_paid,
                "pending_balance": c.pending_balance or 0,
                "company": company,
                "profit": profit,
            })

        return {
            "as_of": as_of,
            "filter_type": filter_type,
            "date_from": date_from if filter_type in ("range", "date") else None,
            "date_to": date_to if filter_type in ("range", "date") else None,
            "month": month if filter_type == "month" else None,
            "year": year if filter_type == "month" else None,
            "total_collected": total_collected,
            "company_share": company_share,
            "my_profit": my_profit,
            "total_pending": self.get_total_outstanding(as_of),
            "user_count": len(records),
            "details": details,
        }
