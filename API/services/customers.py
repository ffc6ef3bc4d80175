"""
Subscriber ledger service: listing, edits and bulk import.
"""

from datetime import date, datetime
from typing import Optional, Tuple, List, Any

from loguru import logger
from pydantic import ValidationError
from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database.models import IspCustomer, Payment
from schemas.customer import CustomerImportRow


# Mutable fields an import row may overwrite. pending_balance and
# custom_price are owned by payments and manual edits.
IMPORT_FIELDS = ("full_name", "package", "bandwidth", "area", "address", "mobile_number")

EDITABLE_FIELDS = ("full_name", "area", "address", "mobile_number", "custom_price", "expiry_date")

_DATE_FORMATS = ("%Y-%m-%d", "%d/%m/%Y", "%d-%m-%Y", "%Y/%m/%d", "%d-%b-%Y", "%d %b %Y")


def parse_import_date(value: Optional[str]) -> Optional[date]:
    """Best-effort parse of spreadsheet expiry dates. Unparseable -> None."""
    if not value:
        return None
    text = str(value).strip()
    # "2026-03-20 23:59:00" / "2026-03-20T23:59:00"
    if len(text) > 10 and text[4:5] == "-" and text[10:11] in (" ", "T"):
        text = text[:10]
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


class CustomerService:
    def __init__(self, db: Session):
        self.db = db

    def get_customer(self, customer_id: int) -> Optional[IspCustomer]:
        return self.db.query(IspCustomer).filter(IspCustomer.id == customer_id).first()

    def get_by_username(self, username: str) -> Optional[IspCustomer]:
        return self.db.query(IspCustomer).filter(IspCustomer.username == username).first()

    # ==================== LISTING ====================

    def list_customers(self, as_of: date) -> List[Tuple[IspCustomer, Optional[Payment]]]:
        """All customers, left-joined with their payment for the period of as_of."""
        rows = self.db.query(IspCustomer, Payment).outerjoin(
            Payment,
            and_(
                Payment.customer_id == IspCustomer.id,
                Payment.month == as_of.month,
                Payment.year == as_of.year,
            )
        ).order_by(IspCustomer.id).all()
        return [(c, p) for c, p in rows]

    # ==================== EDIT ====================

    def update_customer(self, customer_id: int, fields: dict) -> Tuple[bool, str]:
        """
        Partial update. Only keys present in `fields` are written;
        an explicit None clears the value (e.g. custom_price).
        """
        customer = self.get_customer(customer_id)
        if not customer:
            return False, "Customer not found"

        changed = []
        for key, value in fields.items():
            if key not in EDITABLE_FIELDS:
                continue
            if key in ("full_name", "area", "address", "mobile_number") and value is None:
                value = ""
            setattr(customer, key, value)
            changed.append(key)

        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Update of customer {customer_id} rolled back: {e}")
            raise

        logger.info(f"✏️ Customer {customer.username} updated: {', '.join(changed) or 'no changes'}")
        return True, "Customer updated"

    # ==================== BULK IMPORT ====================

    def bulk_import(self, rows: List[Any]) -> dict:
        """
        Upsert by username inside one transaction.

        Matching username: overwrite name/status/package/bandwidth/expiry/
        area/address/mobile. New username: insert with pending_balance=0.
        Rows that are not objects or have no username are skipped.
        """
        created = updated = skipped = 0
        seen = {}

        try:
            for raw in rows:
                if not isinstance(raw, dict):
                    skipped += 1
                    continue
                try:
                    row = CustomerImportRow(**raw)
                except ValidationError:
                    skipped += 1
                    continue
                if not row.username:
                    skipped += 1
                    continue

                customer = seen.get(row.username) or self.get_by_username(row.username)
                if customer is None:
                    customer = IspCustomer(username=row.username, pending_balance=0)
                    self.db.add(customer)
                    created += 1
                else:
                    updated += 1

                for key in IMPORT_FIELDS:
                    setattr(customer, key, getattr(row, key) or "")
                customer.set_status(row.status)
                customer.expiry_date = parse_import_date(row.expiry_date)

                seen[row.username] = customer
                self.db.flush()

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Bulk import rolled back, nothing written: {e}")
            raise

        count = created + updated
        logger.info(f"📥 Bulk import: {count} applied ({created} new, {updated} updated), {skipped} skipped")
        return {
            "count": count,
            "created": created,
            "updated": updated,
            "skipped": skipped,
        }
