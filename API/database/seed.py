"""
Demo subscriber ledger, inserted on first run only.
"""
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import IspCustomer


# (username, full_name, status, package, bandwidth, expiry_date, area)
DEMO_CUSTOMERS = [
    ("enl212", "Mr Umair Dubai", "Active", "ABB-Silver", "17", "2026-03-20", "SECTOR-4-A"),
    ("j.net-7", "Faraz makenik", "Inactive on Expiry", "ABB-Bronze", "12", "2026-02-28", "SECTOR-4-A"),
    ("enl120", "Mr Irfan", "Active", "ABB-Bronze", "12", "2026-03-07", "SECTOR-4-A"),
    ("j.net-19", "Sharjeel", "Active", "ABB-Silver", "17", "2026-03-13", "SECTOR-4-A"),
    ("enl117", "Mirza Umair", "Active", "ABB-Silver", "17", "2026-02-27", "SECTOR-4-A"),
    ("earthnet108", "Mr Anjum", "Active", "ABB-Platinum", "27", "2026-02-26", "SECTOR-4-A"),
    ("earth113", "Mr khanis", "Active", "ABB-Diamond", "32", "2026-03-02", "SECTOR-4-A"),
    ("earthnet289", "Danish", "Active", "ABB-Silver", "17", "2026-02-28", "SECTOR-4-A"),
    ("earthnet156", "Muhammad kamran", "Active", "ABB-Bronze", "12", "2026-02-28", "SECTOR-4-A"),
    ("earth75", "Mr Amjad Rafi", "Active", "ABB-Titanium", "52", "2026-03-02", "SECTOR-4-A"),
    ("enl106", "Mr sajad", "Active", "ABB-Silver", "17", "2026-02-24", "SECTOR-4-A"),
    ("J.net-1009", "Shani", "Active", "ABB-Gold", "22", "2026-03-09", "SECTOR-4-A"),
    ("j.net-101", "Talha Nadeem", "Active", "ABB-Platinum", "27", "2026-03-10", "SECTOR-4-A"),
    ("j.net47", "mohammad", "Active", "ABB-Bronze", "12", "2026-03-17", "SECTOR-4-A"),
    ("earthnet444", "Mr Raheel", "Active", "ABB-Silver", "17", "2026-03-11", "SECTOR-4-A"),
]


def seed_demo_customers(session: Session) -> int:
    """Insert the demo ledger when isp_customers is empty. Returns rows inserted."""
    from services.customers import parse_import_date

    if session.query(IspCustomer.id).first():
        logger.info("ℹ️  Customers already exist, demo seed skipped")
        return 0

    try:
        for username, full_name, status, package, bandwidth, expiry, area in DEMO_CUSTOMERS:
            customer = IspCustomer(
                username=username,
                full_name=full_name,
                package=package,
                bandwidth=bandwidth,
                expiry_date=parse_import_date(expiry),
                area=area,
                pending_balance=0,
            )
            customer.set_status(status)
            session.add(customer)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"❌ Demo seed rolled back: {e}")
        raise

    logger.info(f"✅ Seeded {len(DEMO_CUSTOMERS)} demo customers")
    return len(DEMO_CUSTOMERS)
