from datetime import date

from database.models import IspCustomer, CustomerStatus
from services.billing import (
    is_period_settled, monthly_bill, current_period_due, projected_pending_balance,
)


AS_OF = date(2026, 2, 28)


def _customer(**kw) -> IspCustomer:
    status = kw.pop("status", "Active")
    c = IspCustomer(
        username="x", bandwidth=kw.pop("bandwidth", "17"),
        pending_balance=kw.pop("pending_balance", 0), **kw
    )
    c.set_status(status)
    return c


def test_expiry_next_month_is_settled() -> None:
    assert is_period_settled(date(2026, 3, 1), AS_OF)
    assert is_period_settled(date(2027, 1, 15), AS_OF)


def test_expiry_this_month_or_earlier_is_pending() -> None:
    assert not is_period_settled(date(2026, 2, 28), AS_OF)
    assert not is_period_settled(date(2026, 2, 1), AS_OF)
    assert not is_period_settled(date(2026, 1, 31), AS_OF)
    assert not is_period_settled(date(2025, 12, 31), AS_OF)


def test_missing_expiry_is_pending() -> None:
    assert not is_period_settled(None, AS_OF)


def test_monthly_bill_prefers_custom_price() -> None:
    assert monthly_bill(_customer()) == 1400
    assert monthly_bill(_customer(custom_price=1000)) == 1000
    assert monthly_bill(_customer(custom_price=0)) == 1400
    assert monthly_bill(_customer(bandwidth="99")) == 0


def test_current_period_due() -> None:
    due = _customer(expiry_date=date(2026, 2, 20))
    assert current_period_due(due, False, AS_OF) == 1400
    assert current_period_due(due, True, AS_OF) == 0

    not_expired = _customer(expiry_date=date(2026, 3, 20))
    assert current_period_due(not_expired, False, AS_OF) == 0

    terminated = _customer(status="Terminated", expiry_date=date(2026, 2, 20))
    assert current_period_due(terminated, False, AS_OF) == 0

    no_expiry = _customer(expiry_date=None)
    assert current_period_due(no_expiry, False, AS_OF) == 0


def test_projection_keeps_stored_balance_separate() -> None:
    c = _customer(expiry_date=date(2026, 2, 20), pending_balance=300)
    assert projected_pending_balance(c, False, AS_OF) == 1700
    assert projected_pending_balance(c, True, AS_OF) == 300
    assert c.pending_balance == 300


def test_status_parsing() -> None:
    assert CustomerStatus.parse("active") is CustomerStatus.active
    assert CustomerStatus.parse("  INACTIVE   on  expiry ") is CustomerStatus.inactive_on_expiry
    assert CustomerStatus.parse("Terminated") is CustomerStatus.terminated
    assert CustomerStatus.parse("Suspended") is None
    assert CustomerStatus.parse(None) is None

    c = _customer(status="Suspended")
    assert c.status is None
    assert c.status_raw == "Suspended"
    assert not c.is_billable
