from datetime import date

from services.billing import BillingService
from services.reports import ReportService


AS_OF = date(2026, 2, 28)


# ==================== PENDING ====================

def test_pending_adds_unpaid_current_bill(db_session, make_customer) -> None:
    due = make_customer(expiry_date=date(2026, 2, 20), pending_balance=300)
    make_customer(expiry_date=date(2026, 3, 20))

    rows = ReportService(db_session).get_pending_report(AS_OF)

    assert [r["customer"].id for r in rows] == [due.id]
    assert rows[0]["stored_pending_balance"] == 300
    assert rows[0]["projected_pending_balance"] == 1700
    assert rows[0]["customer"].pending_balance == 300


def test_pending_uses_custom_price(db_session, make_customer) -> None:
    make_customer(custom_price=1000)
    rows = ReportService(db_session).get_pending_report(AS_OF)
    assert rows[0]["projected_pending_balance"] == 1000


def test_pending_after_partial_payment(db_session, make_customer) -> None:
    c = make_customer()
    BillingService(db_session).record_payment(c.id, 900, date(2026, 2, 10), 1400)

    rows = ReportService(db_session).get_pending_report(AS_OF)

    assert rows[0]["projected_pending_balance"] == 500
    assert rows[0]["last_paid_amount"] == 900
    assert rows[0]["last_payment_date"] == date(2026, 2, 10)


def test_pending_includes_terminated_with_balance(db_session, make_customer) -> None:
    gone = make_customer(status="Terminated", pending_balance=800)
    make_customer(status="Terminated")

    rows = ReportService(db_session).get_pending_report(AS_OF)

    assert [r["customer"].id for r in rows] == [gone.id]
    assert rows[0]["projected_pending_balance"] == 800


def test_pending_skips_credit_balances(db_session, make_customer) -> None:
    make_customer(expiry_date=date(2026, 3, 20), pending_balance=-600)
    assert ReportService(db_session).get_pending_report(AS_OF) == []


def test_last_payment_is_most_recent(db_session, make_customer) -> None:
    c = make_customer(pending_balance=5000)
    service = BillingService(db_session)
    service.record_payment(c.id, 100, date(2026, 1, 5), 0)
    service.record_payment(c.id, 200, date(2026, 2, 5), 0)

    rows = ReportService(db_session).get_pending_report(AS_OF)
    assert rows[0]["last_paid_amount"] == 200


# ==================== PAID / UNPAID ====================

def test_paid_requires_zero_balance(db_session, make_customer) -> None:
    settled = make_customer()
    partial = make_customer()
    service = BillingService(db_session)
    service.record_payment(settled.id, 1400, date(2026, 2, 10), 1400)
    service.record_payment(partial.id, 900, date(2026, 2, 10), 1400)

    rows = ReportService(db_session).get_paid_report(AS_OF)

    assert [c.id for c, _ in rows] == [settled.id]
    assert rows[0][1].amount_paid == 1400


def test_unpaid_is_billable_without_payment_row(db_session, make_customer) -> None:
    paid = make_customer()
    unpaid = make_customer(expiry_date=date(2026, 3, 20))
    inactive = make_customer(status="Inactive on Expiry")
    make_customer(status="Terminated")
    make_customer(status="Suspended")
    BillingService(db_session).record_payment(paid.id, 100, date(2026, 2, 10), 1400)

    customers = ReportService(db_session).get_unpaid_report(AS_OF)
    assert [c.id for c in customers] == [unpaid.id, inactive.id]


def test_payment_in_other_period_does_not_count(db_session, make_customer) -> None:
    c = make_customer()
    BillingService(db_session).record_payment(c.id, 1400, date(2026, 1, 10), 1400)

    assert [x.id for x in ReportService(db_session).get_unpaid_report(AS_OF)] == [c.id]
    assert ReportService(db_session).get_paid_report(AS_OF) == []


# ==================== PERIOD REPORT ====================

def _ledger_with_payments(db_session, make_customer):
    a = make_customer(bandwidth="17")
    b = make_customer(bandwidth="99")
    c = make_customer(bandwidth="12", expiry_date=date(2026, 2, 25))
    service = BillingService(db_session)
    service.record_payment(a.id, 1400, date(2026, 1, 10), 1400)
    service.record_payment(b.id, 1000, date(2026, 2, 3), 1000)
    service.record_payment(a.id, 900, date(2026, 2, 12), 1400)
    return a, b, c


def test_period_report_by_month(db_session, make_customer) -> None:
    a, b, c = _ledger_with_payments(db_session, make_customer)

    report = ReportService(db_session).get_period_report(AS_OF, month=2, year=2026)

    assert report["filter_type"] == "month"
    assert report["user_count"] == 2
    assert report["total_collected"] == 1900
    # unpriced tier: zero company share, whole amount is profit
    assert report["company_share"] == 535
    assert report["my_profit"] == 1900 - 535
    assert [d["customer_id"] for d in report["details"]] == [b.id, a.id]


def test_period_report_by_range_and_date(db_session, make_customer) -> None:
    _ledger_with_payments(db_session, make_customer)
    service = ReportService(db_session)

    ranged = service.get_period_report(
        AS_OF, date_from=date(2026, 1, 1), date_to=date(2026, 2, 5)
    )
    assert ranged["filter_type"] == "range"
    assert ranged["total_collected"] == 2400

    single = service.get_period_report(AS_OF, on_date=date(2026, 2, 12))
    assert single["filter_type"] == "date"
    assert single["date_from"] == single["date_to"] == date(2026, 2, 12)
    assert single["total_collected"] == 900

    everything = service.get_period_report(AS_OF)
    assert everything["filter_type"] == "all"
    assert everything["user_count"] == 3


def test_period_report_pending_is_current_not_filtered(db_session, make_customer) -> None:
    a, b, c = _ledger_with_payments(db_session, make_customer)
    # stored: a=500, b=0, c=0; c owes 1200 for February with no payment row
    service = ReportService(db_session)

    january = service.get_period_report(AS_OF, month=1, year=2026)
    february = service.get_period_report(AS_OF, month=2, year=2026)

    assert january["total_pending"] == february["total_pending"] == 500 + 1200
    assert service.get_total_outstanding(AS_OF) == 1700


# ==================== HTTP ====================

def test_report_endpoints(client, make_customer) -> None:
    make_customer(username="owes", pending_balance=200)
    make_customer(username="ahead", expiry_date=date(2026, 3, 20))

    pending = client.get("/api/reports/pending", params={"as_of": "2026-02-28"}).json()
    assert pending["count"] == 1
    assert pending["data"][0]["username"] == "owes"
    assert pending["data"][0]["stored_pending_balance"] == 200
    assert pending["data"][0]["projected_pending_balance"] == 1600
    assert pending["total_pending"] == 1600

    unpaid = client.get("/api/reports/unpaid", params={"as_of": "2026-02-28"}).json()
    assert unpaid["count"] == 2

    paid = client.get("/api/reports/paid", params={"as_of": "2026-02-28"}).json()
    assert paid["count"] == 0


def test_period_report_endpoint(client, make_customer) -> None:
    c = make_customer()
    client.post(f"/api/customers/{c.id}/pay", json={"amount": 1400, "date": "2026-02-10", "totalBill": 1400})

    response = client.get("/api/reports", params={"month": 2, "year": 2026, "as_of": "2026-02-28"})
    assert response.status_code == 200
    data = response.json()
    assert data["total_collected"] == 1400
    assert data["company_share"] == 535
    assert data["my_profit"] == 865
    assert data["details"][0]["bandwidth_tier"] == "17 MB"

    by_date = client.get("/api/reports", params={"date": "2026-02-10"}).json()
    assert by_date["user_count"] == 1

    assert client.get("/api/reports", params={"month": 13, "year": 2026}).status_code == 400
