import os
import shutil
import tempfile

TEST_DB_DIR = tempfile.mkdtemp(prefix="isp_billing_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(TEST_DB_DIR, 'test_billing.db')}"
os.environ.setdefault("SEED_DEMO_DATA", "false")
os.environ.setdefault("ASSISTANT_API_KEY", "")

from datetime import date  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from app import app  # noqa: E402
from database import db, reset_db  # noqa: E402
from database.models import IspCustomer  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_database_dir():
    yield TEST_DB_DIR
    db.engine.dispose()
    shutil.rmtree(TEST_DB_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def fresh_schema():
    reset_db()
    yield


@pytest.fixture()
def db_session():
    session = db.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def make_customer(db_session):
    counter = {"n": 0}

    def _make(**fields) -> IspCustomer:
        counter["n"] += 1
        status = fields.pop("status", "Active")
        values = {
            "username": f"user{counter['n']}",
            "full_name": f"Customer {counter['n']}",
            "package": "ABB-Silver",
            "bandwidth": "17",
            "expiry_date": date(2026, 2, 20),
            "area": "SECTOR-4-A",
            "pending_balance": 0,
        }
        values.update(fields)
        customer = IspCustomer(**values)
        customer.set_status(status)
        db_session.add(customer)
        db_session.commit()
        db_session.refresh(customer)
        return customer

    return _make
