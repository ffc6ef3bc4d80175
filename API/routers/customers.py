"""
Customers router — subscriber ledger, payments and imports.
Endpoint: /api/customers/...
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, File, UploadFile, status
from sqlalchemy.orm import Session

from database import get_db
from database.models import IspCustomer, Payment
from core.dependencies import get_as_of, parse_date
from schemas.customer import (
    CustomerResponse, CustomerListItem, CustomerListResponse,
    CustomerUpdate, BulkImportResponse,
)
from schemas.billing import RecordPaymentBody, RecordPaymentResponse, PaymentResponse
from services.customers import CustomerService
from services.billing import BillingService
from services.import_mapper import parse_csv

router = APIRouter()


def _list_item(customer: IspCustomer, payment: Optional[Payment]) -> CustomerListItem:
    base = CustomerResponse.model_validate(customer).model_dump()
    return CustomerListItem(
        **base,
        amount_paid=payment.amount_paid if payment else None,
        payment_date=payment.payment_date if payment else None,
    )


# ==================== LEDGER ====================

@router.get("", response_model=CustomerListResponse)
async def list_customers(
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """All customers with this period's payment, if any."""
    rows = CustomerService(db).list_customers(as_of)
    data = [_list_item(c, p) for c, p in rows]
    return CustomerListResponse(data=data, total=len(data))


@router.patch("/{customer_id}")
async def update_customer(
    customer_id: int,
    body: CustomerUpdate,
    db: Session = Depends(get_db),
):
    """Edit name, area, address, mobile, custom price or expiry."""
    ok, msg = CustomerService(db).update_customer(
        customer_id, body.model_dump(exclude_unset=True)
    )
    if not ok:
        raise HTTPException(status.HTTP_404_NOT_FOUND, msg)
    return {"success": True, "message": msg}


# ==================== PAYMENTS ====================

@router.post("/{customer_id}/pay", response_model=RecordPaymentResponse)
async def record_payment(
    customer_id: int,
    body: RecordPaymentBody,
    as_of: date = Depends(get_as_of),
    db: Session = Depends(get_db),
):
    """Record a payment for the period of `date` (reference date when omitted)."""
    payment_date = parse_date(body.date) or as_of
    ok, msg, payment = BillingService(db).record_payment(
        customer_id=customer_id,
        amount=body.amount,
        payment_date=payment_date,
        total_bill=body.total_bill,
    )
    if not ok:
        raise HTTPException(status.HTTP_404_NOT_FOUND, msg)
    return RecordPaymentResponse(
        message=msg,
        payment=PaymentResponse.model_validate(payment),
        pending_balance=payment.customer.pending_balance,
    )


# ==================== IMPORT ====================

@router.post("/upload", response_model=BulkImportResponse)
async def bulk_import(
    request: Request,
    db: Session = Depends(get_db),
):
    """Upsert customers by username. Body: {"data": [row, ...]}."""
    try:
        body = await request.json()
    except ValueError:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Invalid data format")

    rows = body.get("data") if isinstance(body, dict) else None
    if not isinstance(rows, list):
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Invalid data format")

    result = CustomerService(db).bulk_import(rows)
    return BulkImportResponse(**result)


@router.post("/upload-csv", response_model=BulkImportResponse)
async def upload_csv(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
):
    """CSV export from the ISP panel; headers are matched loosely."""
    content = await file.read()
    if not content:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Empty file")

    rows = parse_csv(content)
    result = CustomerService(db).bulk_import(rows)
    return BulkImportResponse(**result)
