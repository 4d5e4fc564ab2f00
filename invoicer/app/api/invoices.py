"""Invoice routes. All writes go through the invoice service."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from invoicer.app.db.session import get_db
from invoicer.app.dependencies.auth import get_current_user
from invoicer.app.models.user import User
from invoicer.app.schemas.invoice import InvoiceDetailRead, InvoiceRead, InvoiceStatusUpdate, InvoiceWrite
from invoicer.app.services import invoices as invoice_service

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


@router.get("", response_model=List[InvoiceRead])
def list_invoices(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return invoice_service.list_invoices(db, current_user.id)


@router.post("", response_model=InvoiceDetailRead, status_code=status.HTTP_201_CREATED)
def create_invoice(
    payload: InvoiceWrite,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return invoice_service.create_invoice(db, current_user.id, payload)


@router.get("/{invoice_id}", response_model=InvoiceDetailRead)
def get_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    invoice = invoice_service.get_invoice_detail(db, invoice_id, current_user.id)
    if not invoice:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return invoice


@router.put("/{invoice_id}", response_model=InvoiceDetailRead)
def update_invoice(
    invoice_id: int,
    payload: InvoiceWrite,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return invoice_service.update_invoice(db, invoice_id, current_user.id, payload)


@router.put("/{invoice_id}/status", response_model=InvoiceDetailRead)
def update_invoice_status(
    invoice_id: int,
    payload: InvoiceStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return invoice_service.change_invoice_status(db, invoice_id, current_user.id, payload.status)


@router.delete("/{invoice_id}")
def delete_invoice(invoice_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    if not invoice_service.delete_invoice(db, invoice_id, current_user.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Invoice not found")
    return {"success": True}
