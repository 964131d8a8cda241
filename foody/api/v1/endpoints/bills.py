"""
Bill endpoints: request, generation, payment and invoice PDF
"""
from typing import Optional
from fastapi import APIRouter, Query, Response, status
from foody.core.dependencies import DbDependency, CurrentUser, StaffUser, PaginationDependency
from foody.database.models import BillStatus
from foody.repositories import BillRepository
from foody.schemas.bill import (
    BillGenerate, BillRequest, BillPayment, BillEnvelope, BillListResponse, BillCollection
)
from foody.services.bill_service import BillService
from foody.services.bill_pdf import render_bill_pdf

router = APIRouter(tags=["Bills"])


@router.get("/my-bills", response_model=BillCollection)
async def my_bills(current_user: CurrentUser, db: DbDependency):
    return BillCollection(bills=await BillRepository(db).list_for_user(current_user.id))


@router.get("", response_model=BillListResponse)
async def list_bills(
    staff: StaffUser,
    db: DbDependency,
    pagination: PaginationDependency,
    is_paid: Optional[bool] = None,
    bill_status: Optional[BillStatus] = Query(None, alias="status"),
):
    page, limit = pagination
    result = await BillRepository(db).list_filtered(is_paid, bill_status, page, limit)
    return BillListResponse(bills=result.docs, pagination=result.pagination())


@router.post("/{order_id}/request", status_code=status.HTTP_201_CREATED, response_model=BillEnvelope)
async def request_bill(
    order_id: int,
    response: Response,
    current_user: CurrentUser,
    db: DbDependency,
    data: Optional[BillRequest] = None,
):
    """
    Customer asks for the bill of a served or completed order.
    Returns 200 with the existing bill if one was already issued.
    """
    bill, created = await BillService.request(db, order_id, data or BillRequest(), current_user)
    if not created:
        response.status_code = status.HTTP_200_OK
    return BillEnvelope(bill=bill)


@router.post("/{order_id}", status_code=status.HTTP_201_CREATED, response_model=BillEnvelope)
async def generate_bill(
    order_id: int,
    response: Response,
    staff: StaffUser,
    db: DbDependency,
    data: Optional[BillGenerate] = None,
):
    """Staff issues the bill for an order; idempotent per order"""
    payment_method = (data or BillGenerate()).payment_method
    bill, created = await BillService.generate(db, order_id, payment_method, staff)
    if not created:
        response.status_code = status.HTTP_200_OK
    return BillEnvelope(bill=bill)


@router.get("/{bill_id}/pdf", response_class=Response)
async def download_bill_pdf(bill_id: int, current_user: CurrentUser, db: DbDependency):
    bill = await BillService.get_visible_bill(db, bill_id, current_user)
    return Response(
        content=render_bill_pdf(bill),
        media_type="application/pdf",
        headers={"Content-Disposition": f"inline; filename=bill-{bill.bill_number}.pdf"},
    )


@router.get("/{bill_id}", response_model=BillEnvelope)
async def get_bill(bill_id: int, current_user: CurrentUser, db: DbDependency):
    return BillEnvelope(bill=await BillService.get_visible_bill(db, bill_id, current_user))


@router.put("/{bill_id}/pay", response_model=BillEnvelope)
async def pay_bill(
    bill_id: int,
    current_user: CurrentUser,
    db: DbDependency,
    data: Optional[BillPayment] = None,
):
    payment_method = (data or BillPayment()).payment_method
    bill = await BillService.mark_paid(db, bill_id, payment_method, current_user)
    return BillEnvelope(bill=bill)
