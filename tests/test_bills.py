"""
Bill request, generation, payment and invoice PDF
"""
import pytest

from foody.repositories import BillRepository
from tests.conftest import API


@pytest.fixture
def served_order(customer, product, place_order, set_status):
    async def _served():
        order = await place_order(customer, [(product.id, 2)])
        await set_status(order["id"], "served")
        return order
    return _served


@pytest.mark.asyncio
async def test_request_requires_served_or_completed(client, customer, product, place_order):
    order = await place_order(customer, [(product.id, 1)])
    r = await client.post(f"{API}/bills/{order['id']}/request", headers=customer.headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Order must be served or completed"


@pytest.mark.asyncio
async def test_request_is_idempotent(client, customer, served_order):
    order = await served_order()

    r = await client.post(
        f"{API}/bills/{order['id']}/request",
        json={"payment_method": "esewa", "call_waiter": True},
        headers=customer.headers,
    )
    assert r.status_code == 201, r.text
    bill = r.json()["bill"]
    assert bill["status"] == "requested"
    assert bill["requested_by"] == "customer"
    assert bill["call_waiter"] is True
    assert bill["payment_method"] == "esewa"
    assert bill["total"] == order["total"] == 630
    assert bill["bill_number"] == f"BILL-{bill['id']:06d}"

    r = await client.post(f"{API}/bills/{order['id']}/request", headers=customer.headers)
    assert r.status_code == 200
    assert r.json()["bill"]["id"] == bill["id"]


@pytest.mark.asyncio
async def test_request_for_someone_elses_order(client, other_customer, served_order):
    order = await served_order()
    r = await client.post(f"{API}/bills/{order['id']}/request", headers=other_customer.headers)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_request_unknown_order(client, customer):
    r = await client.post(f"{API}/bills/999/request", headers=customer.headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Order not found"


@pytest.mark.asyncio
async def test_generation_twice_returns_same_bill(client, customer, staff, admin, product, place_order):
    order = await place_order(customer, [(product.id, 1)])

    first = await client.post(f"{API}/bills/{order['id']}", headers=staff.headers)
    assert first.status_code == 201
    assert first.json()["bill"]["status"] == "generated"
    assert first.json()["bill"]["requested_by"] == "staff"

    second = await client.post(f"{API}/bills/{order['id']}", json={"payment_method": "bank"}, headers=admin.headers)
    assert second.status_code == 200
    assert second.json()["bill"]["id"] == first.json()["bill"]["id"]
    assert second.json()["bill"]["payment_method"] == "cash"


@pytest.mark.asyncio
async def test_generation_rejects_unknown_payment_method(client, customer, staff, product, place_order):
    order = await place_order(customer, [(product.id, 1)])
    r = await client.post(f"{API}/bills/{order['id']}", json={"payment_method": "bitcoin"}, headers=staff.headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_customer_cannot_generate(client, customer, product, place_order):
    order = await place_order(customer, [(product.id, 1)])
    r = await client.post(f"{API}/bills/{order['id']}", headers=customer.headers)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_pay_marks_bill_and_order_paid(client, customer, served_order):
    order = await served_order()
    bill = (await client.post(f"{API}/bills/{order['id']}/request", headers=customer.headers)).json()["bill"]
    assert bill["is_paid"] is False
    assert bill["paid_at"] is None

    r = await client.put(f"{API}/bills/{bill['id']}/pay", json={"payment_method": "khalti"}, headers=customer.headers)
    assert r.status_code == 200
    paid = r.json()["bill"]
    assert paid["is_paid"] is True
    assert paid["paid_at"] is not None
    assert paid["status"] == "paid"
    assert paid["payment_method"] == "khalti"

    r = await client.get(f"{API}/orders/{order['id']}", headers=customer.headers)
    assert r.json()["order"]["is_paid"] is True


@pytest.mark.asyncio
async def test_pay_someone_elses_bill(client, other_customer, staff, customer, served_order):
    order = await served_order()
    bill = (await client.post(f"{API}/bills/{order['id']}/request", headers=customer.headers)).json()["bill"]

    r = await client.put(f"{API}/bills/{bill['id']}/pay", headers=other_customer.headers)
    assert r.status_code == 403

    r = await client.put(f"{API}/bills/{bill['id']}/pay", headers=staff.headers)
    assert r.status_code == 200
    assert r.json()["bill"]["payment_method"] == "cash"


@pytest.mark.asyncio
async def test_pay_unknown_bill(client, staff):
    r = await client.put(f"{API}/bills/999/pay", headers=staff.headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Bill not found"


@pytest.mark.asyncio
async def test_bill_visibility_and_listing(client, customer, other_customer, staff, served_order):
    order = await served_order()
    bill = (await client.post(f"{API}/bills/{order['id']}/request", headers=customer.headers)).json()["bill"]

    assert (await client.get(f"{API}/bills/{bill['id']}", headers=customer.headers)).status_code == 200
    assert (await client.get(f"{API}/bills/{bill['id']}", headers=other_customer.headers)).status_code == 403

    r = await client.get(f"{API}/bills/my-bills", headers=customer.headers)
    assert [b["id"] for b in r.json()["bills"]] == [bill["id"]]

    r = await client.get(f"{API}/bills?is_paid=false", headers=staff.headers)
    assert r.json()["pagination"]["total"] == 1
    r = await client.get(f"{API}/bills?status=paid", headers=staff.headers)
    assert r.json()["pagination"]["total"] == 0

    r = await client.get(f"{API}/bills", headers=customer.headers)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_bill_pdf(client, customer, other_customer, served_order):
    order = await served_order()
    bill = (await client.post(f"{API}/bills/{order['id']}/request", headers=customer.headers)).json()["bill"]

    r = await client.get(f"{API}/bills/{bill['id']}/pdf", headers=customer.headers)
    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert r.headers["content-disposition"] == f"inline; filename=bill-{bill['bill_number']}.pdf"
    assert r.content.startswith(b"%PDF")

    r = await client.get(f"{API}/bills/{bill['id']}/pdf", headers=other_customer.headers)
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_request_losing_insert_race_returns_existing_bill(client, customer, served_order, monkeypatch):
    order = await served_order()
    first = (await client.post(f"{API}/bills/{order['id']}/request", headers=customer.headers)).json()["bill"]

    # The existence check misses the bill once, as if another request
    # inserted it between the check and our insert
    get_by_order = BillRepository.get_by_order
    calls = []

    async def miss_once(self, order_id):
        calls.append(order_id)
        if len(calls) == 1:
            return None
        return await get_by_order(self, order_id)

    monkeypatch.setattr(BillRepository, "get_by_order", miss_once)

    r = await client.post(f"{API}/bills/{order['id']}/request", headers=customer.headers)
    assert r.status_code == 200, r.text
    assert r.json()["bill"]["id"] == first["id"]
    assert len(calls) == 2

    r = await client.get(f"{API}/bills/my-bills", headers=customer.headers)
    assert len(r.json()["bills"]) == 1
