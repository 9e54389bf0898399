from decimal import Decimal

import pytest
from django.urls import reverse

from inventory.models import StockItem
from menus.services import MenuPlanError, create_menu_plan
from procurement.models import Procurement
from procurement.services import (
    ProcurementError, attach_invoice, create_procurement, edit_price, edit_supplier, process_order, receive_goods,
)

INVOICE = "data:image/png;base64,Tk9UQQ=="
GOODS = "data:image/png;base64,QkFSQU5H"


@pytest.mark.django_db
def test_create_takes_unit_from_stock_and_computes_total(admin_user, morning):
    StockItem.objects.create(name="Beras Premium", unit="kg")
    p = create_procurement(supplier="UD Makmur", item_name="beras premium", quantity=50, price=13500,
                           actor=admin_user, now=morning)
    assert p.status == Procurement.Status.PENDING
    assert p.funding_source == Procurement.Funding.YAYASAN
    assert p.items == [{"name": "beras premium", "quantity": 50, "price": 13500, "unit": "kg"}]
    assert p.total_price == Decimal("675000")


@pytest.mark.django_db
def test_unknown_item_defaults_unit():
    p = create_procurement(supplier="Toko Sayur", item_name="Kangkung", quantity=3, price=5000, operational=True)
    assert p.first_item["unit"] == "Unit"
    assert p.funding_source == Procurement.Funding.OPERASIONAL


@pytest.mark.django_db
def test_missing_source_menu_rejected():
    with pytest.raises(ProcurementError):
        create_procurement(supplier="X", item_name="Y", quantity=1, price=1, source_menu_id="nope")


@pytest.mark.django_db
def test_receive_requires_invoice(morning):
    p = create_procurement(supplier="UD Makmur", item_name="Telur", quantity=10, price=2000)
    assert process_order(p)
    assert not process_order(p)
    assert not receive_goods(p, GOODS, now=morning)
    assert attach_invoice(p, INVOICE)
    assert not attach_invoice(p, INVOICE)
    assert receive_goods(p, GOODS, now=morning)
    p.refresh_from_db()
    assert p.status == Procurement.Status.RECEIVED
    assert p.date == morning
    assert p.photo_url == GOODS


@pytest.mark.django_db
def test_invoice_moves_pending_to_ordered():
    p = create_procurement(supplier="UD Makmur", item_name="Telur", quantity=10, price=2000)
    assert attach_invoice(p, INVOICE)
    assert p.status == Procurement.Status.ORDERED


@pytest.mark.django_db
def test_edit_price_recomputes_total():
    p = create_procurement(supplier="UD Makmur", item_name="Tempe", quantity=4, price=8000)
    edit_price(p, "9000")
    p.refresh_from_db()
    assert p.first_item["price"] == 9000
    assert p.total_price == Decimal("36000")
    with pytest.raises(ProcurementError):
        edit_supplier(p, "  ")


@pytest.mark.django_db
def test_receive_view_without_photo_is_bad_request(client, gudang):
    p = create_procurement(supplier="UD Makmur", item_name="Telur", quantity=10, price=2000)
    attach_invoice(p, INVOICE)
    client.login(username="gudang", password="x")
    resp = client.post(reverse("procurement:receive", args=[p.pk]))
    assert resp.status_code == 400
    resp = client.post(reverse("procurement:receive", args=[p.pk]), {"photo_url": GOODS})
    assert resp.status_code == 200
    assert resp.json()["procurement"]["status"] == "RECEIVED"


@pytest.mark.django_db
def test_gudang_cannot_order(client, gudang):
    client.login(username="gudang", password="x")
    resp = client.post(reverse("procurement:create"),
                       {"supplier": "UD Makmur", "item_name": "Telur", "quantity": "1", "price": "1"})
    assert resp.status_code == 403


@pytest.mark.django_db
def test_menu_plan_resolves_stock_ingredients(admin_user, morning):
    item = StockItem.objects.create(name="Daging Ayam", unit="kg")
    plan = create_menu_plan(
        name="Nasi Ayam Bakar", portions=2678, actor=admin_user, now=morning,
        ingredients=[{"item_id": item.pk, "quantity": "40"}, {"name": "Kecap", "quantity": 3}],
    )
    assert plan.ingredients == [
        {"name": "Daging Ayam", "quantity": 40.0, "unit": "kg"},
        {"name": "Kecap", "quantity": 3.0, "unit": "Unit"},
    ]


@pytest.mark.django_db
def test_menu_plan_needs_an_ingredient():
    with pytest.raises(MenuPlanError):
        create_menu_plan(name="Kosong", portions=10, ingredients=[])


@pytest.mark.django_db
def test_menu_create_view_accepts_json(client, admin_user):
    import json
    client.login(username="aslap", password="x")
    body = {"name": "Nasi Telur", "portions": 100, "ingredients": [{"name": "Telur", "quantity": 100, "unit": "butir"}]}
    resp = client.post(reverse("menus:create"), data=json.dumps(body), content_type="application/json")
    assert resp.status_code == 200
    assert resp.json()["menu"]["performed_by"] == "aslap"
