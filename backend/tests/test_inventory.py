from decimal import Decimal

import pytest
from django.urls import reverse

from inventory.models import StockItem, StockTransaction
from inventory.services import StockMutationError, apply_stock_mutation, compute_mutation


def test_compute_opname_tie_is_recorded_as_in():
    new, kind, magnitude = compute_mutation(Decimal("10"), "OPNAME", Decimal("10"))
    assert (new, kind, magnitude) == (Decimal("10"), StockTransaction.Kind.IN, Decimal("0"))


def test_compute_opname_down_is_out():
    new, kind, magnitude = compute_mutation(Decimal("10"), "OPNAME", Decimal("4"))
    assert (new, kind, magnitude) == (Decimal("4"), StockTransaction.Kind.OUT, Decimal("6"))


@pytest.mark.django_db
def test_out_clamps_at_zero_and_records_removed_amount(gudang):
    item = StockItem.objects.create(name="Daging Ayam", quantity=25, unit="kg", min_threshold=10)
    tx = apply_stock_mutation(item, "OUT", 999, actor=gudang)
    item.refresh_from_db()
    assert item.quantity == 0
    assert tx.kind == StockTransaction.Kind.OUT
    assert tx.quantity == Decimal("25")
    assert tx.notes == "Mutasi Manual"
    assert tx.performed_by == gudang


@pytest.mark.django_db
def test_in_adds_and_writes_one_transaction():
    item = StockItem.objects.create(name="Beras Premium", quantity=150, unit="kg")
    apply_stock_mutation(item, "IN", "12.5", notes="Kiriman pagi")
    item.refresh_from_db()
    assert item.quantity == Decimal("162.5")
    assert StockTransaction.objects.filter(item=item).count() == 1
    assert StockTransaction.objects.get(item=item).notes == "Kiriman pagi"


@pytest.mark.django_db
def test_opname_default_note():
    item = StockItem.objects.create(name="Tahu Putih", quantity=100, unit="potong")
    tx = apply_stock_mutation(item, "OPNAME", 90)
    assert tx.notes == "Update Stok Opname"
    assert item.quantity == Decimal("90")


@pytest.mark.django_db
@pytest.mark.parametrize("mode,amount", [("IN", 0), ("OUT", -3), ("OPNAME", -1), ("IN", "abc"), ("MOVE", 1)])
def test_invalid_mutation_writes_nothing(mode, amount):
    item = StockItem.objects.create(name="Telur Ayam", quantity=200, unit="butir")
    with pytest.raises(StockMutationError):
        apply_stock_mutation(item, mode, amount)
    item.refresh_from_db()
    assert item.quantity == 200
    assert not StockTransaction.objects.exists()


@pytest.mark.django_db
def test_critical_flag_at_threshold():
    item = StockItem.objects.create(name="Sayur Bayam", quantity=5, unit="ikat", min_threshold=5)
    assert item.is_critical


@pytest.mark.django_db
def test_mutate_view(client, gudang):
    item = StockItem.objects.create(name="Pisang Ambon", quantity=50, unit="sisir")
    client.login(username="gudang", password="x")
    resp = client.post(reverse("inventory:mutate", args=[item.id]), {"mode": "OUT", "amount": "20"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["item"]["quantity"] == 30.0
    assert body["transaction"]["type"] == "OUT"
    assert body["transaction"]["performed_by"] == "gudang"


@pytest.mark.django_db
def test_stock_list_filters_by_type(client, gudang):
    StockItem.objects.create(name="Beras", item_type="BAHAN")
    StockItem.objects.create(name="Wajan", item_type="ALAT")
    client.login(username="gudang", password="x")
    resp = client.get(reverse("inventory:list") + "?type=ALAT")
    assert [i["name"] for i in resp.json()["items"]] == ["Wajan"]


@pytest.mark.django_db
def test_stock_pdf_export(client, gudang):
    StockItem.objects.create(name="Beras", quantity=3, min_threshold=5, unit="kg")
    client.login(username="gudang", password="x")
    resp = client.get(reverse("inventory:export_pdf"))
    assert resp.status_code == 200
    assert resp["Content-Type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")
