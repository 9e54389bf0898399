from datetime import timedelta

import pytest
from django.urls import reverse

from distribution.models import Distribution
from distribution.services import confirm_delivery, create_distributions, start_delivery
from inventory.models import StockItem
from inventory.services import apply_stock_mutation
from menus.services import create_menu_plan
from procurement.services import create_procurement
from reporting.services import (
    SCOPE_LOCATIONS, TYPE_DISTRIBUSI, TYPE_MENU, TYPE_MUTASI, TYPE_PEMBELIAN,
    activity_feed, dashboard_summary, delete_activity,
)


@pytest.fixture
def history(morning, admin_user):
    item = StockItem.objects.create(name="Beras Premium", quantity=100, unit="kg")
    apply_stock_mutation(item, "OUT", 20, actor=admin_user, now=morning)
    create_menu_plan(name="Nasi Ayam", portions=500, ingredients=[{"name": "Ayam", "quantity": 20}],
                     now=morning + timedelta(hours=1))
    create_procurement(supplier="UD Makmur", item_name="Beras Premium", quantity=10, price=13000,
                       now=morning + timedelta(hours=2))
    create_procurement(supplier="Gratis", item_name="Sampel", quantity=1, price=0, now=morning)
    a, b = create_distributions({"SDN MARTAJASAH": 250, "SDN KRAMAT 1": 180}, now=morning)
    start_delivery(a, now=morning + timedelta(hours=3))
    return item, a, b


@pytest.mark.django_db
def test_feed_is_newest_first_and_skips_idle_records(history):
    feed = activity_feed()
    assert [e["type"] for e in feed] == [TYPE_DISTRIBUSI, TYPE_PEMBELIAN, TYPE_MENU, TYPE_MUTASI]
    mutasi = feed[-1]
    assert mutasi["title"] == "Stok Keluar: Beras Premium"
    assert mutasi["value"] == "-20"
    assert mutasi["performed_by"] == "aslap"
    assert feed[1]["value"] == "IDR 130.000"


@pytest.mark.django_db
def test_locations_scope_only_deliveries(history):
    feed = activity_feed(SCOPE_LOCATIONS)
    assert [e["title"] for e in feed] == ["SDN MARTAJASAH"]


@pytest.mark.django_db
def test_delete_activity_removes_source(history, admin_user):
    item, a, _ = history
    assert delete_activity(TYPE_DISTRIBUSI, a.pk, actor=admin_user)
    assert not Distribution.objects.filter(pk=a.pk).exists()
    assert not delete_activity("UNKNOWN", a.pk, actor=admin_user)


@pytest.mark.django_db
def test_summary_caps_percentage(settings, morning):
    settings.DAILY_PORTION_TARGET = 100
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    start_delivery(d, now=morning)
    confirm_delivery(d, "data:image/jpeg;base64,AAAA", now=morning)
    StockItem.objects.create(name="Sayur Bayam", quantity=2, min_threshold=5, unit="ikat")
    summary = dashboard_summary()
    assert summary["portions_delivered"] == 250
    assert summary["delivery_percentage"] == 100
    assert summary["critical_items"] == ["Sayur Bayam"]
    assert summary["locations"] == 10


@pytest.mark.django_db
def test_summary_for_other_day_is_empty(morning):
    create_distributions({"SDN MARTAJASAH": 250}, now=morning)
    summary = dashboard_summary((morning + timedelta(days=1)).date())
    assert summary["portions_delivered"] == 0
    assert summary["delivery_percentage"] == 0


@pytest.mark.django_db
def test_activity_delete_view_admin_only(client, driver, history):
    _, a, _ = history
    client.login(username="budi", password="x")
    url = reverse("reporting:activity_delete", args=[TYPE_DISTRIBUSI, a.pk])
    assert client.post(url).status_code == 403


@pytest.mark.django_db
def test_gallery_lists_evidence(client, driver, morning):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    start_delivery(d, now=morning)
    confirm_delivery(d, "data:image/jpeg;base64,AAAA", now=morning)
    client.login(username="budi", password="x")
    photos = client.get(reverse("reporting:gallery")).json()["photos"]
    assert [p["label"] for p in photos] == ["SDN MARTAJASAH"]
