import pytest
from django.urls import reverse

from accounts.models import Capability, MASTER_ADMIN_ID, Role, User


@pytest.mark.django_db
def test_login_bad_credentials_is_forbidden(client, admin_user):
    resp = client.post(reverse("accounts:login"), {"username": "aslap", "password": "nope"})
    assert resp.status_code == 403


@pytest.mark.django_db
def test_login_returns_capabilities(client, driver):
    resp = client.post(reverse("accounts:login"), {"username": "budi", "password": "x"})
    assert resp.status_code == 200
    assert resp.json()["capabilities"] == [Capability.CAN_DISTRIBUTE]


@pytest.mark.django_db
def test_admin_role_holds_every_capability(admin_user):
    assert admin_user.capabilities() == list(Capability.values)
    assert admin_user.has_capability(Capability.CAN_CREATE_MENU)


@pytest.mark.django_db
def test_anonymous_cannot_list_stock(client):
    resp = client.get(reverse("inventory:list"))
    assert resp.status_code == 403


@pytest.mark.django_db
def test_mitra_cannot_mutate_stock(client, mitra):
    from inventory.models import StockItem
    item = StockItem.objects.create(name="Beras", quantity=10, unit="kg")
    client.login(username="mitra", password="x")
    resp = client.post(reverse("inventory:mutate", args=[item.id]), {"mode": "IN", "amount": "5"})
    assert resp.status_code == 403
    item.refresh_from_db()
    assert item.quantity == 10


@pytest.mark.django_db
def test_relawan_cannot_manage_staff(client, driver):
    client.login(username="budi", password="x")
    assert client.get(reverse("accounts:staff_list")).status_code == 403


@pytest.mark.django_db
def test_staff_username_clash_is_conflict(client, admin_user, mitra):
    client.login(username="aslap", password="x")
    resp = client.post(reverse("accounts:staff_create"), {
        "username": "mitra", "full_name": "Dua", "role": Role.AKUNTAN,
    })
    assert resp.status_code == 409


@pytest.mark.django_db
def test_staff_form_rejects_admin_role(client, admin_user):
    client.login(username="aslap", password="x")
    resp = client.post(reverse("accounts:staff_create"), {
        "username": "baru", "full_name": "Baru", "role": Role.ADMIN,
    })
    assert resp.status_code == 400


@pytest.mark.django_db
def test_master_admin_cannot_be_deleted(client, admin_user):
    User.objects.create_user(id=MASTER_ADMIN_ID, username="root", password="x", role=Role.ADMIN)
    client.login(username="aslap", password="x")
    resp = client.post(reverse("accounts:staff_delete", args=[MASTER_ADMIN_ID]))
    assert resp.status_code == 400
    assert User.objects.filter(pk=MASTER_ADMIN_ID).exists()


@pytest.mark.django_db
def test_staff_delete_is_audited(client, admin_user, mitra):
    from audit.models import AuditLog
    client.login(username="aslap", password="x")
    resp = client.post(reverse("accounts:staff_delete", args=[mitra.id]))
    assert resp.status_code == 200
    log = AuditLog.objects.get(action="STAFF_DELETED")
    assert log.actor == admin_user
    assert log.payload == {"username": "mitra"}
