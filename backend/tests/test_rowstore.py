import pytest

from accounts.models import Role, User
from inventory.models import StockItem
from rowstore import services
from rowstore.models import PendingWrite
from rowstore.providers.base import RowStoreError
from rowstore.providers.mock import MockProvider
from rowstore.rows import apply_row, camel, snake, to_row


class BrokenProvider(MockProvider):
    def upsert(self, table, rows):
        raise RowStoreError("503 Service Unavailable")


def test_key_case_conversion():
    assert camel("picked_up_count") == "pickedUpCount"
    assert snake("recipientName") == "recipient_name"


@pytest.mark.django_db
def test_save_and_delete_are_queued():
    item = StockItem.objects.create(name="Beras", quantity=10, unit="kg")
    item.delete()
    ops = list(PendingWrite.objects.filter(table="stock").values_list("op", flat=True))
    assert ops == [PendingWrite.Op.UPSERT, PendingWrite.Op.DELETE]


@pytest.mark.django_db
def test_flush_coalesces_and_pushes_latest_row():
    item = StockItem.objects.create(name="Beras", quantity=10, unit="kg")
    item.quantity = 12
    item.save()
    stats = services.flush(MockProvider())
    assert stats == {"sent": 1, "failed": 0, "superseded": 1}
    row = MockProvider.tables["stock"][item.pk]
    assert row["quantity"] == 12.0
    assert row["minThreshold"] == 0.0
    assert services.backlog() == 0


@pytest.mark.django_db
def test_passwords_are_not_mirrored():
    u = User.objects.create_user(username="budi", password="rahasia", role=Role.RELAWAN)
    assert "password" not in to_row(u)
    services.flush(MockProvider())
    assert "password" not in MockProvider.tables["users"][u.pk]


@pytest.mark.django_db
def test_failed_push_keeps_row_pending_until_max_attempts(settings):
    settings.ROWSTORE_MAX_ATTEMPTS = 2
    StockItem.objects.create(name="Beras", quantity=10, unit="kg")
    services.flush(BrokenProvider())
    pw = PendingWrite.objects.get()
    assert pw.status == PendingWrite.Status.PENDING
    assert pw.attempts == 1
    assert "503" in pw.last_error

    services.flush(BrokenProvider())
    pw.refresh_from_db()
    assert pw.status == PendingWrite.Status.FAILED
    assert StockItem.objects.get().quantity == 10


@pytest.mark.django_db
def test_pull_applies_remote_rows_without_requeueing():
    MockProvider.tables = {
        "users": {"u1": {"id": "u1", "username": "sopir", "fullName": "Sopir", "role": "RELAWAN",
                         "permissions": ["CAN_DISTRIBUTE"], "password": "plain"}},
        "stock": {"s1": {"id": "s1", "name": "Beras", "category": None, "itemType": "BAHAN",
                         "quantity": 42.5, "unit": "kg", "minThreshold": 10,
                         "lastUpdated": "2025-11-10T08:00:00+07:00"}},
        "transactions": {"t1": {"id": "t1", "itemId": "s1", "itemName": "Beras", "type": "IN",
                                "quantity": 5, "date": "2025-11-10T08:00:00+07:00", "notes": "",
                                "performedBy": "sopir"}},
    }
    counts = services.pull_all(MockProvider())
    assert counts["stock"] == 1
    assert not PendingWrite.objects.exists()

    user = User.objects.get(pk="u1")
    assert not user.has_usable_password()
    item = StockItem.objects.get(pk="s1")
    assert str(item.quantity) == "42.50"
    assert item.category == ""
    tx = item.transactions.get()
    assert tx.kind == "IN"
    assert tx.performed_by == user


@pytest.mark.django_db
def test_apply_row_drops_dangling_foreign_key():
    tx = apply_row("transactions", {"id": "t9", "itemId": "missing", "itemName": "Hilang", "type": "OUT",
                                    "quantity": 1, "date": "2025-11-10T08:00:00+07:00"})
    assert tx.item_id is None


@pytest.mark.django_db
def test_push_all_queues_every_row():
    StockItem.objects.create(name="Beras")
    PendingWrite.objects.all().delete()
    assert services.push_all() == 1
    assert PendingWrite.objects.filter(table="stock", op=PendingWrite.Op.UPSERT).count() == 1
