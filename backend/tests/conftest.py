from datetime import datetime, timezone as dt_timezone

import pytest
from django.contrib.auth import get_user_model

from accounts.models import Capability, Role
from rowstore.providers.mock import MockProvider

User = get_user_model()


@pytest.fixture(autouse=True)
def _rowstore(settings):
    # queued writes stay in the outbox; tests flush explicitly
    settings.ROWSTORE_FLUSH_ON_COMMIT = False
    settings.ROWSTORE_PROVIDER = "mock"
    MockProvider.reset()
    yield
    MockProvider.reset()


@pytest.fixture
def morning():
    """10 Nov 2025, 08:00 in Jakarta."""
    return datetime(2025, 11, 10, 1, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(username="aslap", password="x", full_name="Moh. Fuadi", role=Role.ADMIN)


@pytest.fixture
def driver(db):
    return User.objects.create_user(
        username="budi", password="x", full_name="Budi Santoso", role=Role.RELAWAN,
        permissions=[Capability.CAN_DISTRIBUTE],
    )


@pytest.fixture
def gudang(db):
    return User.objects.create_user(
        username="gudang", password="x", role=Role.ADMIN_GUDANG,
        permissions=[Capability.CAN_MANAGE_STOCK, Capability.CAN_RECEIVE],
    )


@pytest.fixture
def mitra(db):
    return User.objects.create_user(username="mitra", password="x", role=Role.MITRA)
