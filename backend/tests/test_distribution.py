import json
from datetime import date, timedelta

import pytest
from django.urls import reverse

from audit.models import AuditLog
from distribution.models import Distribution
from distribution.serials import next_serial_numbers, roman_month, serial_prefix
from distribution.services import (
    DistributionError, DuplicateDestination, cancel_distribution, clear_history, confirm_delivery,
    create_distributions, finish_pickup, start_delivery, start_pickup,
)

PHOTO = "data:image/jpeg;base64,AAAA"


def test_roman_months():
    assert roman_month(1) == "I"
    assert roman_month(11) == "XI"
    assert roman_month(12) == "XII"


def test_serials_continue_after_highest_existing():
    existing = ["001/SJ/MRTJSH/XI/2025", "007/SJ/MRTJSH/XI/2025", "003/SJ/MRTJSH/X/2025"]
    assert next_serial_numbers(date(2025, 11, 10), 2, existing, agency_code="SJ/MRTJSH") == [
        "008/SJ/MRTJSH/XI/2025", "009/SJ/MRTJSH/XI/2025",
    ]


def test_malformed_serial_prefixes_are_ignored():
    assert serial_prefix("abc/SJ/MRTJSH/XI/2025") is None
    assert serial_prefix("") is None
    existing = ["abc/SJ/MRTJSH/XI/2025", "/SJ/MRTJSH/XI/2025"]
    assert next_serial_numbers(date(2025, 11, 10), 1, existing, agency_code="SJ/MRTJSH") == [
        "001/SJ/MRTJSH/XI/2025",
    ]


@pytest.mark.django_db
def test_bulk_plan_numbers_in_request_order(driver, morning):
    created = create_distributions(
        {"SDN MARTAJASAH": 250, "SDN KRAMAT 1": 180, "SMPN 7 BANGKALAN": 300}, actor=driver, now=morning,
    )
    assert [d.serial_number for d in created] == [
        "001/SJ/MRTJSH/XI/2025", "002/SJ/MRTJSH/XI/2025", "003/SJ/MRTJSH/XI/2025",
    ]
    assert all(d.status == Distribution.Status.PREPARING for d in created)
    assert created[0].recipient_name == "PANITIA MBG"
    assert created[0].performed_by == driver


@pytest.mark.django_db
def test_duplicate_destination_same_day_rejects_whole_batch(morning):
    create_distributions({"SDN MARTAJASAH": 250}, now=morning)
    with pytest.raises(DuplicateDestination) as exc:
        create_distributions({"SDN KRAMAT 1": 100, "SDN MARTAJASAH": 200}, now=morning + timedelta(hours=2))
    assert exc.value.destinations == ["SDN MARTAJASAH"]
    assert Distribution.objects.count() == 1


@pytest.mark.django_db
def test_same_destination_next_day_is_allowed(morning):
    create_distributions({"SDN MARTAJASAH": 250}, now=morning)
    created = create_distributions({"SDN MARTAJASAH": 240}, now=morning + timedelta(days=1))
    # same month, numbering continues
    assert created[0].serial_number == "002/SJ/MRTJSH/XI/2025"


@pytest.mark.django_db
def test_negative_portions_rejected(morning):
    with pytest.raises(DistributionError):
        create_distributions({"SDN MARTAJASAH": -1}, now=morning)
    assert not Distribution.objects.exists()


@pytest.mark.django_db
def test_full_lifecycle_stamps_every_step(driver, morning):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]

    assert start_delivery(d, actor=driver, now=morning + timedelta(minutes=30))
    assert d.status == Distribution.Status.ON_DELIVERY
    assert d.driver_name == "Budi Santoso"

    assert confirm_delivery(d, PHOTO, location={"lat": -7.03, "lng": 112.74}, now=morning + timedelta(hours=1))
    assert d.status == Distribution.Status.DELIVERED
    assert d.photo_url == PHOTO

    assert start_pickup(d, actor=driver, now=morning + timedelta(hours=4))
    assert d.pickup_driver_name == "Budi Santoso"

    assert finish_pickup(d, "248", now=morning + timedelta(hours=5))
    d.refresh_from_db()
    assert d.status == Distribution.Status.PICKED_UP
    assert d.picked_up_count == 248
    assert d.timestamp <= d.sent_at <= d.delivered_at <= d.pickup_started_at <= d.picked_up_at


@pytest.mark.django_db
def test_backwards_clock_is_clamped(morning):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    assert start_delivery(d, now=morning - timedelta(hours=3))
    assert d.sent_at == morning


@pytest.mark.django_db
def test_out_of_order_transitions_change_nothing(morning):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    assert not confirm_delivery(d, PHOTO, now=morning)
    assert not start_pickup(d, now=morning)
    assert not finish_pickup(d, 10, now=morning)
    d.refresh_from_db()
    assert d.status == Distribution.Status.PREPARING
    assert d.delivered_at is None


@pytest.mark.django_db
def test_confirm_without_photo_is_noop(morning):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    start_delivery(d, now=morning)
    assert not confirm_delivery(d, "", now=morning)
    d.refresh_from_db()
    assert d.status == Distribution.Status.ON_DELIVERY


@pytest.mark.django_db
def test_finish_pickup_is_not_repeated(morning):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    start_delivery(d, now=morning)
    confirm_delivery(d, PHOTO, now=morning)
    start_pickup(d, now=morning)
    assert finish_pickup(d, 250, now=morning + timedelta(hours=1))
    first = d.picked_up_at
    assert not finish_pickup(d, 3, now=morning + timedelta(hours=2))
    d.refresh_from_db()
    assert d.picked_up_count == 250
    assert d.picked_up_at == first


@pytest.mark.django_db
@pytest.mark.parametrize("count", ["-1", "2.5", "abc", "", None])
def test_invalid_pickup_count(count, morning):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    Distribution.objects.filter(pk=d.pk).update(status=Distribution.Status.PICKING_UP)
    d.refresh_from_db()
    with pytest.raises(DistributionError):
        finish_pickup(d, count, now=morning)


@pytest.mark.django_db
def test_cancel_only_while_preparing(admin_user, morning):
    a, b = create_distributions({"SDN MARTAJASAH": 250, "SDN KRAMAT 1": 180}, now=morning)
    cancelled_pk = a.pk
    start_delivery(b, now=morning)
    assert cancel_distribution(a, actor=admin_user)
    assert not cancel_distribution(b, actor=admin_user)
    assert list(Distribution.objects.values_list("pk", flat=True)) == [b.pk]
    assert AuditLog.objects.filter(action="DISTRIBUTION_CANCELLED", target_id=cancelled_pk).exists()


@pytest.mark.django_db
def test_cancellable_statuses_from_settings(settings, morning):
    settings.DISTRIBUTION_CANCELLABLE_STATUSES = ["PREPARING", "ON_DELIVERY"]
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    start_delivery(d, now=morning)
    assert cancel_distribution(d)


@pytest.mark.django_db
def test_clear_history_removes_only_finished(morning):
    done, open_ = create_distributions({"SDN MARTAJASAH": 250, "SDN KRAMAT 1": 180}, now=morning)
    Distribution.objects.filter(pk=done.pk).update(status=Distribution.Status.PICKED_UP)
    assert clear_history() == 1
    assert list(Distribution.objects.values_list("pk", flat=True)) == [open_.pk]


@pytest.mark.django_db
def test_bulk_view_conflict(client, driver, morning):
    client.login(username="budi", password="x")
    url = reverse("distribution:bulk_create")
    body = {"entries": [{"destination": "SDN MARTAJASAH", "portions": 250}], "recipient_name": "Ibu Kepala"}
    resp = client.post(url, data=json.dumps(body), content_type="application/json")
    assert resp.status_code == 201
    assert resp.json()["distributions"][0]["recipient_name"] == "Ibu Kepala"

    resp = client.post(url, data=json.dumps(body), content_type="application/json")
    assert resp.status_code == 409
    assert resp.json()["conflicts"] == ["SDN MARTAJASAH"]


@pytest.mark.django_db
def test_confirm_view_requires_photo(client, driver, morning):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    start_delivery(d, now=morning)
    client.login(username="budi", password="x")
    url = reverse("distribution:confirm", args=[d.pk])
    assert client.post(url, {"lat": "-7.03", "lng": "112.74"}).status_code == 400

    resp = client.post(url, {"photo_url": PHOTO, "lat": "-7.03", "lng": "112.74", "address": "Jl. Raya"})
    assert resp.status_code == 200
    assert resp.json()["distribution"]["location"] == {"lat": -7.03, "lng": 112.74, "address": "Jl. Raya"}


@pytest.mark.django_db
def test_start_view_twice_is_conflict(client, driver, morning):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    client.login(username="budi", password="x")
    url = reverse("distribution:start", args=[d.pk])
    assert client.post(url).status_code == 200
    assert client.post(url).status_code == 409


@pytest.mark.django_db
def test_list_view_all_days(client, driver, morning):
    create_distributions({"SDN MARTAJASAH": 250}, now=morning)
    client.login(username="budi", password="x")
    resp = client.get(reverse("distribution:list") + "?date=all")
    assert len(resp.json()["distributions"]) == 1
    resp = client.get(reverse("distribution:list") + "?date=2025-11-10")
    assert len(resp.json()["distributions"]) == 1
    assert client.get(reverse("distribution:list") + "?date=kemarin").status_code == 400


@pytest.mark.django_db
def test_delivery_notes_pdf(client, driver, morning):
    created = create_distributions({"SDN MARTAJASAH": 250, "SDN KRAMAT 1": 180, "SDN KRAMAT 2": 90}, now=morning)
    client.login(username="budi", password="x")
    ids = ",".join(d.pk for d in created)
    resp = client.get(reverse("distribution:notes_pdf") + f"?ids={ids}")
    assert resp.status_code == 200
    assert resp.content.startswith(b"%PDF")
    resp = client.get(reverse("distribution:surat_jalan_pdf") + "?date=2025-11-10")
    assert resp.status_code == 200


@pytest.mark.django_db
def test_cancelled_serial_is_not_reissued(morning):
    _, last = create_distributions({"SDN MARTAJASAH": 250, "SDN KRAMAT 1": 180}, now=morning)
    assert last.serial_number == "002/SJ/MRTJSH/XI/2025"
    assert cancel_distribution(last)
    again = create_distributions({"SDN KRAMAT 2": 90}, now=morning + timedelta(hours=1))
    assert again[0].serial_number == "003/SJ/MRTJSH/XI/2025"


@pytest.mark.django_db
def test_cleared_history_keeps_numbering(morning):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    Distribution.objects.filter(pk=d.pk).update(status=Distribution.Status.PICKED_UP)
    assert clear_history() == 1
    again = create_distributions({"SDN MARTAJASAH": 240}, now=morning + timedelta(days=1))
    assert again[0].serial_number == "002/SJ/MRTJSH/XI/2025"


@pytest.mark.django_db
def test_counter_continues_after_existing_serials(morning):
    Distribution.objects.create(serial_number="041/SJ/MRTJSH/XI/2025", destination="SDN SEMBILANGAN",
                                recipient_name="PANITIA MBG", timestamp=morning - timedelta(days=3))
    created = create_distributions({"SDN MARTAJASAH": 250}, now=morning)
    assert created[0].serial_number == "042/SJ/MRTJSH/XI/2025"


def test_issued_mark_wins_over_surviving_serials():
    assert next_serial_numbers(date(2025, 11, 10), 1, ["001/SJ/MRTJSH/XI/2025"],
                               agency_code="SJ/MRTJSH", issued=5) == ["006/SJ/MRTJSH/XI/2025"]


@pytest.mark.django_db
def test_admin_cannot_add_or_rewrite_planned_fields(client, morning):
    from django.contrib.admin.sites import site
    from accounts.models import User

    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    root = User.objects.create_superuser(username="root", password="x")
    client.force_login(root)

    assert client.get(reverse("admin:distribution_distribution_add")).status_code == 403
    model_admin = site._registry[Distribution]
    readonly = model_admin.get_readonly_fields(None, d)
    for field in ("destination", "recipient_name", "portions", "driver_name", "pickup_driver_name"):
        assert field in readonly
    assert Distribution.objects.count() == 1


@pytest.mark.django_db
@pytest.mark.parametrize("count", ["2.0", "-1", "dua"])
def test_pickup_view_uses_service_count_rule(client, driver, morning, count):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    Distribution.objects.filter(pk=d.pk).update(status=Distribution.Status.PICKING_UP)
    client.login(username="budi", password="x")
    resp = client.post(reverse("distribution:pickup_finish", args=[d.pk]), {"count": count})
    assert resp.status_code == 400
    d.refresh_from_db()
    assert d.status == Distribution.Status.PICKING_UP


@pytest.mark.django_db
def test_pickup_view_accepts_whole_count(client, driver, morning):
    d = create_distributions({"SDN MARTAJASAH": 250}, now=morning)[0]
    Distribution.objects.filter(pk=d.pk).update(status=Distribution.Status.PICKING_UP)
    client.login(username="budi", password="x")
    resp = client.post(reverse("distribution:pickup_finish", args=[d.pk]), {"count": " 248 "})
    assert resp.status_code == 200
    assert resp.json()["distribution"]["picked_up_count"] == 248


def test_note_frame_fits_page_margins():
    from reportlab.lib.pagesizes import A4
    from reportlab.lib.units import mm
    from distribution.export import NOTE_WIDTH

    assert NOTE_WIDTH <= A4[0] - 28 * mm


def test_print_order_compares_serials_numerically(morning):
    from distribution.export import print_order

    notes = [Distribution(serial_number=f"{n}/SJ/MRTJSH/XI/2025", timestamp=morning) for n in ("1000", "999", "010")]
    assert [d.serial_number.split("/")[0] for d in sorted(notes, key=print_order)] == ["010", "999", "1000"]
