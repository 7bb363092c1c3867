from datetime import timedelta
from io import StringIO

import pytest
from django.core.management import call_command
from django.test import Client
from django.urls import reverse
from django.utils import timezone

from apps.analytics.aggregates import build_summary
from apps.analytics.models import AnalyticsEvent
from apps.analytics.services import enforce_retention, is_mobile_agent, record_event
from apps.analytics.tasks import prune_analytics_events
from apps.menus.models import Category, Item


DESKTOP_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64)"
IPHONE_UA = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)"


def _event(menu, event_type=AnalyticsEvent.PAGE_VIEW, ua=DESKTOP_UA, **kwargs):
    return AnalyticsEvent.objects.create(
        event_type=event_type,
        menu_id=str(menu.id),
        user_id=str(menu.owner_id),
        slug=menu.slug,
        user_agent=ua,
        is_mobile=is_mobile_agent(ua),
        **kwargs,
    )


def test_mobile_detection():
    assert is_mobile_agent(IPHONE_UA)
    assert is_mobile_agent("Mozilla/5.0 (Linux; ANDROID 14)")
    assert is_mobile_agent("something mobile")
    assert not is_mobile_agent(DESKTOP_UA)
    assert not is_mobile_agent(None)


@pytest.mark.django_db
def test_device_split(menu):
    for n in range(100):
        _event(menu, ua=IPHONE_UA if n < 20 else DESKTOP_UA)
    summary = build_summary([menu.id], "30d")
    assert summary["totalViews"] == 100
    assert summary["devices"] == {"mobile": 20, "desktop": 80}
    assert summary["uniqueSessions"] == 2


@pytest.mark.django_db
def test_summary_is_idempotent(menu):
    _event(menu)
    _event(menu, AnalyticsEvent.QR_SCAN)
    _event(menu, AnalyticsEvent.ITEM_CLICK, item_id=str(Item.objects.get(name="Tiramisu").id))
    assert build_summary([menu.id], "30d") == build_summary([menu.id], "30d")


@pytest.mark.django_db
def test_summary_totals_and_breakdowns(menu):
    tiramisu = Item.objects.get(name="Tiramisu")
    bruschetta = Item.objects.get(name="Bruschetta")
    mains = Category.objects.get(name="Mains")
    for _ in range(3):
        _event(menu)
    _event(menu, AnalyticsEvent.QR_SCAN)
    for _ in range(2):
        _event(menu, AnalyticsEvent.ITEM_CLICK, item_id=str(tiramisu.id))
    _event(menu, AnalyticsEvent.ITEM_CLICK, item_id=str(bruschetta.id))
    _event(menu, AnalyticsEvent.CATEGORY_SWITCH, category_id=str(mains.id))

    summary = build_summary([menu.id], "today")
    assert summary["range"] == "today"
    assert summary["totalViews"] == 3
    assert summary["totalItemClicks"] == 3
    assert summary["totalQRScans"] == 1
    assert summary["topItems"] == [
        {"item_id": str(tiramisu.id), "name": "Tiramisu", "count": 2},
        {"item_id": str(bruschetta.id), "name": "Bruschetta", "count": 1},
    ]
    assert summary["categoryViews"] == [{"category_id": str(mains.id), "name": "Mains", "count": 1}]
    assert len(summary["dailyViews"]) == 1
    assert summary["dailyViews"][0]["views"] == 3
    assert summary["dailyViews"][0]["scans"] == 1
    assert sum(h["count"] for h in summary["hourly"]) == 3


@pytest.mark.django_db
def test_summary_range_filter(menu):
    _event(menu)
    old = _event(menu)
    AnalyticsEvent.objects.filter(id=old.id).update(timestamp=timezone.now() - timedelta(days=10))

    assert build_summary([menu.id], "7d")["totalViews"] == 1
    assert build_summary([menu.id], "30d")["totalViews"] == 2
    assert build_summary([menu.id], "all")["totalViews"] == 2


@pytest.mark.django_db
def test_unknown_range_falls_back_to_30d(menu):
    old = _event(menu)
    AnalyticsEvent.objects.filter(id=old.id).update(timestamp=timezone.now() - timedelta(days=45))
    summary = build_summary([menu.id], "forever")
    assert summary["range"] == "30d"
    assert summary["totalViews"] == 0


@pytest.mark.django_db
def test_summary_endpoint_only_counts_own_menus(auth_client, menu, other_user):
    _event(menu)
    AnalyticsEvent.objects.create(event_type=AnalyticsEvent.PAGE_VIEW, menu_id="someone-else")
    r = auth_client.get(reverse("analytics:summary"), {"range": "7d"})
    assert r.status_code == 200
    assert r.json()["totalViews"] == 1
    assert r.json()["range"] == "7d"


@pytest.mark.django_db
def test_summary_endpoint_requires_login(client):
    assert client.get(reverse("analytics:summary")).status_code == 401


@pytest.mark.django_db
def test_track_by_slug_records_owner(menu, send_json):
    client = Client(enforce_csrf_checks=True)
    r = send_json(
        client,
        "post",
        reverse("analytics:track"),
        {"event_type": "page_view", "slug": menu.slug},
        HTTP_USER_AGENT=IPHONE_UA,
        HTTP_REFERER="https://example.com/",
    )
    assert r.status_code == 200
    assert r.json() == {"success": True}
    event = AnalyticsEvent.objects.get()
    assert event.menu_id == str(menu.id)
    assert event.user_id == str(menu.owner_id)
    assert event.is_mobile is True
    assert event.referrer == "https://example.com/"


@pytest.mark.django_db
def test_track_item_click_by_menu_id(client, menu, send_json):
    tiramisu = Item.objects.get(name="Tiramisu")
    send_json(client, "post", reverse("analytics:track"), {
        "event_type": "item_click", "menu_id": str(menu.id), "item_id": str(tiramisu.id),
    })
    event = AnalyticsEvent.objects.get()
    assert event.item_id == str(tiramisu.id)
    assert event.slug == menu.slug
    assert event.is_mobile is False


@pytest.mark.django_db
def test_track_always_succeeds(client, menu, send_json):
    url = reverse("analytics:track")
    r = client.post(url, data="{not json", content_type="application/json")
    assert r.json() == {"success": True}
    r = send_json(client, "post", url, {"event_type": "bogus", "slug": menu.slug})
    assert r.json() == {"success": True}
    assert AnalyticsEvent.objects.count() == 0


@pytest.mark.django_db
def test_record_event_swallows_errors(monkeypatch, menu):
    def boom(**kwargs):
        raise RuntimeError("db down")

    monkeypatch.setattr(AnalyticsEvent.objects, "create", boom)
    assert record_event({"event_type": "page_view", "slug": menu.slug}) is None


@pytest.mark.django_db
def test_retention_on_ingest(menu, settings):
    settings.ANALYTICS_RETENTION = {"max_events": 5, "trim_to": 3}
    for _ in range(5):
        record_event({"event_type": "page_view", "slug": menu.slug})
    assert AnalyticsEvent.objects.count() == 5
    record_event({"event_type": "qr_scan", "slug": menu.slug})
    assert AnalyticsEvent.objects.count() == 3
    # the newest event survives
    assert AnalyticsEvent.objects.filter(event_type="qr_scan").exists()


@pytest.mark.django_db
def test_enforce_retention_defaults_to_ceiling(menu):
    for _ in range(6):
        _event(menu)
    assert enforce_retention(4, 0) == 2
    assert AnalyticsEvent.objects.count() == 4
    assert enforce_retention(4, 0) == 0
    assert enforce_retention(0) == 0


@pytest.mark.django_db
def test_prune_command(menu):
    for _ in range(4):
        _event(menu)
    out = StringIO()
    call_command("prune_analytics", "--max-events", "2", "--trim-to", "1", stdout=out)
    assert "OK: deleted 3 events" in out.getvalue()
    assert AnalyticsEvent.objects.count() == 1


@pytest.mark.django_db
def test_prune_command_disabled(menu):
    _event(menu)
    out = StringIO()
    call_command("prune_analytics", "--max-events", "0", stdout=out)
    assert "Retention disabled" in out.getvalue()
    assert AnalyticsEvent.objects.count() == 1


@pytest.mark.django_db
def test_prune_task(menu, settings):
    settings.ANALYTICS_RETENTION = {"max_events": 2, "trim_to": 0}
    for _ in range(3):
        _event(menu)
    assert prune_analytics_events() == {"deleted": 1}
    assert prune_analytics_events.delay(max_events=1).get() == {"deleted": 1}
    assert AnalyticsEvent.objects.count() == 1


@pytest.mark.django_db
def test_track_unknown_menu_id_falls_back_to_slug(client, menu, send_json):
    send_json(client, "post", reverse("analytics:track"), {
        "event_type": "page_view", "menu_id": "00000000-0000-0000-0000-000000000000", "slug": menu.slug,
    })
    event = AnalyticsEvent.objects.get()
    assert event.menu_id == str(menu.id)
    assert event.user_id == str(menu.owner_id)
