"""Read-side summaries over AnalyticsEvent for a set of menus."""

from __future__ import annotations

import uuid
from datetime import datetime, time, timedelta
from typing import Any, Iterable

from django.db.models import Count, Q, QuerySet
from django.db.models.functions import ExtractHour, TruncDate
from django.utils import timezone

from apps.menus.models import Category, Item
from .models import AnalyticsEvent

RANGES = ("today", "7d", "30d", "all")
DEFAULT_RANGE = "30d"
RANGE_DAYS = {"today": 0, "7d": 7, "30d": 30}
TOP_ITEMS_LIMIT = 10


def normalize_range(value: str | None) -> str:
    return value if value in RANGES else DEFAULT_RANGE


def resolve_range_start(range_key: str, now: datetime | None = None) -> datetime | None:
    """Local midnight N days back; None means unbounded ('all')."""
    days = RANGE_DAYS.get(range_key)
    if days is None:
        return None
    now = timezone.localtime(now)
    midnight = datetime.combine(now.date() - timedelta(days=days), time.min)
    return timezone.make_aware(midnight, timezone.get_current_timezone())


def events_for(menu_ids: Iterable, range_key: str, now: datetime | None = None) -> QuerySet[AnalyticsEvent]:
    qs = AnalyticsEvent.objects.filter(menu_id__in=[str(m) for m in menu_ids])
    start = resolve_range_start(range_key, now)
    if start is not None:
        qs = qs.filter(timestamp__gte=start)
    return qs


def _names(model, ids: Iterable[str]) -> dict[str, str]:
    valid = []
    for raw in ids:
        try:
            valid.append(uuid.UUID(raw))
        except (TypeError, ValueError):
            continue
    return {str(pk): name for pk, name in model.objects.filter(id__in=valid).values_list("id", "name")}


def build_summary(menu_ids: Iterable, range_key: str | None = None, now: datetime | None = None) -> dict[str, Any]:
    range_key = normalize_range(range_key)
    qs = events_for(menu_ids, range_key, now)

    page_view = Q(event_type=AnalyticsEvent.PAGE_VIEW)
    qr_scan = Q(event_type=AnalyticsEvent.QR_SCAN)

    totals = qs.aggregate(
        views=Count("id", filter=page_view),
        clicks=Count("id", filter=Q(event_type=AnalyticsEvent.ITEM_CLICK)),
        scans=Count("id", filter=qr_scan),
        sessions=Count("user_agent", filter=page_view, distinct=True),
        mobile=Count("id", filter=page_view & Q(is_mobile=True)),
    )

    daily = (
        qs.filter(page_view | qr_scan)
        .annotate(day=TruncDate("timestamp"))
        .values("day")
        .annotate(views=Count("id", filter=page_view), scans=Count("id", filter=qr_scan))
        .order_by("day")
    )

    top_items = list(
        qs.filter(event_type=AnalyticsEvent.ITEM_CLICK, item_id__isnull=False)
        .values("item_id")
        .annotate(count=Count("id"))
        .order_by("-count", "item_id")[:TOP_ITEMS_LIMIT]
    )
    item_names = _names(Item, [row["item_id"] for row in top_items])

    hourly = (
        qs.filter(page_view)
        .annotate(hour=ExtractHour("timestamp"))
        .values("hour")
        .annotate(count=Count("id"))
        .order_by("hour")
    )

    category_views = list(
        qs.filter(event_type=AnalyticsEvent.CATEGORY_SWITCH, category_id__isnull=False)
        .values("category_id")
        .annotate(count=Count("id"))
        .order_by("-count", "category_id")
    )
    category_names = _names(Category, [row["category_id"] for row in category_views])

    return {
        "totalViews": totals["views"],
        "totalItemClicks": totals["clicks"],
        "totalQRScans": totals["scans"],
        "uniqueSessions": totals["sessions"],
        "dailyViews": [
            {"day": row["day"].isoformat(), "views": row["views"], "scans": row["scans"]} for row in daily
        ],
        "topItems": [
            {"item_id": row["item_id"], "name": item_names.get(row["item_id"]), "count": row["count"]}
            for row in top_items
        ],
        "hourly": [{"hour": row["hour"], "count": row["count"]} for row in hourly],
        "devices": {"mobile": totals["mobile"], "desktop": totals["views"] - totals["mobile"]},
        "categoryViews": [
            {"category_id": row["category_id"], "name": category_names.get(row["category_id"]), "count": row["count"]}
            for row in category_views
        ],
        "range": range_key,
    }
