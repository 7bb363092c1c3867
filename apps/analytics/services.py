from __future__ import annotations

import logging
import re
import uuid

from django.conf import settings
from django.db import transaction

from apps.menus.models import Menu
from .models import AnalyticsEvent

log = logging.getLogger(__name__)

EVENT_TYPES = {choice for choice, _ in AnalyticsEvent.EVENT_CHOICES}
MOBILE_AGENT = re.compile(r"Mobile|Android|iPhone|iPad", re.IGNORECASE)
ID_MAX_LENGTH = 64


def is_mobile_agent(user_agent: str | None) -> bool:
    return bool(MOBILE_AGENT.search(user_agent or ""))


def _as_uuid(value) -> uuid.UUID | None:
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None


def _clip(value, length: int = ID_MAX_LENGTH) -> str | None:
    if value in (None, ""):
        return None
    return str(value)[:length]


def resolve_menu(menu_id=None, slug=None) -> Menu | None:
    pk = _as_uuid(menu_id) if menu_id else None
    if pk is not None:
        menu = Menu.objects.filter(id=pk).first()
        if menu is not None:
            return menu
    if slug:
        return Menu.objects.filter(slug=str(slug)[:ID_MAX_LENGTH]).first()
    return None


def record_event(payload: dict, *, user_agent: str = "", referrer: str = "") -> AnalyticsEvent | None:
    """Store one tracking event. Never raises: failures are logged and dropped."""
    try:
        event_type = payload.get("event_type")
        if event_type not in EVENT_TYPES:
            log.info("[analytics] ignoring unknown event_type=%r", event_type)
            return None
        menu = resolve_menu(payload.get("menu_id"), payload.get("slug"))
        event = AnalyticsEvent.objects.create(
            event_type=event_type,
            menu_id=str(menu.id) if menu else _clip(payload.get("menu_id")),
            item_id=_clip(payload.get("item_id")),
            category_id=_clip(payload.get("category_id")),
            user_id=str(menu.owner_id) if menu else None,
            slug=menu.slug if menu else _clip(payload.get("slug")),
            user_agent=user_agent or None,
            referrer=referrer or None,
            is_mobile=is_mobile_agent(user_agent),
        )
        retention = getattr(settings, "ANALYTICS_RETENTION", {})
        if retention.get("max_events"):
            enforce_retention(retention["max_events"], retention.get("trim_to") or 0)
        return event
    except Exception:
        log.exception("[analytics] failed to record event")
        return None


@transaction.atomic
def enforce_retention(max_events: int, trim_to: int = 0) -> int:
    """Once more than `max_events` are stored, delete the oldest down to `trim_to`.

    `trim_to` outside (0, max_events] falls back to `max_events`. Returns the
    number of deleted rows; max_events <= 0 disables the ceiling.
    """
    if max_events <= 0:
        return 0
    total = AnalyticsEvent.objects.count()
    if total <= max_events:
        return 0
    keep = trim_to if 0 < trim_to <= max_events else max_events
    excess = total - keep
    oldest = list(
        AnalyticsEvent.objects.order_by("timestamp", "id").values_list("id", flat=True)[:excess]
    )
    deleted, _ = AnalyticsEvent.objects.filter(id__in=oldest).delete()
    log.info("[analytics] retention pruned %s events (kept %s)", deleted, keep)
    return deleted
