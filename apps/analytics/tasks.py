import logging

from celery import shared_task
from django.conf import settings

from .services import enforce_retention

log = logging.getLogger(__name__)


@shared_task
def prune_analytics_events(max_events: int | None = None, trim_to: int | None = None):
    """Apply the retention ceiling; defaults come from ANALYTICS_RETENTION."""
    retention = getattr(settings, "ANALYTICS_RETENTION", {})
    max_events = retention.get("max_events", 0) if max_events is None else max_events
    trim_to = retention.get("trim_to", 0) if trim_to is None else trim_to
    deleted = enforce_retention(max_events, trim_to)
    log.info("[analytics] prune task done deleted=%s", deleted)
    return {"deleted": deleted}
