from django.db import models
from django.utils import timezone


class AnalyticsEvent(models.Model):
    """Append-only record of customer activity on public menus.

    Record ids are stored as plain strings rather than foreign keys so the
    history outlives deleted menus and items.
    """

    PAGE_VIEW = "page_view"
    ITEM_CLICK = "item_click"
    CATEGORY_SWITCH = "category_switch"
    QR_SCAN = "qr_scan"
    EVENT_CHOICES = [
        (PAGE_VIEW, "Page view"),
        (ITEM_CLICK, "Item click"),
        (CATEGORY_SWITCH, "Category switch"),
        (QR_SCAN, "QR scan"),
    ]

    id = models.BigAutoField(primary_key=True)
    event_type = models.CharField(max_length=32, choices=EVENT_CHOICES)
    menu_id = models.CharField(max_length=64, null=True, blank=True)
    item_id = models.CharField(max_length=64, null=True, blank=True)
    category_id = models.CharField(max_length=64, null=True, blank=True)
    user_id = models.CharField(max_length=64, null=True, blank=True)
    slug = models.CharField(max_length=64, null=True, blank=True)
    user_agent = models.TextField(null=True, blank=True)
    referrer = models.TextField(null=True, blank=True)
    is_mobile = models.BooleanField(default=False)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["menu_id"], name="analytics_event_menu_idx"),
            models.Index(fields=["event_type"], name="analytics_event_type_idx"),
            models.Index(fields=["timestamp"], name="analytics_event_ts_idx"),
            models.Index(fields=["user_id"], name="analytics_event_user_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event_type} {self.menu_id} @ {self.timestamp:%Y-%m-%d %H:%M}"
