from django.contrib import admin

from .models import AnalyticsEvent


@admin.register(AnalyticsEvent)
class AnalyticsEventAdmin(admin.ModelAdmin):
    list_display = ("event_type", "slug", "item_id", "is_mobile", "timestamp")
    list_filter = ("event_type", "is_mobile")
    search_fields = ("slug", "menu_id", "user_id")
    date_hierarchy = "timestamp"
