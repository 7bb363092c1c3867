import os
from celery import Celery
from django.conf import settings

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("config")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

# Nightly at 03:30: enforce the analytics retention ceiling
from celery.schedules import crontab
app.conf.beat_schedule = {
    "prune-analytics-events": {
        "task": "apps.analytics.tasks.prune_analytics_events",
        "schedule": crontab(minute=30, hour=3),
    },
}
