from django.conf import settings
from django.core.management.base import BaseCommand

from apps.analytics.services import enforce_retention


class Command(BaseCommand):
    help = "Deletes the oldest analytics events once the retention ceiling is exceeded."

    def add_arguments(self, parser):
        retention = getattr(settings, "ANALYTICS_RETENTION", {})
        parser.add_argument("--max-events", type=int, default=retention.get("max_events", 0),
                            help="Ceiling on stored events; 0 disables pruning")
        parser.add_argument("--trim-to", type=int, default=retention.get("trim_to", 0),
                            help="Event count to keep after pruning (defaults to --max-events)")

    def handle(self, *args, **options):
        max_events = options["max_events"]
        if max_events <= 0:
            self.stdout.write(self.style.WARNING("Retention disabled (max events is 0); nothing to do."))
            return
        deleted = enforce_retention(max_events, options["trim_to"])
        self.stdout.write(self.style.SUCCESS(f"OK: deleted {deleted} events"))
