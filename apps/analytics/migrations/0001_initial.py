from django.db import migrations, models
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="AnalyticsEvent",
            fields=[
                ("id", models.BigAutoField(primary_key=True, serialize=False)),
                (
                    "event_type",
                    models.CharField(
                        choices=[
                            ("page_view", "Page view"),
                            ("item_click", "Item click"),
                            ("category_switch", "Category switch"),
                            ("qr_scan", "QR scan"),
                        ],
                        max_length=32,
                    ),
                ),
                ("menu_id", models.CharField(blank=True, max_length=64, null=True)),
                ("item_id", models.CharField(blank=True, max_length=64, null=True)),
                ("category_id", models.CharField(blank=True, max_length=64, null=True)),
                ("user_id", models.CharField(blank=True, max_length=64, null=True)),
                ("slug", models.CharField(blank=True, max_length=64, null=True)),
                ("user_agent", models.TextField(blank=True, null=True)),
                ("referrer", models.TextField(blank=True, null=True)),
                ("is_mobile", models.BooleanField(default=False)),
                ("timestamp", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                "indexes": [
                    models.Index(fields=["menu_id"], name="analytics_event_menu_idx"),
                    models.Index(fields=["event_type"], name="analytics_event_type_idx"),
                    models.Index(fields=["timestamp"], name="analytics_event_ts_idx"),
                    models.Index(fields=["user_id"], name="analytics_event_user_idx"),
                ],
            },
        ),
    ]
