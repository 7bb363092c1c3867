from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from apps.common.models import BaseModel


DEFAULT_PRIMARY_COLOR = "#E85D2C"
DEFAULT_BG_COLOR = "#FFFBF7"
DEFAULT_FONT = "Inter"


def default_order_config():
    return {"enabled": False, "type": "phone", "value": ""}


class Menu(BaseModel):
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="menus")
    slug = models.SlugField(max_length=64, unique=True)
    name = models.CharField(max_length=160)
    description = models.TextField(blank=True)
    logo_url = models.CharField(max_length=500, blank=True)
    primary_color = models.CharField(max_length=16, default=DEFAULT_PRIMARY_COLOR)
    bg_color = models.CharField(max_length=16, default=DEFAULT_BG_COLOR)
    font = models.CharField(max_length=64, default=DEFAULT_FONT)
    is_active = models.BooleanField(default=True)
    # ["en", "es", ...]
    languages = models.JSONField(default=list, blank=True)
    # {lang: {record_id: {"name": ..., "description": ...}}}
    translations = models.JSONField(default=dict, blank=True)
    order_config = models.JSONField(default=default_order_config, blank=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [models.Index(fields=["owner", "created_at"], name="menus_menu_owner_created_idx")]

    def __str__(self) -> str:
        return f"{self.name} ({self.slug})"


class Category(BaseModel):
    menu = models.ForeignKey(Menu, on_delete=models.CASCADE, related_name="categories")
    name = models.CharField(max_length=160)
    description = models.TextField(blank=True)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "created_at"]
        indexes = [models.Index(fields=["menu", "sort_order"], name="menus_cat_menu_sort_idx")]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Item(BaseModel):
    category = models.ForeignKey(Category, on_delete=models.CASCADE, related_name="items")
    name = models.CharField(max_length=160)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=9, decimal_places=2, default=Decimal("0.00"), validators=[MinValueValidator(Decimal("0"))]
    )
    image_url = models.CharField(max_length=500, blank=True)
    # stored as a JSON list of unique strings
    tags = models.JSONField(default=list, blank=True)
    is_available = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["sort_order", "created_at"]
        indexes = [models.Index(fields=["category", "sort_order"], name="menus_item_cat_sort_idx")]

    def __str__(self) -> str:
        return self.name


def default_happy_hour():
    return {"enabled": False, "start": "", "end": "", "label": "", "days": []}


class DailySpecial(BaseModel):
    """Per-weekday price overrides plus an optional happy hour window.

    `weekdays` maps "0".."6" (Monday..Sunday) to [{item_id, price, label}].
    """

    menu = models.OneToOneField(Menu, on_delete=models.CASCADE, related_name="specials")
    weekdays = models.JSONField(default=dict, blank=True)
    happy_hour = models.JSONField(default=default_happy_hour, blank=True)

    def __str__(self) -> str:
        return f"Specials for {self.menu_id}"
