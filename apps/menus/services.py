from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Iterable

from django.conf import settings
from django.db import transaction
from django.db.models import Max, QuerySet
from django.utils import timezone

from apps.common.codes import generate_unique_slug
from apps.common.http import ValidationFailed
from .models import Category, DailySpecial, Item, Menu

log = logging.getLogger(__name__)

DEFAULT_MENU_NAME = "Main Menu"

# (category name, description, [(item name, description, price, tags), ...])
SAMPLE_MENU = [
    ("Starters", "Begin your meal right", [
        ("Bruschetta", "Toasted bread with fresh tomatoes, basil & olive oil", "8.50", ["vegetarian"]),
        ("Soup of the Day", "Ask your server for today's selection", "7.00", ["gluten-free"]),
    ]),
    ("Mains", "Our signature dishes", [
        ("Grilled Salmon", "Atlantic salmon with lemon butter sauce & seasonal vegetables", "24.00", ["gluten-free"]),
        ("Mushroom Risotto", "Creamy arborio rice with wild mushrooms & parmesan", "18.00", ["vegetarian"]),
    ]),
    ("Desserts", "Sweet endings", [
        ("Tiramisu", "Classic Italian coffee-flavored dessert", "10.00", []),
        ("Chocolate Lava Cake", "Warm chocolate cake with a molten center", "12.00", ["vegetarian"]),
    ]),
]


def _limit(name: str, default: int) -> int:
    return int(getattr(settings, "MENU_LIMITS", {}).get(name, default))


def next_sort_order(queryset: QuerySet) -> int:
    """One past the highest sort_order among siblings, 0 for the first child."""
    current = queryset.aggregate(m=Max("sort_order"))["m"]
    return 0 if current is None else current + 1


def build_menu_slug(name: str) -> str:
    return generate_unique_slug(name, exists=lambda s: Menu.objects.filter(slug=s).exists())


def _apply(instance, changes: dict[str, Any]) -> None:
    for key, value in changes.items():
        setattr(instance, key, value)


# Menus

def create_menu(owner, *, name: str, description: str = "", **extra) -> Menu:
    if Menu.objects.filter(owner=owner).count() >= _limit("menus_per_user", 20):
        raise ValidationFailed("Maximum number of menus reached")
    slug_source = owner.restaurant_name or owner.email.split("@")[0]
    menu = Menu(owner=owner, name=name, description=description or "", slug=build_menu_slug(slug_source))
    _apply(menu, extra)
    menu.save()
    log.info("[menus] menu created menu_id=%s owner=%s", menu.id, owner.id)
    return menu


def update_menu(menu: Menu, changes: dict[str, Any]) -> Menu:
    _apply(menu, changes)
    menu.save()
    return menu


@transaction.atomic
def delete_menu(menu: Menu) -> None:
    # categories and items go with it through ON DELETE CASCADE
    menu_id = menu.id
    menu.delete()
    log.info("[menus] menu deleted menu_id=%s", menu_id)


# Categories

def create_category(menu: Menu, *, name: str = "", description: str = "") -> Category:
    siblings = Category.objects.filter(menu=menu)
    if siblings.count() >= _limit("categories_per_menu", 50):
        raise ValidationFailed("Maximum number of categories reached")
    return Category.objects.create(
        menu=menu,
        name=name or "New Category",
        description=description or "",
        sort_order=next_sort_order(siblings),
    )


def update_category(category: Category, changes: dict[str, Any]) -> Category:
    _apply(category, changes)
    category.save()
    return category


@transaction.atomic
def delete_category(category: Category) -> None:
    category.delete()


# Items

def create_item(category: Category, fields: dict[str, Any]) -> Item:
    siblings = Item.objects.filter(category=category)
    if siblings.count() >= _limit("items_per_category", 200):
        raise ValidationFailed("Maximum number of items reached")
    item = Item(category=category, sort_order=next_sort_order(siblings))
    _apply(item, fields)
    item.name = item.name or "New Item"
    item.save()
    return item


def update_item(item: Item, changes: dict[str, Any]) -> Item:
    _apply(item, changes)
    item.save()
    return item


def delete_item(item: Item) -> None:
    item.delete()


@transaction.atomic
def duplicate_item(item: Item) -> Item:
    """Copy every field but the id; the copy lands after its siblings."""
    siblings = Item.objects.filter(category_id=item.category_id)
    copy = Item.objects.create(
        category_id=item.category_id,
        name=f"{item.name} (Copy)",
        description=item.description,
        price=item.price,
        image_url=item.image_url,
        tags=list(item.tags or []),
        is_available=item.is_available,
        is_featured=item.is_featured,
        sort_order=next_sort_order(siblings),
    )
    return copy


@transaction.atomic
def reorder(queryset: QuerySet, ids: Iterable) -> int:
    """Set sort_order to each id's position in `ids`.

    Only rows in `queryset` are touched, so ids of other parents are ignored.
    Returns how many rows were updated.
    """
    updated = 0
    for position, pk in enumerate(ids):
        if pk is None:
            continue
        updated += queryset.filter(id=pk).update(sort_order=position)
    return updated


# Signup seeding

def seed_default_menu(owner) -> Menu:
    """Starter menu every new account gets: 3 categories, 6 items."""
    menu = create_menu(owner, name=DEFAULT_MENU_NAME, description="")
    for cat_index, (cat_name, cat_desc, items) in enumerate(SAMPLE_MENU):
        category = Category.objects.create(menu=menu, name=cat_name, description=cat_desc, sort_order=cat_index)
        for item_index, (name, desc, price, tags) in enumerate(items):
            Item.objects.create(
                category=category,
                name=name,
                description=desc,
                price=Decimal(price),
                tags=list(tags),
                sort_order=item_index,
            )
    return menu


# Daily specials

def save_specials(menu: Menu, changes: dict[str, Any]) -> DailySpecial:
    specials, _ = DailySpecial.objects.get_or_create(menu=menu)
    _apply(specials, changes)
    specials.save()
    return specials


def _in_window(now: datetime, start: str, end: str) -> bool:
    current = now.strftime("%H:%M")
    if start <= end:
        return start <= current < end
    # window crossing midnight, e.g. 22:00-02:00
    return current >= start or current < end


def todays_specials(menu: Menu, available_ids: set[str], now: datetime | None = None) -> dict[str, Any]:
    """Specials for the current local weekday, limited to items still on the menu."""
    now = timezone.localtime(now)
    specials = DailySpecial.objects.filter(menu=menu).first()
    if specials is None:
        return {"weekday": now.weekday(), "items": [], "happy_hour": None}
    entries = (specials.weekdays or {}).get(str(now.weekday()), [])
    items = [entry for entry in entries if entry.get("item_id") in available_ids]
    happy_hour = specials.happy_hour or {}
    active = bool(
        happy_hour.get("enabled")
        and now.weekday() in (happy_hour.get("days") or range(7))
        and _in_window(now, happy_hour.get("start", ""), happy_hour.get("end", ""))
    )
    return {
        "weekday": now.weekday(),
        "items": items,
        "happy_hour": dict(happy_hour, active=active) if happy_hour.get("enabled") else None,
    }
