from __future__ import annotations

from typing import Any

from django.db.models import Prefetch, QuerySet

from apps.common.http import NotFound
from .models import Category, DailySpecial, Item, Menu, default_happy_hour
from .serializers import serialize_category, serialize_item, serialize_menu


def menus_for_owner(user) -> QuerySet[Menu]:
    return Menu.objects.filter(owner=user).order_by("created_at")


def get_owned_menu(user, menu_id) -> Menu:
    menu = Menu.objects.filter(id=menu_id, owner=user).first()
    if menu is None:
        raise NotFound("Menu not found")
    return menu


def get_owned_category(user, category_id) -> Category:
    category = Category.objects.select_related("menu").filter(id=category_id, menu__owner=user).first()
    if category is None:
        raise NotFound("Category not found")
    return category


def get_owned_item(user, item_id) -> Item:
    item = Item.objects.select_related("category__menu").filter(id=item_id, category__menu__owner=user).first()
    if item is None:
        raise NotFound("Item not found")
    return item


def get_public_menu(slug: str) -> Menu:
    """Active menu by slug; inactive and unknown menus look the same."""
    menu = Menu.objects.select_related("owner").filter(slug=slug, is_active=True).first()
    if menu is None:
        raise NotFound("Menu not found")
    return menu


def categories_for_menu(menu: Menu, *, available_only: bool = False) -> QuerySet[Category]:
    items = Item.objects.order_by("sort_order", "created_at")
    if available_only:
        items = items.filter(is_available=True)
    return (
        Category.objects.filter(menu=menu)
        .order_by("sort_order", "created_at")
        .prefetch_related(Prefetch("items", queryset=items))
    )


def get_menu_with_categories(menu: Menu, *, available_only: bool = False) -> dict[str, Any]:
    """Nested view: menu -> categories (by sort_order) -> items (by sort_order)."""
    data = serialize_menu(menu)
    categories = []
    for category in categories_for_menu(menu, available_only=available_only):
        entry = serialize_category(category)
        entry["items"] = [serialize_item(item) for item in category.items.all()]
        categories.append(entry)
    data["categories"] = categories
    return data


def get_specials(menu: Menu) -> DailySpecial:
    """Stored specials, or an unsaved empty record when none were configured."""
    specials = DailySpecial.objects.filter(menu=menu).first()
    if specials is None:
        specials = DailySpecial(menu=menu, weekdays={}, happy_hour=default_happy_hour())
    return specials
