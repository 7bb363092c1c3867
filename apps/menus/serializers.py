from __future__ import annotations

from typing import Any


def _price(value) -> float:
    return float(value) if value is not None else 0.0


def serialize_menu(menu) -> dict[str, Any]:
    return {
        "id": str(menu.id),
        "user_id": str(menu.owner_id),
        "slug": menu.slug,
        "name": menu.name,
        "description": menu.description,
        "logo_url": menu.logo_url,
        "primary_color": menu.primary_color,
        "bg_color": menu.bg_color,
        "font": menu.font,
        "is_active": menu.is_active,
        "languages": list(menu.languages or []),
        "translations": menu.translations or {},
        "order_config": menu.order_config or {},
        "created_at": menu.created_at.isoformat() if menu.created_at else None,
    }


def serialize_category(category) -> dict[str, Any]:
    return {
        "id": str(category.id),
        "menu_id": str(category.menu_id),
        "name": category.name,
        "description": category.description,
        "sort_order": category.sort_order,
    }


def serialize_item(item) -> dict[str, Any]:
    return {
        "id": str(item.id),
        "category_id": str(item.category_id),
        "name": item.name,
        "description": item.description,
        "price": _price(item.price),
        "image_url": item.image_url,
        "tags": list(item.tags or []),
        "is_available": item.is_available,
        "is_featured": item.is_featured,
        "sort_order": item.sort_order,
    }


def serialize_specials(specials) -> dict[str, Any]:
    return {
        "menu_id": str(specials.menu_id),
        "weekdays": specials.weekdays or {},
        "happy_hour": specials.happy_hour or {},
    }
