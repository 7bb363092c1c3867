from django.http import HttpRequest
from django.views.decorators.http import require_http_methods

from apps.common.http import json_view
from . import selectors, services


def _visible_translations(translations: dict, visible_ids: set[str]) -> dict:
    """Per-language translations limited to records the customer can see."""
    return {
        lang: {record_id: entry for record_id, entry in entries.items() if record_id in visible_ids}
        for lang, entries in (translations or {}).items()
    }


@require_http_methods(["GET"])
@json_view
def public_menu(request: HttpRequest, slug: str):
    """Customer-facing menu: active menus only, available items only."""
    menu = selectors.get_public_menu(slug)
    data = selectors.get_menu_with_categories(menu, available_only=True)
    data.pop("user_id", None)
    data["restaurant_name"] = menu.owner.restaurant_name
    available = {item["id"] for category in data["categories"] for item in category["items"]}
    visible = available | {category["id"] for category in data["categories"]} | {data["id"]}
    data["translations"] = _visible_translations(data["translations"], visible)
    data["specials"] = services.todays_specials(menu, available)
    return {"menu": data}
