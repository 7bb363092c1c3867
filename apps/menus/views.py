from __future__ import annotations

from django.http import HttpRequest, HttpResponse
from django.views.decorators.http import require_http_methods

from apps.common.http import api_login_required, json_view, parse_json_body, validate_form, validate_patch
from . import qr, selectors, services
from .forms import CategoryForm, ItemForm, MenuForm, ReorderForm, SpecialsForm
from .models import Category, Item
from .serializers import serialize_category, serialize_item, serialize_menu, serialize_specials


@require_http_methods(["GET", "POST"])
@json_view
@api_login_required
def menus(request: HttpRequest):
    if request.method == "POST":
        data = validate_patch(MenuForm, parse_json_body(request))
        menu = services.create_menu(request.user, **data)
        return {"menu": serialize_menu(menu)}
    return {"menus": [serialize_menu(m) for m in selectors.menus_for_owner(request.user)]}


@require_http_methods(["GET", "PUT", "PATCH", "DELETE"])
@json_view
@api_login_required
def menu_detail(request: HttpRequest, menu_id):
    menu = selectors.get_owned_menu(request.user, menu_id)
    if request.method == "DELETE":
        services.delete_menu(menu)
        return {"success": True}
    if request.method in ("PUT", "PATCH"):
        changes = validate_patch(MenuForm, parse_json_body(request), partial=True)
        menu = services.update_menu(menu, changes)
        return {"menu": serialize_menu(menu)}
    return {"menu": selectors.get_menu_with_categories(menu)}


@require_http_methods(["GET", "POST"])
@json_view
@api_login_required
def menu_categories(request: HttpRequest, menu_id):
    menu = selectors.get_owned_menu(request.user, menu_id)
    if request.method == "POST":
        data = validate_patch(CategoryForm, parse_json_body(request))
        category = services.create_category(menu, name=data.get("name", ""), description=data.get("description", ""))
        payload = serialize_category(category)
        payload["items"] = []
        return {"category": payload}
    return {"categories": selectors.get_menu_with_categories(menu)["categories"]}


@require_http_methods(["PUT", "PATCH", "DELETE"])
@json_view
@api_login_required
def category_detail(request: HttpRequest, category_id):
    category = selectors.get_owned_category(request.user, category_id)
    if request.method == "DELETE":
        services.delete_category(category)
        return {"success": True}
    changes = validate_patch(CategoryForm, parse_json_body(request), partial=True)
    category = services.update_category(category, changes)
    return {"category": serialize_category(category)}


@require_http_methods(["POST"])
@json_view
@api_login_required
def category_items(request: HttpRequest, category_id):
    category = selectors.get_owned_category(request.user, category_id)
    data = validate_patch(ItemForm, parse_json_body(request))
    item = services.create_item(category, data)
    return {"item": serialize_item(item)}


@require_http_methods(["PUT", "PATCH", "DELETE"])
@json_view
@api_login_required
def item_detail(request: HttpRequest, item_id):
    item = selectors.get_owned_item(request.user, item_id)
    if request.method == "DELETE":
        services.delete_item(item)
        return {"success": True}
    changes = validate_patch(ItemForm, parse_json_body(request), partial=True)
    item = services.update_item(item, changes)
    return {"item": serialize_item(item)}


@require_http_methods(["POST"])
@json_view
@api_login_required
def item_duplicate(request: HttpRequest, item_id):
    item = selectors.get_owned_item(request.user, item_id)
    return {"item": serialize_item(services.duplicate_item(item))}


@require_http_methods(["PUT", "POST"])
@json_view
@api_login_required
def reorder_categories(request: HttpRequest, menu_id):
    menu = selectors.get_owned_menu(request.user, menu_id)
    data = validate_form(ReorderForm, parse_json_body(request))
    services.reorder(Category.objects.filter(menu=menu), data["ids"])
    return {"success": True}


@require_http_methods(["PUT", "POST"])
@json_view
@api_login_required
def reorder_items(request: HttpRequest, category_id):
    category = selectors.get_owned_category(request.user, category_id)
    data = validate_form(ReorderForm, parse_json_body(request))
    services.reorder(Item.objects.filter(category=category), data["ids"])
    return {"success": True}


@require_http_methods(["GET", "PUT"])
@json_view
@api_login_required
def menu_specials(request: HttpRequest, menu_id):
    menu = selectors.get_owned_menu(request.user, menu_id)
    if request.method == "PUT":
        changes = validate_patch(SpecialsForm, parse_json_body(request))
        specials = services.save_specials(menu, changes)
    else:
        specials = selectors.get_specials(menu)
    return {"specials": serialize_specials(specials)}


@require_http_methods(["GET"])
@json_view
@api_login_required
def menu_qr(request: HttpRequest, menu_id):
    menu = selectors.get_owned_menu(request.user, menu_id)
    url = qr.public_menu_url(menu)
    return {"qr": qr.qr_data_url(url), "url": url}


@require_http_methods(["GET"])
@json_view
@api_login_required
def menu_qr_card(request: HttpRequest, menu_id):
    menu = selectors.get_owned_menu(request.user, menu_id)
    png = qr.render_qr_card(menu, restaurant_name=request.user.restaurant_name)
    resp = HttpResponse(png, content_type="image/png")
    resp["Content-Disposition"] = f'inline; filename="menu-{menu.slug}-qr.png"'
    return resp
