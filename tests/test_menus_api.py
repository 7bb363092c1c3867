import uuid

import pytest
from django.urls import reverse

from apps.menus.models import Category, Item, Menu


def _item(menu, name):
    return Item.objects.get(category__menu=menu, name=name)


@pytest.mark.django_db
def test_list_and_create_menu(auth_client, menu, send_json):
    r = auth_client.get(reverse("menus:menus"))
    assert r.status_code == 200
    assert [m["slug"] for m in r.json()["menus"]] == [menu.slug]

    r = send_json(auth_client, "post", reverse("menus:menus"), {"name": "Brunch", "description": "Weekends only"})
    assert r.status_code == 200
    created = r.json()["menu"]
    assert created["name"] == "Brunch"
    assert created["slug"].startswith("bella-cucina-")
    assert created["primary_color"] == "#E85D2C"
    assert created["bg_color"] == "#FFFBF7"
    assert created["font"] == "Inter"
    assert created["is_active"] is True
    assert created["order_config"] == {"enabled": False, "type": "phone", "value": ""}


@pytest.mark.django_db
def test_menu_detail_is_nested_and_sorted(auth_client, menu):
    starters = Category.objects.get(menu=menu, name="Starters")
    starters.sort_order = 5
    starters.save()

    r = auth_client.get(reverse("menus:menu_detail", args=[menu.id]))
    assert r.status_code == 200
    data = r.json()["menu"]
    assert [c["name"] for c in data["categories"]] == ["Mains", "Starters"]
    # owners see unavailable items too
    assert [i["name"] for i in data["categories"][1]["items"]] == ["Bruschetta", "Calamari"]


@pytest.mark.django_db
def test_update_menu_applies_only_sent_keys(auth_client, menu, send_json):
    r = send_json(
        auth_client,
        "put",
        reverse("menus:menu_detail", args=[menu.id]),
        {"primary_color": "#112233", "languages": ["EN", "it", "en"], "order_config": {"enabled": True, "value": "+1 555"}},
    )
    assert r.status_code == 200
    menu.refresh_from_db()
    assert menu.primary_color == "#112233"
    assert menu.name == "Main Menu"
    assert menu.bg_color == "#FFFBF7"
    assert menu.languages == ["en", "it"]
    assert menu.order_config == {"enabled": True, "type": "phone", "value": "+1 555"}


@pytest.mark.django_db
def test_update_menu_validation_errors(auth_client, menu, send_json):
    r = send_json(auth_client, "put", reverse("menus:menu_detail", args=[menu.id]), {"primary_color": "red", "name": ""})
    assert r.status_code == 400
    fields = r.json()["fields"]
    assert "primary_color" in fields
    assert "name" in fields
    menu.refresh_from_db()
    assert menu.name == "Main Menu"


@pytest.mark.django_db
def test_deactivate_menu(auth_client, menu, send_json):
    send_json(auth_client, "put", reverse("menus:menu_detail", args=[menu.id]), {"is_active": False})
    menu.refresh_from_db()
    assert menu.is_active is False


@pytest.mark.django_db
def test_foreign_menu_is_not_found(client, menu, other_user, send_json):
    client.force_login(other_user)
    r = client.get(reverse("menus:menu_detail", args=[menu.id]))
    assert r.status_code == 404
    assert r.json() == {"error": "Menu not found"}

    r = send_json(client, "delete", reverse("menus:menu_detail", args=[menu.id]))
    assert r.status_code == 404
    assert Menu.objects.filter(id=menu.id).exists()

    starters = Category.objects.get(menu=menu, name="Starters")
    r = send_json(client, "put", reverse("menus:category_detail", args=[starters.id]), {"name": "Hijacked"})
    assert r.status_code == 404
    r = send_json(client, "post", reverse("menus:item_duplicate", args=[_item(menu, "Bruschetta").id]))
    assert r.status_code == 404


@pytest.mark.django_db
def test_menu_endpoints_require_login(client, menu):
    assert client.get(reverse("menus:menus")).status_code == 401
    assert client.get(reverse("menus:menu_detail", args=[menu.id])).status_code == 401


@pytest.mark.django_db
def test_unknown_menu_id_is_json_404(auth_client):
    r = auth_client.get(reverse("menus:menu_detail", args=[uuid.uuid4()]))
    assert r.status_code == 404
    assert r.json()["error"] == "Menu not found"


@pytest.mark.django_db
def test_delete_menu_cascades(auth_client, menu, send_json):
    category_ids = list(Category.objects.filter(menu=menu).values_list("id", flat=True))
    r = send_json(auth_client, "delete", reverse("menus:menu_detail", args=[menu.id]))
    assert r.json() == {"success": True}
    assert not Menu.objects.filter(id=menu.id).exists()
    assert not Category.objects.filter(id__in=category_ids).exists()
    assert not Item.objects.filter(category_id__in=category_ids).exists()


@pytest.mark.django_db
def test_delete_category_removes_its_items(auth_client, menu, send_json):
    starters = Category.objects.get(menu=menu, name="Starters")
    send_json(auth_client, "delete", reverse("menus:category_detail", args=[starters.id]))
    assert not Item.objects.filter(category_id=starters.id).exists()
    assert Item.objects.filter(category__menu=menu).count() == 1


@pytest.mark.django_db
def test_categories_get_sequential_sort_order(auth_client, user, send_json):
    fresh = Menu.objects.create(owner=user, name="Drinks", slug="drinks-aaaaaa")
    url = reverse("menus:menu_categories", args=[fresh.id])
    orders = [send_json(auth_client, "post", url, {"name": n}).json()["category"]["sort_order"] for n in ("Wine", "Beer", "Soft")]
    assert orders == [0, 1, 2]

    r = send_json(auth_client, "post", url, {})
    assert r.json()["category"]["name"] == "New Category"
    assert r.json()["category"]["items"] == []

    listed = auth_client.get(url).json()["categories"]
    assert [c["name"] for c in listed] == ["Wine", "Beer", "Soft", "New Category"]


@pytest.mark.django_db
def test_items_get_sequential_sort_order(auth_client, menu, send_json):
    cat = Category.objects.create(menu=menu, name="Pizza", sort_order=2)
    url = reverse("menus:category_items", args=[cat.id])
    orders = [send_json(auth_client, "post", url, {"name": f"Pizza {n}", "price": 12}).json()["item"]["sort_order"] for n in range(3)]
    assert orders == [0, 1, 2]


@pytest.mark.django_db
def test_item_tags_round_trip(auth_client, menu, send_json):
    cat = Category.objects.get(menu=menu, name="Mains")
    r = send_json(auth_client, "post", reverse("menus:category_items", args=[cat.id]), {"name": "Tofu Bowl", "tags": ["vegan", "spicy", "vegan"]})
    item = r.json()["item"]
    assert set(item["tags"]) == {"vegan", "spicy"}
    assert len(item["tags"]) == 2
    assert set(Item.objects.get(id=item["id"]).tags) == {"vegan", "spicy"}


@pytest.mark.django_db
def test_item_defaults_and_price_rounding(auth_client, menu, send_json):
    cat = Category.objects.get(menu=menu, name="Mains")
    r = send_json(auth_client, "post", reverse("menus:category_items", args=[cat.id]), {"price": 0.1 + 0.2})
    item = r.json()["item"]
    assert item["name"] == "New Item"
    assert item["price"] == 0.3
    assert item["is_available"] is True
    assert item["is_featured"] is False


@pytest.mark.django_db
def test_item_negative_price_rejected(auth_client, menu, send_json):
    item = _item(menu, "Bruschetta")
    r = send_json(auth_client, "put", reverse("menus:item_detail", args=[item.id]), {"price": -1})
    assert r.status_code == 400
    assert "price" in r.json()["fields"]


@pytest.mark.django_db
def test_update_item_patch(auth_client, menu, send_json):
    item = _item(menu, "Bruschetta")
    r = send_json(auth_client, "put", reverse("menus:item_detail", args=[item.id]), {"is_available": False, "price": "9.25"})
    assert r.status_code == 200
    body = r.json()["item"]
    assert body["is_available"] is False
    assert body["price"] == 9.25
    assert body["name"] == "Bruschetta"
    assert body["tags"] == ["vegetarian"]


@pytest.mark.django_db
def test_delete_item(auth_client, menu, send_json):
    item = _item(menu, "Calamari")
    assert send_json(auth_client, "delete", reverse("menus:item_detail", args=[item.id])).json() == {"success": True}
    assert not Item.objects.filter(id=item.id).exists()


@pytest.mark.django_db
def test_duplicate_item(auth_client, menu, send_json):
    original = _item(menu, "Tiramisu")
    original.description = "Classic Italian coffee-flavored dessert"
    original.save()

    r = send_json(auth_client, "post", reverse("menus:item_duplicate", args=[original.id]))
    assert r.status_code == 200
    copy = r.json()["item"]
    assert copy["name"] == "Tiramisu (Copy)"
    assert copy["id"] != str(original.id)
    assert copy["price"] == 10.0
    assert copy["tags"] == ["sweet"]
    assert copy["description"] == "Classic Italian coffee-flavored dessert"
    assert copy["category_id"] == str(original.category_id)
    assert copy["sort_order"] == original.sort_order + 1


@pytest.mark.django_db
def test_reorder_categories_ignores_foreign_ids(auth_client, menu, other_user, send_json):
    foreign_menu = Menu.objects.create(owner=other_user, name="Other", slug="other-bbbbbb")
    foreign = Category.objects.create(menu=foreign_menu, name="Foreign", sort_order=7)
    starters = Category.objects.get(menu=menu, name="Starters")
    mains = Category.objects.get(menu=menu, name="Mains")

    r = send_json(
        auth_client,
        "put",
        reverse("menus:reorder_categories", args=[menu.id]),
        {"ids": [str(mains.id), str(foreign.id), "not-a-uuid", str(starters.id)]},
    )
    assert r.json() == {"success": True}
    mains.refresh_from_db()
    starters.refresh_from_db()
    foreign.refresh_from_db()
    assert mains.sort_order == 0
    assert starters.sort_order == 3
    assert foreign.sort_order == 7


@pytest.mark.django_db
def test_reorder_items(auth_client, menu, send_json):
    starters = Category.objects.get(menu=menu, name="Starters")
    bruschetta = _item(menu, "Bruschetta")
    calamari = _item(menu, "Calamari")
    send_json(auth_client, "put", reverse("menus:reorder_items", args=[starters.id]), {"ids": [str(calamari.id), str(bruschetta.id)]})
    names = list(Item.objects.filter(category=starters).order_by("sort_order").values_list("name", flat=True))
    assert names == ["Calamari", "Bruschetta"]


@pytest.mark.django_db
def test_reorder_requires_ids(auth_client, menu, send_json):
    r = send_json(auth_client, "put", reverse("menus:reorder_categories", args=[menu.id]), {"ids": "nope"})
    assert r.status_code == 400


@pytest.mark.django_db
def test_menu_limit(auth_client, user, settings, send_json):
    settings.MENU_LIMITS = {"menus_per_user": 1}
    Menu.objects.create(owner=user, name="Only", slug="only-cccccc")
    r = send_json(auth_client, "post", reverse("menus:menus"), {"name": "Second"})
    assert r.status_code == 400
    assert r.json()["error"] == "Maximum number of menus reached"


@pytest.mark.django_db
def test_update_item_form_encoded(auth_client, menu):
    item = _item(menu, "Bruschetta")
    r = auth_client.put(
        reverse("menus:item_detail", args=[item.id]),
        data="name=Renamed&price=3",
        content_type="application/x-www-form-urlencoded",
    )
    assert r.status_code == 200
    item.refresh_from_db()
    assert item.name == "Renamed"
    assert str(item.price) == "3.00"
    assert item.tags == ["vegetarian"]


@pytest.mark.django_db
def test_update_menu_multipart_put_rejected(auth_client, menu):
    r = auth_client.put(
        reverse("menus:menu_detail", args=[menu.id]),
        data=b"--x\r\n",
        content_type="multipart/form-data; boundary=x",
    )
    assert r.status_code == 400
    menu.refresh_from_db()
    assert menu.name == "Main Menu"
