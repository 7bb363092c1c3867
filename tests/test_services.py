import re
from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import call_command

from apps.common.codes import generate_unique_slug, slugify_name
from apps.menus.models import Category, Item, Menu
from apps.menus.services import build_menu_slug, next_sort_order, seed_default_menu


User = get_user_model()


def test_slugify_name():
    assert slugify_name("Bella Cucina") == "bella-cucina"
    assert slugify_name("  Café & Bar!! ") == "caf-bar"
    assert slugify_name("!!!") == "menu"
    assert len(slugify_name("x" * 80)) == 30


def test_generate_unique_slug_retries():
    taken = []

    def exists(slug):
        taken.append(slug)
        return len(taken) < 3

    slug = generate_unique_slug("Sushi Zen", exists=exists)
    assert re.fullmatch(r"sushi-zen-[a-z0-9]{6}", slug)
    assert len(taken) == 3


def test_generate_unique_slug_gives_up():
    with pytest.raises(RuntimeError):
        generate_unique_slug("x", exists=lambda s: True, max_attempts=2)


@pytest.mark.django_db
def test_build_menu_slug_is_unique(menu):
    slug = build_menu_slug("Bella Cucina")
    assert slug.startswith("bella-cucina-")
    assert slug != menu.slug


@pytest.mark.django_db
def test_next_sort_order(menu):
    fresh = Category.objects.create(menu=menu, name="Empty", sort_order=9)
    assert next_sort_order(Item.objects.filter(category=fresh)) == 0
    assert next_sort_order(Category.objects.filter(menu=menu)) == 10


@pytest.mark.django_db
def test_seed_demo_menus():
    out = StringIO()
    call_command("seed_demo_menus", stdout=out)
    users = User.objects.filter(email__startswith="demo-")
    assert users.count() == 4
    assert set(users.values_list("plan", flat=True)) == {"pro"}
    assert all(u.check_password("demo123") for u in users)

    mexican = Menu.objects.get(owner__email="demo-mexican@menucraft.com")
    assert mexican.slug.startswith("la-casa-bonita-")
    assert mexican.primary_color == "#C41E3A"
    for category in Category.objects.filter(menu__in=Menu.objects.filter(owner__in=users)):
        items = list(category.items.order_by("sort_order"))
        assert items[0].is_featured
        assert not any(item.is_featured for item in items[1:])
    assert "La Casa Bonita" in out.getvalue()


@pytest.mark.django_db
def test_seed_demo_menus_skips_existing():
    call_command("seed_demo_menus", stdout=StringIO())
    before = Item.objects.count()
    out = StringIO()
    call_command("seed_demo_menus", stdout=out)
    assert "Skip: demo-mexican@menucraft.com already exists" in out.getvalue()
    assert Item.objects.count() == before
    assert Menu.objects.count() == 4


@pytest.mark.django_db
def test_seed_demo_menus_reset():
    call_command("seed_demo_menus", stdout=StringIO())
    old = set(User.objects.values_list("id", flat=True))
    call_command("seed_demo_menus", "--reset", "--password", "s3cret", stdout=StringIO())
    users = User.objects.filter(email__startswith="demo-")
    assert users.count() == 4
    assert not old & set(users.values_list("id", flat=True))
    assert users.first().check_password("s3cret")
    assert Menu.objects.count() == 4


@pytest.mark.django_db
def test_seed_demo_menus_translations():
    call_command("seed_demo_menus", stdout=StringIO())
    menu = Menu.objects.get(owner__email="demo-italian@menucraft.com")
    assert menu.languages == ["en", "it"]
    assert menu.order_config == {"enabled": True, "type": "phone", "value": "+1-555-BELLA-01"}
    assert [c.name for c in menu.categories.order_by("sort_order")] == ["Antipasti", "Primi", "Secondi", "Dolci", "Beverages"]

    primi = menu.categories.get(name="Primi")
    vongole = Item.objects.get(category__menu=menu, name="Linguine alle Vongole")
    assert menu.translations["en"][str(primi.id)]["name"] == "First Courses"
    assert menu.translations["it"][str(primi.id)]["name"] == "Primi Piatti"
    assert menu.translations["en"][str(vongole.id)]["name"] == "Linguine with Clams"
    # every category and item of the menu is translated in both languages
    ids = {str(pk) for pk in menu.categories.values_list("id", flat=True)}
    ids |= {str(pk) for pk in Item.objects.filter(category__menu=menu).values_list("id", flat=True)}
    assert set(menu.translations["en"]) == ids
    assert set(menu.translations["it"]) == ids


@pytest.mark.django_db
def test_seed_default_menu_sort_positions():
    user = User.objects.create_user(username="u_seed", email="seed@example.com", password="x")
    menu = seed_default_menu(user)
    for category in menu.categories.all():
        assert list(category.items.order_by("sort_order").values_list("sort_order", flat=True)) == [0, 1]
