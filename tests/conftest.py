import json

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache

from apps.menus.models import Category, Item, Menu


User = get_user_model()


@pytest.fixture(autouse=True)
def _clear_cache():
    # rate-limit counters live in the cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username="u_owner",
        email="owner@example.com",
        password="pwd123",
        restaurant_name="Bella Cucina",
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="u_other", email="other@example.com", password="pwd123")


@pytest.fixture
def auth_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def menu(user):
    menu = Menu.objects.create(owner=user, name="Main Menu", slug="bella-cucina-abc123")
    starters = Category.objects.create(menu=menu, name="Starters", sort_order=0)
    mains = Category.objects.create(menu=menu, name="Mains", sort_order=1)
    Item.objects.create(category=starters, name="Bruschetta", price="8.50", tags=["vegetarian"], sort_order=0)
    Item.objects.create(category=starters, name="Calamari", price="14.00", sort_order=1, is_available=False)
    Item.objects.create(category=mains, name="Tiramisu", price="10.00", tags=["sweet"], sort_order=0)
    return menu


@pytest.fixture
def send_json():
    """client.put/post/... with a JSON body."""

    def _send(client, method, url, data=None, **extra):
        fn = getattr(client, method.lower())
        return fn(url, data=json.dumps(data or {}), content_type="application/json", **extra)

    return _send
