import base64
import io

import pytest
from django.urls import reverse
from PIL import Image

from apps.menus import qr


@pytest.mark.django_db
def test_qr_endpoint(auth_client, menu):
    r = auth_client.get(reverse("menus:menu_qr", args=[menu.id]))
    assert r.status_code == 200
    body = r.json()
    assert body["url"] == "https://menus.example.com/m/bella-cucina-abc123"
    prefix = "data:image/png;base64,"
    assert body["qr"].startswith(prefix)
    img = Image.open(io.BytesIO(base64.b64decode(body["qr"][len(prefix):])))
    assert img.size == (512, 512)


@pytest.mark.django_db
def test_qr_card_is_png(auth_client, menu):
    r = auth_client.get(reverse("menus:menu_qr_card", args=[menu.id]))
    assert r.status_code == 200
    assert r["Content-Type"] == "image/png"
    assert "menu-bella-cucina-abc123-qr.png" in r["Content-Disposition"]
    img = Image.open(io.BytesIO(r.content))
    assert img.format == "PNG"
    assert img.size == (800, 1100)


@pytest.mark.django_db
def test_qr_requires_ownership(client, menu, other_user):
    client.force_login(other_user)
    assert client.get(reverse("menus:menu_qr", args=[menu.id])).status_code == 404


def test_generate_qr_image_custom_width():
    img = qr.generate_qr_image("https://menus.example.com/m/x", width=300)
    assert img.size == (300, 300)
    # quiet zone stays white
    assert img.getpixel((0, 0)) == (255, 255, 255)
