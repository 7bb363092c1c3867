from __future__ import annotations

import logging
import uuid

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.menus.services import seed_default_menu

log = logging.getLogger(__name__)
User = get_user_model()

# profile payload key -> model field
PROFILE_FIELDS = {
    "restaurantName": "restaurant_name",
    "hours": "hours",
    "location": "location",
    "phone": "phone",
}


@transaction.atomic
def register_user(*, email: str, password: str, restaurant_name: str = "") -> User:
    """Create the account and its starter menu in one transaction."""
    user = User(
        username=f"u_{uuid.uuid4().hex[:12]}",
        email=email,
        restaurant_name=restaurant_name or "",
    )
    user.set_password(password)
    user.save()
    seed_default_menu(user)
    log.info("[accounts] user registered user_id=%s", user.id)
    return user


def authenticate_email(email: str, password: str) -> User | None:
    user = User.objects.filter(email__iexact=email, is_active=True).first()
    if not user or not user.check_password(password):
        return None
    return user


def update_profile(user: User, changes: dict) -> User:
    fields = []
    for key, value in changes.items():
        attr = PROFILE_FIELDS.get(key)
        if attr is None:
            continue
        setattr(user, attr, (value or "").strip())
        fields.append(attr)
    if fields:
        user.save(update_fields=fields + ["updated_at"])
    return user
