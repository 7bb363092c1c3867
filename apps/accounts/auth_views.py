from __future__ import annotations

import logging

from django.contrib.auth import login as auth_login, logout as auth_logout
from django.http import HttpRequest
from django.views.decorators.http import require_http_methods, require_POST

from apps.common.http import (
    NotAuthenticated,
    TooManyRequests,
    api_login_required,
    json_view,
    parse_json_body,
    validate_form,
    validate_patch,
)
from apps.common.rate_limit import client_ip, rate_limit
from .forms import LoginForm, ProfileForm, SignupForm
from .serializers import serialize_user
from . import services

logger = logging.getLogger(__name__)


def _throttle(request: HttpRequest, namespace: str, limit: int = 20, window_seconds: int = 60) -> None:
    rl = rate_limit(namespace, client_ip(request), limit=limit, window_seconds=window_seconds)
    if not rl.allowed:
        raise TooManyRequests()


@require_POST
@json_view
def signup(request: HttpRequest):
    _throttle(request, "signup")
    data = validate_form(SignupForm, parse_json_body(request))
    user = services.register_user(
        email=data["email"],
        password=data["password"],
        restaurant_name=data.get("restaurantName", ""),
    )
    auth_login(request, user)
    return {"success": True, "user": serialize_user(user)}


@require_POST
@json_view
def login(request: HttpRequest):
    _throttle(request, "login")
    data = validate_form(LoginForm, parse_json_body(request))
    user = services.authenticate_email(data["email"], data["password"])
    if user is None:
        logger.warning("Login failed for email=%s from ip=%s", data["email"], client_ip(request))
        raise NotAuthenticated("Invalid credentials")
    auth_login(request, user)
    return {"success": True, "user": serialize_user(user)}


@require_POST
@json_view
def logout(request: HttpRequest):
    auth_logout(request)
    return {"success": True}


@require_http_methods(["GET"])
@json_view
@api_login_required
def me(request: HttpRequest):
    return {"user": serialize_user(request.user)}


@require_http_methods(["PUT", "PATCH"])
@json_view
@api_login_required
def profile(request: HttpRequest):
    changes = validate_patch(ProfileForm, parse_json_body(request))
    user = services.update_profile(request.user, changes)
    return {"user": serialize_user(user)}
