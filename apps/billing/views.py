import logging

from django.conf import settings
from django.views.decorators.csrf import ensure_csrf_cookie
from django.views.decorators.http import require_http_methods, require_POST

from apps.common.http import api_login_required, json_view, parse_json_body
from .services import create_checkout_session

log = logging.getLogger(__name__)


@require_POST
@json_view
@api_login_required
def checkout(request):
    plan = parse_json_body(request).get("plan")
    log.info("[billing] API checkout user_id=%s plan=%s", request.user.id, plan)
    session = create_checkout_session(request.user, plan)
    return {"url": session["url"]}


@ensure_csrf_cookie
@require_http_methods(["GET"])
@json_view
def config(request):
    """Frontend bootstrap; also hands out the CSRF cookie."""
    plans = getattr(settings, "SUBSCRIPTION_PLANS", {})
    return {
        "stripePublishableKey": settings.STRIPE_PUBLISHABLE_KEY,
        "baseUrl": settings.BASE_URL,
        "plans": [
            {"key": key, "name": plan["name"], "amount": plan["amount"], "interval": plan["interval"]}
            for key, plan in plans.items()
        ],
    }
