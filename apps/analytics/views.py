import logging

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods, require_POST

from apps.common.http import ApiError, api_login_required, json_view, parse_json_body
from apps.menus.selectors import menus_for_owner
from .aggregates import build_summary
from .services import record_event

log = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def track(request: HttpRequest):
    """Beacon endpoint for the public menu page; always answers success."""
    try:
        payload = parse_json_body(request)
    except ApiError:
        log.info("[analytics] unreadable tracking payload")
        payload = {}
    record_event(
        payload,
        user_agent=request.META.get("HTTP_USER_AGENT", ""),
        referrer=request.META.get("HTTP_REFERER", ""),
    )
    return JsonResponse({"success": True})


@require_http_methods(["GET"])
@json_view
@api_login_required
def summary(request: HttpRequest):
    menu_ids = list(menus_for_owner(request.user).values_list("id", flat=True))
    return build_summary(menu_ids, request.GET.get("range"))
