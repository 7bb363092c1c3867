"""JSON API plumbing shared by every app: errors, body parsing, view decorators."""

from __future__ import annotations

import json
import logging
from functools import wraps
from typing import Any

from django.http import Http404, HttpRequest, JsonResponse, QueryDict
from django.http.response import HttpResponseBase

log = logging.getLogger(__name__)


class ApiError(Exception):
    """Error that maps one-to-one onto a JSON error response."""

    status = 400
    message = "Bad request"

    def __init__(self, message: str | None = None, *, fields: dict[str, list[str]] | None = None):
        self.message = message or self.message
        self.fields = fields or {}
        super().__init__(self.message)

    def as_response(self) -> JsonResponse:
        body: dict[str, Any] = {"error": self.message}
        if self.fields:
            body["fields"] = self.fields
        return JsonResponse(body, status=self.status)


class ValidationFailed(ApiError):
    status = 400
    message = "Invalid input"


class NotAuthenticated(ApiError):
    status = 401
    message = "Not authenticated"


class NotFound(ApiError):
    status = 404
    message = "Not found"


class TooManyRequests(ApiError):
    status = 429
    message = "Too many attempts. Try again in a few seconds."


def parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Return the request body as a dict; form-encoded bodies are accepted too."""
    content_type = (request.content_type or "").lower()
    if content_type in {"application/x-www-form-urlencoded", "multipart/form-data"}:
        if request.method == "POST":
            return request.POST.dict()
        # django only fills request.POST for POST
        if content_type == "multipart/form-data":
            raise ValidationFailed("Multipart bodies are only accepted on POST")
        return QueryDict(request.body, encoding=request.encoding).dict()
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationFailed("Malformed JSON body")
    if not isinstance(data, dict):
        raise ValidationFailed("Expected a JSON object")
    return data


def form_errors(form) -> dict[str, list[str]]:
    return {field: [str(e) for e in errors] for field, errors in form.errors.items()}


def validate_form(form_class, data: dict[str, Any], **kwargs) -> dict[str, Any]:
    """Bind `data` to `form_class` and return cleaned data or raise ValidationFailed."""
    form = form_class(data=data, **kwargs)
    if not form.is_valid():
        fields = form_errors(form)
        first = next(iter(fields.values()), ["Invalid input"])[0]
        raise ValidationFailed(first, fields=fields)
    return form.cleaned_data


def validate_patch(form_class, data: dict[str, Any], **kwargs) -> dict[str, Any]:
    """Like validate_form, but keeps only the keys actually sent by the client."""
    cleaned = validate_form(form_class, data, **kwargs)
    return {key: value for key, value in cleaned.items() if key in data}


def json_view(view):
    """Serialize dict results and turn errors into JSON bodies.

    ApiError keeps its status, Http404 becomes a plain 404 and anything else
    is logged and answered with a generic 500.
    """

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            result = view(request, *args, **kwargs)
        except ApiError as exc:
            return exc.as_response()
        except Http404:
            return JsonResponse({"error": "Not found"}, status=404)
        except Exception:
            log.exception("Unhandled error in %s %s", request.method, request.path)
            return JsonResponse({"error": "Server error"}, status=500)
        if isinstance(result, HttpResponseBase):
            return result
        return JsonResponse(result)

    return wrapper


def api_login_required(view):
    """401 JSON instead of the login redirect of django's login_required."""

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return NotAuthenticated().as_response()
        return view(request, *args, **kwargs)

    return wrapper
