import logging
import mimetypes

from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage
from django.http import FileResponse, Http404
from django.urls import reverse
from django.views.decorators.http import require_POST

from apps.common.http import ValidationFailed, api_login_required, json_view
from apps.common.images import process_upload
from apps.common.validators import validate_upload

log = logging.getLogger(__name__)


@require_POST
@json_view
@api_login_required
def upload(request):
    """Store an image for menus/items and return its public URL."""
    img = request.FILES.get("image")
    if img is None:
        raise ValidationFailed("No file uploaded", fields={"image": ["This field is required."]})
    try:
        validate_upload(img)
    except ValidationError as e:
        raise ValidationFailed(e.messages[0], fields={"image": e.messages})
    path = process_upload(request.user.id, img)
    log.info("[media] upload stored user_id=%s path=%s", request.user.id, path)
    return {"url": reverse("media:image_public", args=[path])}


def image_public(request, path: str):
    # Only allow files under our upload prefix
    if not path.startswith("u/") or ".." in path.split("/"):
        raise Http404
    if not default_storage.exists(path):
        raise Http404
    f = default_storage.open(path, "rb")
    ctype, _ = mimetypes.guess_type(path)
    resp = FileResponse(f, content_type=ctype or "application/octet-stream")
    resp["Cache-Control"] = "public, max-age=31536000, immutable"
    return resp
