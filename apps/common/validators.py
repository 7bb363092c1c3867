from django.conf import settings
from django.core.exceptions import ValidationError
from PIL import Image, UnidentifiedImageError

# Pillow format name -> mime type reported by browsers
_FORMAT_MIME = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
}


def _human_size(n: int) -> str:
    if n >= 1024 * 1024:
        return f"{n // (1024 * 1024)}MB"
    return f"{max(1, n // 1024)}KB"


def validate_max_size(file, max_bytes: int):
    size = getattr(file, "size", 0) or 0
    if size > max_bytes:
        raise ValidationError(f"File exceeds {_human_size(max_bytes)}.")


def validate_mime(file, allowed: set[str]):
    mime = (getattr(file, "content_type", "") or "").lower()
    if not mime.startswith("image/"):
        raise ValidationError("Only image files are allowed.")
    if mime not in allowed:
        raise ValidationError("Image type not allowed.")


def sniff_format(file) -> str:
    """Open the file with Pillow and return its mime type from the actual bytes."""
    pos = file.tell()
    try:
        img = Image.open(file)
        fmt = img.format
        img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError):
        raise ValidationError("Corrupted or invalid image.")
    finally:
        file.seek(pos)
    mime = _FORMAT_MIME.get(fmt or "")
    if mime is None:
        raise ValidationError("Invalid image content.")
    return mime


def validate_upload(file) -> str:
    validate_max_size(file, getattr(settings, "MAX_UPLOAD_BYTES", 5 * 1024 * 1024))
    allowed = getattr(settings, "ALLOWED_IMAGE_MIME_TYPES", set(_FORMAT_MIME.values()))
    validate_mime(file, allowed)
    mime = sniff_format(file)
    if mime not in allowed:
        raise ValidationError("Image type not allowed.")
    return mime
