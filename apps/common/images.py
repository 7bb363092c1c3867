import io
import hashlib
from datetime import datetime, timezone
from PIL import Image, ImageOps
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

MAX_WIDTH = 1600


def sanitize(img: Image.Image) -> Image.Image:
    # Drop EXIF and apply its orientation
    img = ImageOps.exif_transpose(img)
    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA" if "transparency" in img.info else "RGB")
    return img


def contain(img: Image.Image, max_w: int) -> Image.Image:
    w, h = img.size
    if w <= max_w:
        return img
    ratio = max_w / float(w)
    return img.resize((max_w, int(h * ratio)), Image.Resampling.LANCZOS)


def content_hash(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def build_upload_base(user_id, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    y, m, d = now.strftime("%Y %m %d").split()
    return f"u/{user_id}/{y}/{m}/{d}/uploads"


def encode(img: Image.Image) -> tuple[bytes, str]:
    """JPEG for opaque images, PNG when there is an alpha channel."""
    bio = io.BytesIO()
    if img.mode == "RGBA":
        img.save(bio, format="PNG", optimize=True)
        return bio.getvalue(), "png"
    img.save(bio, format="JPEG", optimize=True, progressive=True, quality=82)
    return bio.getvalue(), "jpg"


def process_upload(user_id, file_obj, now: datetime | None = None) -> str:
    """Re-encode an uploaded image and store it; returns the storage path."""
    img = sanitize(Image.open(file_obj))
    data, ext = encode(contain(img, MAX_WIDTH))
    path = f"{build_upload_base(user_id, now)}/img-{content_hash(data)[:16]}.{ext}"
    if not default_storage.exists(path):
        path = default_storage.save(path, ContentFile(data))
    return path
