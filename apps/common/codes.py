import re
import secrets
import string
from typing import Protocol


class _ExistsFunc(Protocol):
    def __call__(self, code: str) -> bool:
        ...


_ALPHABET = string.ascii_lowercase + string.digits
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify_name(value: str, max_length: int = 30) -> str:
    """Lowercase, collapse anything non-alphanumeric to '-', cap the length."""
    base = _NON_ALNUM.sub("-", (value or "").lower()).strip("-")
    return base[:max_length].strip("-") or "menu"


def random_suffix(length: int = 6) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def generate_unique_slug(
    name: str,
    *,
    exists: _ExistsFunc,
    suffix_length: int = 6,
    max_attempts: int = 12,
) -> str:
    """Return `<slugified name>-<random suffix>` that is unique under exists()."""
    base = slugify_name(name)
    for _ in range(max_attempts):
        slug = f"{base}-{random_suffix(suffix_length)}"
        if not exists(slug):
            return slug
    raise RuntimeError("unable to generate unique slug")
