from __future__ import annotations

from typing import Any


def serialize_user(user) -> dict[str, Any]:
    """Public view of a user; never includes the password hash."""
    return {
        "id": str(user.id),
        "email": user.email,
        "restaurant_name": user.restaurant_name,
        "plan": user.plan,
        "hours": user.hours,
        "location": user.location,
        "phone": user.phone,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }
