from __future__ import annotations

import logging

import stripe
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from apps.common.http import ApiError, ValidationFailed

User = get_user_model()
log = logging.getLogger(__name__)


class CheckoutFailed(ApiError):
    status = 500
    message = "Failed to create checkout session"


def get_plan(plan_key: str) -> dict:
    plan = getattr(settings, "SUBSCRIPTION_PLANS", {}).get(plan_key or "")
    if plan is None:
        raise ValidationFailed("Invalid plan", fields={"plan": ["Unknown plan."]})
    return plan


def get_or_create_stripe_customer(user: User) -> str:
    if not user.stripe_customer_id:
        log.info("[billing] Creating Stripe customer for user_id=%s", user.id)
        customer = stripe.Customer.create(
            email=user.email or None,
            name=user.restaurant_name or user.email,
            metadata={"user_id": str(user.id)},
        )
        user.stripe_customer_id = customer["id"]
        user.save(update_fields=["stripe_customer_id"])
        log.info("[billing] Created Stripe customer id=%s for user_id=%s", user.stripe_customer_id, user.id)
    return user.stripe_customer_id


def create_checkout_session(user: User, plan_key: str):
    """Hosted subscription checkout for one of SUBSCRIPTION_PLANS; returns the Stripe session."""
    plan = get_plan(plan_key)
    base_url = settings.BASE_URL
    try:
        customer_id = get_or_create_stripe_customer(user)
        session = stripe.checkout.Session.create(
            mode="subscription",
            payment_method_types=["card"],
            customer=customer_id,
            client_reference_id=str(user.id),
            line_items=[
                {
                    "price_data": {
                        "currency": settings.DEFAULT_CURRENCY,
                        "product_data": {"name": plan["name"]},
                        "unit_amount": plan["amount"],
                        "recurring": {"interval": plan["interval"]},
                    },
                    "quantity": 1,
                }
            ],
            metadata={"user_id": str(user.id), "plan": plan_key, "tier": plan["tier"]},
            success_url=f"{base_url}/dashboard?upgraded=true",
            cancel_url=f"{base_url}/dashboard?cancelled=true",
        )
    except Exception:
        log.exception("[billing] Checkout session failed user_id=%s plan=%s", user.id, plan_key)
        raise CheckoutFailed()
    log.info("[billing] Checkout session id=%s user_id=%s plan=%s", session["id"], user.id, plan_key)
    return session


def _user_for(obj: dict) -> User | None:
    metadata = obj.get("metadata") or {}
    user_id = metadata.get("user_id") or obj.get("client_reference_id")
    if user_id:
        user = User.objects.filter(id=user_id).first()
        if user:
            return user
    customer = obj.get("customer")
    if customer:
        return User.objects.filter(stripe_customer_id=customer).first()
    return None


@transaction.atomic
def apply_checkout_completed(session: dict) -> User | None:
    """Upgrade the buyer to the tier recorded on the checkout session."""
    user = _user_for(session)
    if user is None:
        log.warning("[billing] checkout.session.completed for unknown user session=%s", session.get("id"))
        return None
    tier = (session.get("metadata") or {}).get("tier")
    if tier not in {User.PLAN_STARTER, User.PLAN_PRO}:
        log.warning("[billing] checkout session %s without a valid tier (%r)", session.get("id"), tier)
        return None
    user.plan = tier
    fields = ["plan"]
    if session.get("customer") and not user.stripe_customer_id:
        user.stripe_customer_id = session["customer"]
        fields.append("stripe_customer_id")
    user.save(update_fields=fields)
    log.info("[billing] user_id=%s upgraded to plan=%s", user.id, tier)
    return user


def apply_subscription_deleted(subscription: dict) -> User | None:
    user = _user_for(subscription)
    if user is None:
        return None
    user.plan = User.PLAN_FREE
    user.save(update_fields=["plan"])
    log.info("[billing] user_id=%s downgraded to free (subscription %s ended)", user.id, subscription.get("id"))
    return user
