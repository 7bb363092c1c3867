import logging

import stripe
from django.conf import settings
from django.http import HttpResponse, HttpResponseBadRequest
from django.urls import path
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from . import services

log = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def webhook(request):
    payload = request.body
    sig_header = request.META.get("HTTP_STRIPE_SIGNATURE")
    try:
        event = stripe.Webhook.construct_event(
            payload=payload, sig_header=sig_header, secret=settings.STRIPE_WEBHOOK_SECRET
        )
    except Exception as e:
        log.warning("[billing] rejected webhook: %s", e)
        return HttpResponseBadRequest(str(e))

    obj = event["data"]["object"]
    if event["type"] == "checkout.session.completed":
        services.apply_checkout_completed(obj)
    elif event["type"] == "customer.subscription.deleted":
        services.apply_subscription_deleted(obj)

    return HttpResponse("ok")

urlpatterns = [
    path("webhook/", webhook, name="stripe_webhook"),
]
