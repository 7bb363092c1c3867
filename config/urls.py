from django.contrib import admin
from django.http import HttpResponse
from django.urls import path, include
from apps.media import urls as media_urls

urlpatterns = [
    path("admin/", admin.site.urls),
    path("img/", include((media_urls, "media"), namespace="media")),
    path("api/auth/", include("apps.accounts.urls")),
    path("api/", include("apps.menus.urls")),
    path("api/", include("apps.analytics.urls")),
    path("api/", include("apps.billing.urls")),
    path("api/", include("apps.media.api_urls")),
    path("stripe/", include("apps.billing.webhooks")),  # /stripe/webhook/
    # Healthcheck endpoint
    path("healthz", lambda _request: HttpResponse("ok")),
]

# JSON error handlers
handler404 = "config.views_errors.handler404"
handler500 = "config.views_errors.handler500"
