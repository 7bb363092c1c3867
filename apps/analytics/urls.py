from django.urls import path
from . import views


app_name = "analytics"

urlpatterns = [
    path("analytics", views.summary, name="summary"),
    path("analytics/track", views.track, name="track"),
]
