from django.urls import path
from . import views

app_name = "media"

urlpatterns = [
    path("p/<path:path>", views.image_public, name="image_public"),
]
