from django.urls import path
from . import views, views_public


app_name = "menus"

urlpatterns = [
    path("menus", views.menus, name="menus"),
    path("menus/<uuid:menu_id>", views.menu_detail, name="menu_detail"),
    path("menus/<uuid:menu_id>/categories", views.menu_categories, name="menu_categories"),
    path("menus/<uuid:menu_id>/reorder-categories", views.reorder_categories, name="reorder_categories"),
    path("menus/<uuid:menu_id>/specials", views.menu_specials, name="menu_specials"),
    path("menus/<uuid:menu_id>/qr", views.menu_qr, name="menu_qr"),
    path("menus/<uuid:menu_id>/qr-card", views.menu_qr_card, name="menu_qr_card"),
    path("categories/<uuid:category_id>", views.category_detail, name="category_detail"),
    path("categories/<uuid:category_id>/items", views.category_items, name="category_items"),
    path("categories/<uuid:category_id>/reorder-items", views.reorder_items, name="reorder_items"),
    path("items/<uuid:item_id>", views.item_detail, name="item_detail"),
    path("items/<uuid:item_id>/duplicate", views.item_duplicate, name="item_duplicate"),
    path("public/menu/<slug:slug>", views_public.public_menu, name="public_menu"),
]
