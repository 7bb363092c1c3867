from django.contrib import admin

from .models import Category, DailySpecial, Item, Menu


class CategoryInline(admin.TabularInline):
    model = Category
    extra = 0
    fields = ("name", "sort_order")


@admin.register(Menu)
class MenuAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "owner", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "slug", "owner__email")
    inlines = [CategoryInline]


class ItemInline(admin.TabularInline):
    model = Item
    extra = 0
    fields = ("name", "price", "is_available", "is_featured", "sort_order")


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "menu", "sort_order")
    search_fields = ("name", "menu__name")
    inlines = [ItemInline]


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "price", "is_available", "is_featured", "sort_order")
    list_filter = ("is_available", "is_featured")
    search_fields = ("name", "category__name", "category__menu__name")


@admin.register(DailySpecial)
class DailySpecialAdmin(admin.ModelAdmin):
    list_display = ("menu", "updated_at")
