from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin
from django.utils.translation import gettext_lazy as _


User = get_user_model()


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ("email", "restaurant_name", "plan", "is_staff", "created_at")
    list_filter = ("plan", "is_staff", "is_active")
    search_fields = ("email", "restaurant_name", "username")
    ordering = ("email",)
    readonly_fields = ("stripe_customer_id",)

    fieldsets = DjangoUserAdmin.fieldsets + (
        (
            _("Restaurant"),
            {"fields": ("restaurant_name", "hours", "location", "phone")},
        ),
        (
            _("Billing"),
            {"fields": ("plan", "stripe_customer_id")},
        ),
    )

    add_fieldsets = DjangoUserAdmin.add_fieldsets + (
        (
            _("Restaurant"),
            {"classes": ("wide",), "fields": ("email", "restaurant_name", "plan")},
        ),
    )
