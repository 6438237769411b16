from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .forms import AdminUserChangeForm, AdminUserCreationForm
from .models import Followship, User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin configuration for the email-based user model."""

    form = AdminUserChangeForm
    add_form = AdminUserCreationForm
    ordering = ("id",)
    list_display = ("email", "name", "is_admin", "is_staff", "date_joined")
    list_filter = ("is_admin", "is_staff", "is_active")
    search_fields = ("email", "name")
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "image")}),
        ("Permissions", {"fields": ("is_admin", "is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Dates", {"fields": ("last_login", "date_joined")}),
    )
    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "name", "password1", "password2")}),
    )


@admin.register(Followship)
class FollowshipAdmin(admin.ModelAdmin):
    list_display = ("follower", "following", "created_at")
    search_fields = ("follower__email", "following__email")
