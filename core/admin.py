from django.contrib import admin
from .models import Category, Comment, Favorite, Like, Restaurant


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)


@admin.register(Restaurant)
class RestaurantAdmin(admin.ModelAdmin):
    """Admin configuration for Restaurant objects (list/search filters)."""

    list_display = ("name", "category", "tel", "view_counts", "created_at")
    search_fields = ("name", "address")
    list_filter = ("category",)


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ("user", "restaurant", "created_at")
    search_fields = ("text", "user__email", "restaurant__name")
    list_filter = ("created_at",)


@admin.register(Favorite)
class FavoriteAdmin(admin.ModelAdmin):
    list_display = ("user", "restaurant", "created_at")
    search_fields = ("user__email", "restaurant__name")


@admin.register(Like)
class LikeAdmin(admin.ModelAdmin):
    list_display = ("user", "restaurant", "created_at")
    search_fields = ("user__email", "restaurant__name")
