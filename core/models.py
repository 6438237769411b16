"""
Core data models for the restaurant forum.

Notes:
- Favorite and Like are user-restaurant join records; the views refuse a
  second one for the same pair, and a UniqueConstraint backs that up.
- Restaurant exposes both joins as M2M (`favorited_users`, `liked_users`)
  so templates and annotations can count and list them directly.
"""

from django.conf import settings
from django.db import models


class Category(models.Model):
    name = models.CharField(max_length=50, unique=True)

    class Meta:
        ordering = ["id"]
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Restaurant(models.Model):
    """
    A restaurant listed on the forum. `view_counts` is bumped every time the
    public detail page is rendered.
    """
    name = models.CharField(max_length=200)
    tel = models.CharField(max_length=50, blank=True)
    address = models.CharField(max_length=255, blank=True)
    opening_hours = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)
    image = models.CharField(
        max_length=255, blank=True,
        help_text="Photo URL (Imgur link or storage URL).",
    )
    view_counts = models.PositiveIntegerField(default=0)
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True, blank=True,
        related_name="restaurants",
    )

    favorited_users = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="Favorite",
        related_name="favorited_restaurants",
        blank=True,
    )
    liked_users = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="Like",
        related_name="liked_restaurants",
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class Comment(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    restaurant = models.ForeignKey(
        Restaurant, on_delete=models.CASCADE, related_name="comments",
    )
    text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.user} on {self.restaurant}: {self.text[:30]}"


class Favorite(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="favorites",
    )
    restaurant = models.ForeignKey(
        Restaurant, on_delete=models.CASCADE, related_name="favorites",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "restaurant"], name="uniq_favorite_user_restaurant",
            )
        ]

    def __str__(self) -> str:
        return f"{self.user} ♥ {self.restaurant}"


class Like(models.Model):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="likes",
    )
    restaurant = models.ForeignKey(
        Restaurant, on_delete=models.CASCADE, related_name="likes",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["user", "restaurant"], name="uniq_like_user_restaurant",
            )
        ]

    def __str__(self) -> str:
        return f"{self.user} 👍 {self.restaurant}"
