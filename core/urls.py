from django.urls import path
from . import views

app_name = "core"

urlpatterns = [
    # Restaurants
    path("restaurants/", views.restaurants, name="restaurants"),
    path("restaurants/feeds/", views.feeds, name="feeds"),
    path("restaurants/top/", views.top_restaurants, name="top_restaurants"),
    path("restaurants/<int:pk>/", views.restaurant_detail, name="restaurant_detail"),
    path("restaurants/<int:pk>/dashboard/", views.restaurant_dashboard, name="restaurant_dashboard"),

    # Comments (POST create, DELETE admin-only)
    path("comments/", views.post_comment, name="post_comment"),
    path("comments/<int:pk>/", views.delete_comment, name="delete_comment"),

    # Favorites / likes (POST add, DELETE remove)
    path("favorite/<int:restaurant_id>/", views.favorite, name="favorite"),
    path("like/<int:restaurant_id>/", views.like, name="like"),
]
