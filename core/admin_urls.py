from django.urls import path
from django.views.generic import RedirectView

from . import admin_views
from .helpers import admin_required

app_name = "panel"

urlpatterns = [
    path(
        "",
        admin_required(RedirectView.as_view(pattern_name="panel:restaurants", permanent=False)),
        name="index",
    ),

    # Users (GET list, PATCH toggles admin)
    path("users/", admin_views.users, name="users"),
    path("users/<int:pk>/", admin_views.patch_user, name="patch_user"),

    # Restaurants (GET list / POST create; GET, PUT, DELETE one)
    path("restaurants/", admin_views.restaurants, name="restaurants"),
    path("restaurants/create/", admin_views.create_restaurant, name="create_restaurant"),
    path("restaurants/<int:pk>/", admin_views.restaurant_detail, name="restaurant_detail"),
    path("restaurants/<int:pk>/edit/", admin_views.edit_restaurant, name="edit_restaurant"),
]
