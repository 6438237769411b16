"""
Admin panel: restaurant CRUD and user permission management.

Every view here requires `is_admin`; Django's own admin site at
/django-admin/ is a separate, staff-only tool.
"""

import logging

from django.conf import settings
from django.contrib import messages
from django.contrib.auth import get_user_model
from django.shortcuts import render, redirect
from django.views.decorators.http import require_http_methods

from .exceptions import AppError
from .forms import RestaurantForm
from .helpers import admin_required, first_form_error
from .models import Restaurant
from .services.uploads import image_file_handler

logger = logging.getLogger(__name__)


def _get_restaurant_or_error(pk) -> Restaurant:
    restaurant = Restaurant.objects.select_related("category").filter(pk=pk).first()
    if restaurant is None:
        raise AppError("Restaurant didn't exist!")
    return restaurant


def _require_name(request) -> None:
    if not (request.POST.get("name") or "").strip():
        raise AppError("Restaurant name is required!")


# =============================================================================
# Restaurants
# =============================================================================

@admin_required
@require_http_methods(["GET", "POST"])
def restaurants(request):
    """GET lists every restaurant; POST creates one."""
    if request.method == "POST":
        return post_restaurant(request)
    items = Restaurant.objects.select_related("category")
    return render(request, "panel/restaurants.html", {"restaurants": items})


@admin_required
def create_restaurant(request):
    return render(request, "panel/restaurant_form.html", {"form": RestaurantForm()})


def post_restaurant(request):
    _require_name(request)
    form = RestaurantForm(request.POST, request.FILES)
    if not form.is_valid():
        raise AppError(first_form_error(form))

    file_path = image_file_handler(request.FILES.get("image"))
    restaurant = form.save(commit=False)
    restaurant.image = file_path or ""
    restaurant.save()

    logger.info("Restaurant %s created by %s", restaurant.pk, request.user.email)
    messages.success(request, "Restaurant was successfully created.")
    return redirect("panel:restaurants")


@admin_required
@require_http_methods(["GET", "PUT", "DELETE"])
def restaurant_detail(request, pk: int):
    """GET shows one restaurant; PUT updates it; DELETE removes it."""
    if request.method == "PUT":
        return put_restaurant(request, pk)
    if request.method == "DELETE":
        return delete_restaurant(request, pk)
    return render(request, "panel/restaurant.html", {"restaurant": _get_restaurant_or_error(pk)})


@admin_required
def edit_restaurant(request, pk: int):
    restaurant = _get_restaurant_or_error(pk)
    return render(
        request,
        "panel/restaurant_form.html",
        {"form": RestaurantForm(instance=restaurant), "restaurant": restaurant},
    )


def put_restaurant(request, pk: int):
    _require_name(request)
    restaurant = _get_restaurant_or_error(pk)

    form = RestaurantForm(request.POST, request.FILES, instance=restaurant)
    if not form.is_valid():
        raise AppError(first_form_error(form))

    file_path = image_file_handler(request.FILES.get("image"))
    restaurant = form.save(commit=False)
    restaurant.image = file_path or restaurant.image
    restaurant.save()

    messages.success(request, "Restaurant was successfully updated.")
    return redirect("panel:restaurants")


def delete_restaurant(request, pk: int):
    restaurant = _get_restaurant_or_error(pk)
    restaurant.delete()
    logger.info("Restaurant %s deleted by %s", pk, request.user.email)
    messages.success(request, "Restaurant was deleted.")
    return redirect("panel:restaurants")


# =============================================================================
# Users
# =============================================================================

@admin_required
def users(request):
    return render(request, "panel/users.html", {"users": get_user_model().objects.all()})


@admin_required
@require_http_methods(["PATCH"])
def patch_user(request, pk: int):
    """Toggle a user's admin flag. The root admin's flag is fixed."""
    user = get_user_model().objects.filter(pk=pk).first()
    if user is None:
        raise AppError("User didn't exist!")
    if user.email == settings.ROOT_ADMIN_EMAIL.lower():
        raise AppError("Changing the root admin's permission is not allowed!")

    user.is_admin = not user.is_admin
    user.save(update_fields=["is_admin"])

    logger.info("User %s is_admin=%s (by %s)", user.email, user.is_admin, request.user.email)
    messages.success(request, "User permission was successfully updated.")
    return redirect("panel:users")
