# ---- stdlib -----------------------------------------------------------------
import logging

# ---- Django ------------------------------------------------------------------
from django.conf import settings
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.db.models import Count, Exists, F, OuterRef
from django.shortcuts import render, redirect
from django.views.decorators.http import require_http_methods, require_POST

# ---- App models & forms ------------------------------------------------------
from .exceptions import AppError
from .forms import CommentForm
from .helpers import admin_required, redirect_back
from .models import Category, Comment, Favorite, Like, Restaurant

# ---- Logging -----------------------------------------------------------------
logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================

def _with_user_flags(qs, user):
    """Annotate `is_favorited` / `is_liked` for the signed-in user."""
    return qs.annotate(
        is_favorited=Exists(Favorite.objects.filter(user=user, restaurant=OuterRef("pk"))),
        is_liked=Exists(Like.objects.filter(user=user, restaurant=OuterRef("pk"))),
    )


def _get_restaurant_or_error(pk) -> Restaurant:
    restaurant = Restaurant.objects.filter(pk=pk).first()
    if restaurant is None:
        raise AppError("Restaurant didn't exist!")
    return restaurant


# =============================================================================
# Restaurants (front side)
# =============================================================================

@login_required
def restaurants(request):
    """
    Paginated restaurant list, optionally filtered by ?category=<id>.
    A page number past the end falls back to the last page.
    """
    category_id = request.GET.get("category") or ""
    qs = Restaurant.objects.select_related("category")
    if category_id.isdigit():
        qs = qs.filter(category_id=int(category_id))
    else:
        category_id = ""

    paginator = Paginator(_with_user_flags(qs, request.user), settings.RESTAURANTS_PER_PAGE)
    page = paginator.get_page(request.GET.get("page"))

    return render(
        request,
        "restaurants/index.html",
        {
            "page": page,
            "restaurants": page.object_list,
            "categories": Category.objects.all(),
            "category_id": category_id,
        },
    )


@login_required
def restaurant_detail(request, pk: int):
    restaurant = _get_restaurant_or_error(pk)
    Restaurant.objects.filter(pk=restaurant.pk).update(view_counts=F("view_counts") + 1)

    restaurant = (
        _with_user_flags(Restaurant.objects.select_related("category"), request.user)
        .get(pk=restaurant.pk)
    )
    comments = restaurant.comments.select_related("user")
    return render(
        request,
        "restaurants/detail.html",
        {
            "restaurant": restaurant,
            "comments": comments,
            "form": CommentForm(),
        },
    )


@login_required
def restaurant_dashboard(request, pk: int):
    restaurant = (
        Restaurant.objects.select_related("category")
        .annotate(
            comment_count=Count("comments", distinct=True),
            favorite_count=Count("favorites", distinct=True),
        )
        .filter(pk=pk)
        .first()
    )
    if restaurant is None:
        raise AppError("Restaurant didn't exist!")
    return render(request, "restaurants/dashboard.html", {"restaurant": restaurant})


@login_required
def feeds(request):
    latest_restaurants = Restaurant.objects.select_related("category").order_by("-created_at", "-id")[:10]
    latest_comments = Comment.objects.select_related("user", "restaurant").order_by("-created_at", "-id")[:10]
    return render(
        request,
        "restaurants/feeds.html",
        {"restaurants": latest_restaurants, "comments": latest_comments},
    )


@login_required
def top_restaurants(request):
    top = (
        _with_user_flags(Restaurant.objects.all(), request.user)
        .annotate(favorited_count=Count("favorited_users", distinct=True))
        .order_by("-favorited_count", "id")[:10]
    )
    return render(request, "restaurants/top.html", {"restaurants": top})


# =============================================================================
# Comments
# =============================================================================

@require_POST
@login_required
def post_comment(request):
    text = (request.POST.get("text") or "").strip()
    if not text:
        raise AppError("Comment text is required!")

    restaurant_id = (request.POST.get("restaurant_id") or "").strip()
    if not restaurant_id.isdigit():
        raise AppError("Restaurant didn't exist!")
    restaurant = _get_restaurant_or_error(int(restaurant_id))
    Comment.objects.create(user=request.user, restaurant=restaurant, text=text)
    return redirect("core:restaurant_detail", pk=restaurant.pk)


@admin_required
@require_http_methods(["DELETE"])
def delete_comment(request, pk: int):
    comment = Comment.objects.filter(pk=pk).first()
    if comment is None:
        raise AppError("Comment didn't exist!")

    restaurant_id = comment.restaurant_id
    comment.delete()
    logger.info("Comment %s removed by %s", pk, request.user.email)
    messages.success(request, "Comment deleted.")
    return redirect("core:restaurant_detail", pk=restaurant_id)


# =============================================================================
# Favorites & likes
# =============================================================================

@login_required
@require_http_methods(["POST", "DELETE"])
def favorite(request, restaurant_id: int):
    if request.method == "DELETE":
        return remove_favorite(request, restaurant_id)
    return add_favorite(request, restaurant_id)


def add_favorite(request, restaurant_id: int):
    restaurant = Restaurant.objects.filter(pk=restaurant_id).first()
    existing = Favorite.objects.filter(user=request.user, restaurant_id=restaurant_id).first()
    if restaurant is None:
        raise AppError("Restaurant didn't exist!")
    if existing:
        raise AppError("You have favorited this restaurant!")

    Favorite.objects.create(user=request.user, restaurant=restaurant)
    return redirect_back(request)


def remove_favorite(request, restaurant_id: int):
    existing = Favorite.objects.filter(user=request.user, restaurant_id=restaurant_id).first()
    if existing is None:
        raise AppError("You haven't favorited this restaurant")

    existing.delete()
    return redirect_back(request)


@login_required
@require_http_methods(["POST", "DELETE"])
def like(request, restaurant_id: int):
    if request.method == "DELETE":
        return remove_like(request, restaurant_id)
    return add_like(request, restaurant_id)


def add_like(request, restaurant_id: int):
    restaurant = Restaurant.objects.filter(pk=restaurant_id).first()
    existing = Like.objects.filter(user=request.user, restaurant_id=restaurant_id).first()
    if restaurant is None:
        raise AppError("Restaurant didn't exist!")
    if existing:
        raise AppError("You have liked this restaurant!")

    Like.objects.create(user=request.user, restaurant=restaurant)
    return redirect_back(request)


def remove_like(request, restaurant_id: int):
    existing = Like.objects.filter(user=request.user, restaurant_id=restaurant_id).first()
    if existing is None:
        raise AppError("You haven't liked this restaurant")

    existing.delete()
    return redirect_back(request)
