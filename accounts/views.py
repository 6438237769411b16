# ---- stdlib -----------------------------------------------------------------
import logging

# ---- Django ------------------------------------------------------------------
from django.contrib import messages
from django.contrib.auth import authenticate, login, logout
from django.contrib.auth.decorators import login_required
from django.db.models import Count, Exists, OuterRef
from django.shortcuts import render, redirect
from django.views.decorators.http import require_http_methods

# ---- App models & forms ------------------------------------------------------
from core.exceptions import AppError
from core.helpers import first_form_error, redirect_back
from core.models import Restaurant
from core.services.uploads import image_file_handler

from .forms import ProfileForm, SignInForm, SignUpForm
from .models import Followship, User

logger = logging.getLogger(__name__)


# =============================================================================
# Sign up / sign in / logout
# =============================================================================

@require_http_methods(["GET", "POST"])
def signup(request):
    if request.method == "GET":
        return render(request, "signup.html", {"form": SignUpForm()})

    form = SignUpForm(request.POST)
    if request.POST.get("password") != request.POST.get("password_check"):
        raise AppError("Passwords do not match!")
    if not form.is_valid():
        raise AppError(first_form_error(form))

    email = form.cleaned_data["email"].lower()
    if User.objects.filter(email__iexact=email).exists():
        raise AppError("Email already exists!")

    user = User.objects.create_user(
        email=email,
        password=form.cleaned_data["password"],
        name=form.cleaned_data["name"],
    )
    logger.info("New account %s", user.email)
    messages.success(request, "Account created! Please sign in.")
    return redirect("accounts:signin")


@require_http_methods(["GET", "POST"])
def signin(request):
    if request.method == "GET":
        if request.user.is_authenticated:
            return redirect("core:restaurants")
        return render(request, "signin.html", {"form": SignInForm()})

    user = authenticate(
        request,
        email=(request.POST.get("email") or "").strip(),
        password=request.POST.get("password") or "",
    )
    if user is None:
        messages.error(request, "Incorrect email or password!")
        return redirect("accounts:signin")

    login(request, user)
    messages.success(request, "Signed in successfully!")
    return redirect("core:restaurants")


def logout_view(request):
    logout(request)
    # logout() flushes the session, so the message goes in afterwards
    messages.success(request, "Signed out successfully!")
    return redirect("accounts:signin")


# =============================================================================
# Profiles
# =============================================================================

def _get_user_or_error(pk) -> User:
    user = User.objects.filter(pk=pk).first()
    if user is None:
        raise AppError("User didn't exist!")
    return user


def _ensure_own_profile(request, user: User) -> None:
    if user.pk != request.user.pk:
        raise AppError("You can only edit your own profile!")


@login_required
@require_http_methods(["GET", "PUT"])
def user_detail(request, pk: int):
    """GET renders a profile; PUT (via _method) updates it."""
    if request.method == "PUT":
        return put_user(request, pk)
    return get_user(request, pk)


def get_user(request, pk: int):
    user = (
        User.objects.filter(pk=pk)
        .prefetch_related("favorited_restaurants", "followings", "followers")
        .first()
    )
    if user is None:
        raise AppError("User didn't exist!")

    commented_restaurants = Restaurant.objects.filter(comments__user=user).distinct()
    return render(
        request,
        "users/profile.html",
        {
            "profile": user,
            "commented_restaurants": commented_restaurants,
            "is_followed": request.user.followings.filter(pk=user.pk).exists(),
        },
    )


@login_required
def edit_user(request, pk: int):
    user = _get_user_or_error(pk)
    _ensure_own_profile(request, user)
    return render(request, "users/edit.html", {"profile": user, "form": ProfileForm(instance=user)})


def put_user(request, pk: int):
    name = (request.POST.get("name") or "").strip()
    if not name:
        raise AppError("User name is required!")

    user = _get_user_or_error(pk)
    _ensure_own_profile(request, user)

    form = ProfileForm(request.POST, request.FILES, instance=user)
    if not form.is_valid():
        raise AppError(first_form_error(form))

    file_path = image_file_handler(request.FILES.get("image"))
    user = form.save(commit=False)
    user.image = file_path or user.image
    user.save(update_fields=["name", "image"])

    messages.success(request, "Profile updated.")
    return redirect("accounts:user_detail", pk=user.pk)


# =============================================================================
# Follow graph
# =============================================================================

@login_required
def top_users(request):
    """Every user with their follower count, most followed first."""
    users = (
        User.objects.annotate(
            follower_count=Count("followers", distinct=True),
            is_followed=Exists(
                Followship.objects.filter(follower=request.user, following=OuterRef("pk"))
            ),
        )
        .order_by("-follower_count", "id")
    )
    return render(request, "top-users.html", {"users": users})


@login_required
@require_http_methods(["POST", "DELETE"])
def following(request, user_id: int):
    if request.method == "DELETE":
        return remove_following(request, user_id)
    return add_following(request, user_id)


def add_following(request, user_id: int):
    user = User.objects.filter(pk=user_id).first()
    followship = Followship.objects.filter(follower=request.user, following_id=user_id).first()
    if user is None:
        raise AppError("User didn't exist!")
    if user.pk == request.user.pk:
        raise AppError("You can't follow yourself!")
    if followship:
        raise AppError("You are already following this user!")

    Followship.objects.create(follower=request.user, following=user)
    return redirect_back(request)


def remove_following(request, user_id: int):
    followship = Followship.objects.filter(follower=request.user, following_id=user_id).first()
    if followship is None:
        raise AppError("You haven't followed this user!")

    followship.delete()
    return redirect_back(request)
