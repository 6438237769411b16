from django.urls import path
from . import views

app_name = "accounts"

urlpatterns = [
    # Sign up / sign in
    path("signup/", views.signup, name="signup"),
    path("signin/", views.signin, name="signin"),
    path("logout/", views.logout_view, name="logout"),

    # Profiles (GET show, PUT update)
    path("users/top/", views.top_users, name="top_users"),
    path("users/<int:pk>/", views.user_detail, name="user_detail"),
    path("users/<int:pk>/edit/", views.edit_user, name="edit_user"),

    # Follow graph (POST follow, DELETE unfollow)
    path("following/<int:user_id>/", views.following, name="following"),
]
