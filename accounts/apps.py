from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """Django app configuration for the Accounts app.

    Owns the custom user model, sign-up/sign-in and the follow graph.
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"
