"""
User accounts and the follow graph between them.

Notes:
- Email is the login identifier; there is no username.
- `followings` runs through Followship (follower -> following); the reverse
  accessor `followers` gives the users following someone.
"""

from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models


class UserManager(BaseUserManager):
    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Users must have an email address.")
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_admin", True)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        return self.create_user(email, password, **extra_fields)

    def get_by_natural_key(self, email):
        # sign-in matches the address case-insensitively
        return self.get(email__iexact=email)


class User(AbstractUser):
    """
    A forum member. `is_admin` grants the restaurant admin panel and is
    independent from Django's `is_staff` (Django admin site access).
    """
    username = None
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=100, blank=True)
    image = models.CharField(
        max_length=255, blank=True,
        help_text="Avatar URL (Imgur link or storage URL).",
    )
    is_admin = models.BooleanField(default=False)

    followings = models.ManyToManyField(
        "self",
        through="Followship",
        through_fields=("follower", "following"),
        symmetrical=False,
        related_name="followers",
        blank=True,
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name or self.email


class Followship(models.Model):
    """A directed follow edge: `follower` follows `following`."""
    follower = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="outgoing_followships",
    )
    following = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="incoming_followships",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["follower", "following"], name="uniq_followship_pair",
            )
        ]

    def __str__(self) -> str:
        return f"{self.follower} → {self.following}"
