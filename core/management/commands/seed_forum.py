"""Populate a fresh database with demo users, categories and restaurants."""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from core.models import Category, Comment, Restaurant

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "12345678"

CATEGORIES = ["中式料理", "日本料理", "義大利料理", "墨西哥料理", "素食料理", "美式料理", "複合式料理"]

USERS = [
    ("user1@example.com", "user1"),
    ("user2@example.com", "user2"),
]

STREETS = ["Zhongshan Rd.", "Minsheng E. Rd.", "Xinyi Rd.", "Heping W. Rd.", "Roosevelt Rd."]


class Command(BaseCommand):
    help = "Create the root admin, demo users, categories, restaurants and comments (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--restaurants", type=int, default=50,
            help="How many restaurants to make sure exist (default 50).",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        User = get_user_model()

        root, created = User.objects.get_or_create(
            email=settings.ROOT_ADMIN_EMAIL,
            defaults={"name": "root", "is_admin": True, "is_staff": True, "is_superuser": True},
        )
        if created:
            root.set_password(DEFAULT_PASSWORD)
            root.save()

        users = [root]
        for email, name in USERS:
            user, created = User.objects.get_or_create(email=email, defaults={"name": name})
            if created:
                user.set_password(DEFAULT_PASSWORD)
                user.save()
            users.append(user)

        categories = [Category.objects.get_or_create(name=n)[0] for n in CATEGORIES]

        wanted = max(options["restaurants"], 0)
        existing = Restaurant.objects.count()
        new = []
        for i in range(existing, wanted):
            new.append(Restaurant(
                name=f"Restaurant {i + 1}",
                tel=f"02-{2000 + i:04d}-{(i * 37) % 10000:04d}",
                address=f"No. {i + 1}, {STREETS[i % len(STREETS)]}, Taipei",
                opening_hours=f"{8 + i % 4:02d}:00",
                description=f"House specials and seasonal dishes, menu #{i + 1}.",
                category=categories[i % len(categories)],
            ))
        Restaurant.objects.bulk_create(new)

        if not Comment.objects.exists():
            restaurants = list(Restaurant.objects.order_by("id")[:len(users) * 2])
            Comment.objects.bulk_create([
                Comment(user=users[i % len(users)], restaurant=r, text=f"Great food at {r.name}!")
                for i, r in enumerate(restaurants)
            ])

        logger.info("Seeded %s users, %s restaurants", len(users), Restaurant.objects.count())
        self.stdout.write(self.style.SUCCESS(
            f"Seed complete: {User.objects.count()} users, "
            f"{Category.objects.count()} categories, {Restaurant.objects.count()} restaurants."
        ))
