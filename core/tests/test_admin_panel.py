import os
import shutil
import tempfile
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse

from core.models import Category, Restaurant

User = get_user_model()


def _messages(resp):
    return [str(m) for m in get_messages(resp.wsgi_request)]


class AdminPanelPermissionTests(TestCase):
    def test_regular_user_is_turned_away(self):
        user = User.objects.create_user(email="user@example.com", password="x")
        self.client.force_login(user)
        resp = self.client.get(reverse("panel:restaurants"))
        self.assertEqual(resp["Location"], "/")
        self.assertIn("Permission denied!", _messages(resp))

    def test_anonymous_goes_to_signin(self):
        resp = self.client.get(reverse("panel:users"))
        self.assertEqual(resp.status_code, 302)
        self.assertIn("/signin/", resp["Location"])

    def test_index_requires_admin(self):
        resp = self.client.get("/admin/")
        self.assertEqual(resp.status_code, 302)
        self.assertIn("/signin/", resp["Location"])

        user = User.objects.create_user(email="user@example.com", password="x")
        self.client.force_login(user)
        resp = self.client.get("/admin/")
        self.assertEqual(resp["Location"], "/")
        self.assertIn("Permission denied!", _messages(resp))

    def test_index_redirects_to_restaurants(self):
        admin = User.objects.create_user(email="boss@example.com", password="x", is_admin=True)
        self.client.force_login(admin)
        resp = self.client.get("/admin/")
        self.assertRedirects(resp, reverse("panel:restaurants"))


class AdminRestaurantTests(TestCase):
    def setUp(self):
        self.admin = User.objects.create_user(email="boss@example.com", password="x", is_admin=True)
        self.client.force_login(self.admin)
        self.category = Category.objects.create(name="Seafood")

    def test_list_and_create_page(self):
        Restaurant.objects.create(name="Oyster Bar", category=self.category)
        resp = self.client.get(reverse("panel:restaurants"))
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "Oyster Bar")
        self.assertContains(resp, "Seafood")

        resp = self.client.get(reverse("panel:create_restaurant"))
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "New Restaurant")

    @patch("core.admin_views.image_file_handler", return_value="https://i.imgur.com/fish.jpg")
    def test_post_restaurant(self, mock_handler):
        resp = self.client.post(
            reverse("panel:restaurants"),
            {
                "name": "Crab Shack",
                "category": self.category.pk,
                "tel": "02-5555",
                "address": "Harbor 1",
                "opening_hours": "10:00",
                "description": "Fresh crab",
            },
        )
        self.assertRedirects(resp, reverse("panel:restaurants"))
        r = Restaurant.objects.get(name="Crab Shack")
        self.assertEqual(r.category, self.category)
        self.assertEqual(r.image, "https://i.imgur.com/fish.jpg")
        self.assertIn("Restaurant was successfully created.", _messages(resp))

    def test_post_restaurant_requires_name(self):
        resp = self.client.post(reverse("panel:restaurants"), {"name": "  ", "tel": "1"})
        self.assertIn("Restaurant name is required!", _messages(resp))
        self.assertFalse(Restaurant.objects.exists())

    def test_show_and_edit_pages(self):
        r = Restaurant.objects.create(name="Lobster Lab", opening_hours="11:00")
        resp = self.client.get(reverse("panel:restaurant_detail", args=[r.pk]))
        self.assertContains(resp, "Lobster Lab")
        self.assertContains(resp, "11:00")

        resp = self.client.get(reverse("panel:edit_restaurant", args=[r.pk]))
        self.assertContains(resp, "Edit Restaurant")
        self.assertContains(resp, 'value="PUT"')

    def test_show_missing(self):
        resp = self.client.get(reverse("panel:restaurant_detail", args=[9999]))
        self.assertIn("Restaurant didn't exist!", _messages(resp))

    def test_put_restaurant_keeps_image_without_upload(self):
        r = Restaurant.objects.create(name="Old Name", image="https://i.imgur.com/keep.jpg")
        resp = self.client.post(
            reverse("panel:restaurant_detail", args=[r.pk]),
            {"_method": "PUT", "name": "New Name", "description": "Updated"},
        )
        self.assertRedirects(resp, reverse("panel:restaurants"))
        r.refresh_from_db()
        self.assertEqual(r.name, "New Name")
        self.assertEqual(r.description, "Updated")
        self.assertEqual(r.image, "https://i.imgur.com/keep.jpg")

    def test_edit_missing_restaurant(self):
        resp = self.client.get(reverse("panel:edit_restaurant", args=[9999]))
        self.assertEqual(resp.status_code, 302)
        self.assertIn("Restaurant didn't exist!", _messages(resp))

    def test_put_restaurant_requires_name(self):
        r = Restaurant.objects.create(name="Keep Me")
        resp = self.client.post(
            reverse("panel:restaurant_detail", args=[r.pk]),
            {"_method": "PUT", "name": "   "},
        )
        self.assertIn("Restaurant name is required!", _messages(resp))
        r.refresh_from_db()
        self.assertEqual(r.name, "Keep Me")

    def test_put_missing_restaurant(self):
        resp = self.client.post(
            reverse("panel:restaurant_detail", args=[9999]),
            {"_method": "PUT", "name": "Ghost"},
        )
        self.assertIn("Restaurant didn't exist!", _messages(resp))

    def test_delete_restaurant(self):
        r = Restaurant.objects.create(name="Gone Soon")
        resp = self.client.post(reverse("panel:restaurant_detail", args=[r.pk]), {"_method": "DELETE"})
        self.assertRedirects(resp, reverse("panel:restaurants"))
        self.assertFalse(Restaurant.objects.exists())

    def test_delete_missing_restaurant(self):
        resp = self.client.post(reverse("panel:restaurant_detail", args=[9999]), {"_method": "DELETE"})
        self.assertIn("Restaurant didn't exist!", _messages(resp))


class AdminRestaurantUploadTests(TestCase):
    """Photos sent as real multipart uploads land in the media storage."""

    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        overrides = override_settings(IMGUR_CLIENT_ID=None, MEDIA_ROOT=self.media_root)
        overrides.enable()
        self.addCleanup(overrides.disable)
        self.addCleanup(shutil.rmtree, self.media_root, ignore_errors=True)

        self.admin = User.objects.create_user(email="boss@example.com", password="x", is_admin=True)
        self.client.force_login(self.admin)

    def _photo(self):
        return SimpleUploadedFile("front.png", b"\x89PNG fake", content_type="image/png")

    def test_post_restaurant_stores_photo(self):
        resp = self.client.post(reverse("panel:restaurants"), {"name": "Photo Diner", "image": self._photo()})
        self.assertRedirects(resp, reverse("panel:restaurants"))
        r = Restaurant.objects.get(name="Photo Diner")
        self.assertTrue(r.image.startswith("/media/uploads/"))
        self.assertTrue(r.image.endswith(".png"))

    def test_put_restaurant_replaces_photo(self):
        r = Restaurant.objects.create(name="Photo Diner", image="https://i.imgur.com/old.jpg")
        resp = self.client.post(
            reverse("panel:restaurant_detail", args=[r.pk]),
            {"_method": "PUT", "name": "Photo Diner", "image": self._photo()},
        )
        self.assertRedirects(resp, reverse("panel:restaurants"))
        r.refresh_from_db()
        self.assertTrue(r.image.startswith("/media/uploads/"))
        self.assertTrue(os.path.exists(os.path.join(self.media_root, r.image[len("/media/"):])))


@override_settings(ROOT_ADMIN_EMAIL="root@example.com")
class AdminUserTests(TestCase):
    def setUp(self):
        self.root = User.objects.create_superuser(email="root@example.com", password="x")
        self.user = User.objects.create_user(email="user@example.com", password="x", name="Plain")
        self.client.force_login(self.root)

    def test_user_list(self):
        resp = self.client.get(reverse("panel:users"))
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "user@example.com")
        self.assertContains(resp, "set as admin")

    def test_patch_toggles_admin_flag(self):
        url = reverse("panel:patch_user", args=[self.user.pk])
        resp = self.client.post(url, {"_method": "PATCH"})
        self.assertRedirects(resp, reverse("panel:users"))
        self.user.refresh_from_db()
        self.assertTrue(self.user.is_admin)

        self.client.post(url, {"_method": "PATCH"})
        self.user.refresh_from_db()
        self.assertFalse(self.user.is_admin)

    def test_root_admin_cannot_be_changed(self):
        resp = self.client.post(reverse("panel:patch_user", args=[self.root.pk]), {"_method": "PATCH"})
        self.assertIn("Changing the root admin's permission is not allowed!", _messages(resp))
        self.root.refresh_from_db()
        self.assertTrue(self.root.is_admin)

    def test_patch_missing_user(self):
        resp = self.client.post(reverse("panel:patch_user", args=[9999]), {"_method": "PATCH"})
        self.assertIn("User didn't exist!", _messages(resp))

    def test_plain_post_is_not_allowed(self):
        resp = self.client.post(reverse("panel:patch_user", args=[self.user.pk]))
        self.assertEqual(resp.status_code, 405)
