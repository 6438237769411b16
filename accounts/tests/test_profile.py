import os
import shutil
import tempfile
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase, override_settings
from django.urls import reverse

from core.models import Comment, Favorite, Restaurant
from accounts.models import Followship

User = get_user_model()


def _messages(resp):
    return [str(m) for m in get_messages(resp.wsgi_request)]


class ProfileViewTests(TestCase):
    def setUp(self):
        self.me = User.objects.create_user(email="me@example.com", password="x", name="Me")
        self.other = User.objects.create_user(email="other@example.com", password="x", name="Other")
        self.client.force_login(self.me)

    def test_profile_lists_related_records(self):
        pasta = Restaurant.objects.create(name="Pasta Place")
        sushi = Restaurant.objects.create(name="Sushi Bar")
        Comment.objects.create(user=self.other, restaurant=pasta, text="good")
        Comment.objects.create(user=self.other, restaurant=pasta, text="again")
        Favorite.objects.create(user=self.other, restaurant=sushi)
        Followship.objects.create(follower=self.me, following=self.other)

        resp = self.client.get(reverse("accounts:user_detail", args=[self.other.pk]))
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "Other")
        self.assertContains(resp, "Pasta Place")
        self.assertContains(resp, "Sushi Bar")
        # commented restaurants are distinct
        self.assertEqual(list(resp.context["commented_restaurants"]), [pasta])
        self.assertTrue(resp.context["is_followed"])
        self.assertContains(resp, "Unfollow")

    def test_missing_user_profile_fails(self):
        resp = self.client.get(
            reverse("accounts:user_detail", args=[9999]),
            HTTP_REFERER="http://testserver/restaurants/",
        )
        self.assertEqual(resp["Location"], "http://testserver/restaurants/")
        self.assertIn("User didn't exist!", _messages(resp))

    def test_edit_own_profile_page(self):
        resp = self.client.get(reverse("accounts:edit_user", args=[self.me.pk]))
        self.assertEqual(resp.status_code, 200)
        self.assertContains(resp, "Edit Profile")

    def test_cannot_edit_someone_else(self):
        resp = self.client.get(reverse("accounts:edit_user", args=[self.other.pk]))
        self.assertEqual(resp.status_code, 302)
        self.assertIn("You can only edit your own profile!", _messages(resp))

    def test_put_user_updates_name_and_keeps_image(self):
        self.me.image = "https://i.imgur.com/old.jpg"
        self.me.save()
        resp = self.client.post(
            reverse("accounts:user_detail", args=[self.me.pk]),
            {"_method": "PUT", "name": "New Name"},
        )
        self.assertRedirects(resp, reverse("accounts:user_detail", args=[self.me.pk]))
        self.me.refresh_from_db()
        self.assertEqual(self.me.name, "New Name")
        self.assertEqual(self.me.image, "https://i.imgur.com/old.jpg")

    @patch("accounts.views.image_file_handler", return_value="https://i.imgur.com/new.jpg")
    def test_put_user_passes_avatar_to_handler(self, mock_handler):
        avatar = SimpleUploadedFile("me.png", b"\x89PNG fake", content_type="image/png")
        resp = self.client.post(
            reverse("accounts:user_detail", args=[self.me.pk]),
            {"_method": "PUT", "name": "Me", "image": avatar},
        )
        self.assertEqual(resp.status_code, 302)
        mock_handler.assert_called_once()
        sent = mock_handler.call_args.args[0]
        self.assertEqual(sent.name, "me.png")
        self.me.refresh_from_db()
        self.assertEqual(self.me.image, "https://i.imgur.com/new.jpg")

    def test_put_user_stores_uploaded_avatar(self):
        media_root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, media_root, ignore_errors=True)
        avatar = SimpleUploadedFile("me.png", b"\x89PNG fake", content_type="image/png")

        with override_settings(IMGUR_CLIENT_ID=None, MEDIA_ROOT=media_root):
            resp = self.client.post(
                reverse("accounts:user_detail", args=[self.me.pk]),
                {"_method": "PUT", "name": "Me Again", "image": avatar},
            )

        self.assertRedirects(resp, reverse("accounts:user_detail", args=[self.me.pk]))
        self.assertIn("Profile updated.", _messages(resp))
        self.me.refresh_from_db()
        self.assertEqual(self.me.name, "Me Again")
        self.assertTrue(self.me.image.startswith("/media/uploads/"))
        self.assertTrue(self.me.image.endswith(".png"))
        self.assertTrue(os.path.exists(os.path.join(media_root, self.me.image[len("/media/"):])))

    def test_cannot_put_someone_else(self):
        resp = self.client.post(
            reverse("accounts:user_detail", args=[self.other.pk]),
            {"_method": "PUT", "name": "Hijacked"},
        )
        self.assertEqual(resp.status_code, 302)
        self.assertIn("You can only edit your own profile!", _messages(resp))
        self.other.refresh_from_db()
        self.assertEqual(self.other.name, "Other")

    def test_edit_missing_user(self):
        resp = self.client.get(reverse("accounts:edit_user", args=[9999]))
        self.assertEqual(resp.status_code, 302)
        self.assertIn("User didn't exist!", _messages(resp))

    def test_put_user_requires_name(self):
        resp = self.client.post(
            reverse("accounts:user_detail", args=[self.me.pk]),
            {"_method": "PUT", "name": "   "},
        )
        self.assertIn("User name is required!", _messages(resp))
        self.me.refresh_from_db()
        self.assertEqual(self.me.name, "Me")

    def test_put_missing_user(self):
        resp = self.client.post(
            reverse("accounts:user_detail", args=[9999]),
            {"_method": "PUT", "name": "Ghost"},
        )
        self.assertIn("User didn't exist!", _messages(resp))

    def test_plain_post_to_profile_is_not_allowed(self):
        resp = self.client.post(reverse("accounts:user_detail", args=[self.me.pk]), {"name": "x"})
        self.assertEqual(resp.status_code, 405)
