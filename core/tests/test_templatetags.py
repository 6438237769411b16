from django.test import SimpleTestCase

from core.templatetags.forum_extras import PLACEHOLDER_IMAGE, image_or_placeholder


class ImageOrPlaceholderTests(SimpleTestCase):
    def test_keeps_uploaded_image(self):
        self.assertEqual(image_or_placeholder("https://i.imgur.com/a.jpg"), "https://i.imgur.com/a.jpg")

    def test_blank_falls_back(self):
        self.assertEqual(image_or_placeholder(""), PLACEHOLDER_IMAGE)
        self.assertEqual(image_or_placeholder(None), PLACEHOLDER_IMAGE)
