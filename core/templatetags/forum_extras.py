from django import template

register = template.Library()

PLACEHOLDER_IMAGE = "https://via.placeholder.com/300x200?text=No+Image"


@register.filter
def image_or_placeholder(url):
    """
    Usage: <img src="{{ restaurant.image|image_or_placeholder }}">
    Falls back to a neutral placeholder when no photo was uploaded.
    """
    return url or PLACEHOLDER_IMAGE
