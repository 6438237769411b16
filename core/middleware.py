"""Request plumbing shared by every view: HTML-form method override and
the flash-and-redirect handling of AppError."""

import logging

from django.contrib import messages

from .exceptions import AppError
from .helpers import redirect_back

logger = logging.getLogger(__name__)

OVERRIDABLE_METHODS = {"PUT", "PATCH", "DELETE"}


class MethodOverrideMiddleware:
    """
    Lets an HTML form reach PUT/PATCH/DELETE routes by posting a hidden
    `_method` field. Only POST requests are rewritten.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.method == "POST":
            # Reading request.POST here parses the body while the method is
            # still POST; the parsed data stays cached on the request.
            override = (request.POST.get("_method") or "").upper()
            if override in OVERRIDABLE_METHODS:
                request.method = override
        return self.get_response(request)


class AppErrorMiddleware:
    """Turns an AppError raised by a view into an error flash + redirect back."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if not isinstance(exception, AppError):
            return None
        logger.warning("%s %s failed: %s", request.method, request.path, exception)
        messages.error(request, str(exception))
        return redirect_back(request)
