from functools import wraps

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect
from django.utils.http import url_has_allowed_host_and_scheme


def redirect_back(request, fallback="/"):
    """Redirect to the Referer when it points at this site, else to `fallback`."""
    referer = request.META.get("HTTP_REFERER")
    if referer and url_has_allowed_host_and_scheme(
        referer,
        allowed_hosts={request.get_host()},
        require_https=request.is_secure(),
    ):
        return redirect(referer)
    return redirect(fallback)


def admin_required(view):
    """login_required + the forum's own `is_admin` flag."""

    @login_required
    @wraps(view)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_admin:
            messages.error(request, "Permission denied!")
            return redirect("/")
        return view(request, *args, **kwargs)

    return _wrapped


def first_form_error(form, default="Please correct the errors.") -> str:
    """The first validation message of a bound form, for flashing."""
    for errors in form.errors.values():
        if errors:
            return errors[0]
    return default
