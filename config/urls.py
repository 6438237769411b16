from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include
from django.views.generic import RedirectView

urlpatterns = [
    # Django's own admin site (operators); the forum's admin panel lives at /admin/
    path("django-admin/", admin.site.urls),

    path("admin/", include(("core.admin_urls", "panel"), namespace="panel")),

    path("", include(("accounts.urls", "accounts"), namespace="accounts")),

    # Core app (namespaced)
    path("", include(("core.urls", "core"), namespace="core")),

    path("", RedirectView.as_view(pattern_name="core:restaurants", permanent=False)),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
