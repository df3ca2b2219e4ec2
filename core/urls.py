"""Root URL configuration.

All API routes live under /api/; each app contributes its own `api/urls.py`.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("common.api.urls")),
    path("api/", include("offers.api.urls")),
    path("api/", include("problems.api.urls")),
    path("api/", include("products.api.urls")),
    path("api/", include("tasks.api.urls")),
    path("api/", include("inventory.api.urls")),
    path("api/", include("ai_assist.api.urls")),
]
