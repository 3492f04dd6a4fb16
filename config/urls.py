"""URL configuration for the facility booking service.

Routes the Django admin, the versioned API of each domain app and the
OpenAPI schema with its interactive docs.
"""
from django.contrib import admin  # type: ignore
from django.urls import include, path  # type: ignore
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView  # type: ignore

# API versioning. v1 is our initial version; future versions can be added here.

urlpatterns = [
    path("admin/", admin.site.urls),
    # Application URLs
    path("api/v1/", include("apps.bookings.urls")),
    path("api/v1/", include("apps.catalog.urls")),
    path("api/v1/", include("apps.pricing.urls")),
    # API schema and docs
    path("api/v1/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/v1/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="docs"),
]
