"""CareSpring root URL configuration."""

from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

urlpatterns = [
    path("admin/", admin.site.urls),

    # OpenAPI / Interactive Docs
    path("api/schema/", SpectacularAPIView.as_view(),       name="schema"),
    path("api/docs/",   SpectacularSwaggerView.as_view(),   name="swagger-ui"),

    # Staff auth (JWT) for the donation dashboard
    path("api/auth/token",         TokenObtainPairView.as_view(), name="token-obtain"),
    path("api/auth/token/refresh", TokenRefreshView.as_view(),    name="token-refresh"),

    # Donations: gateway flow + admin records
    path("api/", include("apps.payments.urls")),
    path("api/", include("apps.donations.urls")),

    # Public forms
    path("api/", include("apps.outreach.urls")),

    # Ops
    path("",     include("apps.ops.urls")),
]
