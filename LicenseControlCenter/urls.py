"""
URL configuration for LicenseControlCenter project.

Dashboard resources live under ``/api/``. Installed clients call the
short paths mounted at the root and the ``/api/pos/`` family.
"""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from api.v1.audit.urls import audit_urlpatterns, traffic_urlpatterns
from api.v1.auth.urls import auth_urlpatterns, user_urlpatterns
from api.v1.clinics.urls import subscription_urlpatterns
from api.v1.plans.urls import currency_urlpatterns, plan_urlpatterns, public_plan_urlpatterns
from api.v1.releases.urls import settings_urlpatterns, version_urlpatterns
from api.v1.support.urls import message_urlpatterns, ticket_urlpatterns
from core.views import HealthCacheView, HealthDBView, HealthView, MetricsView, ReadyView

urlpatterns = [
    path("admin/", admin.site.urls),
    # Health check endpoints
    path("health/", HealthView.as_view(), name="health"),
    path("health/db/", HealthDBView.as_view(), name="health-db"),
    path("health/cache/", HealthCacheView.as_view(), name="health-cache"),
    path("ready/", ReadyView.as_view(), name="ready"),
    path("metrics/", MetricsView.as_view(), name="metrics"),
    # Client endpoints
    path("", include("api.v1.client.urls")),
    path("subscription/", include(subscription_urlpatterns)),
    path("api/subscription/", include(subscription_urlpatterns)),
    # Dashboard endpoints
    path("api/auth/", include(auth_urlpatterns)),
    path("api/users/", include(user_urlpatterns)),
    path("api/plans/", include(plan_urlpatterns)),
    path("api/public/plans/", include(public_plan_urlpatterns)),
    path("api/currencies/", include(currency_urlpatterns)),
    path("api/licenses/", include("api.v1.licenses.urls")),
    path("api/clinics/", include("api.v1.clinics.urls")),
    path("api/notifications/", include("api.v1.notifications.urls")),
    path("api/versions/", include(version_urlpatterns)),
    path("api/settings/", include(settings_urlpatterns)),
    path("api/tickets/", include(ticket_urlpatterns)),
    path("api/support/", include(message_urlpatterns)),
    path("api/audit-logs/", include(audit_urlpatterns)),
    path("api/traffic/", include(traffic_urlpatterns)),
    path("api/analytics/", include("api.v1.analytics.urls")),
    # OpenAPI Schema
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    # Swagger UI
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    # ReDoc
    path(
        "api/redoc/",
        SpectacularRedocView.as_view(url_name="schema"),
        name="redoc",
    ),
]
