"""
pytest configuration for CareSpring.
Sets Django settings and provides shared fixtures.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.conf import settings


def pytest_configure(config):
    """Configure Django settings before tests run."""
    if not settings.configured:
        settings.configure(
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME":   ":memory:",
                }
            },
            INSTALLED_APPS=[
                "django.contrib.admin",
                "django.contrib.contenttypes",
                "django.contrib.auth",
                "django.contrib.sessions",
                "django.contrib.messages",
                "django.contrib.staticfiles",
                "rest_framework",
                "rest_framework_simplejwt",
                "drf_spectacular",
                "django_filters",
                "corsheaders",
                "apps.payments",
                "apps.donations",
                "apps.outreach",
                "apps.notifications",
                "apps.ops",
            ],
            REST_FRAMEWORK={
                "DEFAULT_AUTHENTICATION_CLASSES": [
                    "rest_framework_simplejwt.authentication.JWTAuthentication",
                ],
                "DEFAULT_PERMISSION_CLASSES": [
                    "rest_framework.permissions.IsAdminUser",
                ],
                "DEFAULT_FILTER_BACKENDS": [
                    "django_filters.rest_framework.DjangoFilterBackend",
                    "rest_framework.filters.OrderingFilter",
                ],
                "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
                "EXCEPTION_HANDLER":    "carespring.exceptions.envelope_exception_handler",
            },
            SPECTACULAR_SETTINGS={
                "TITLE": "CareSpring Foundation API",
                "VERSION": "test",
                "SERVE_INCLUDE_SCHEMA": False,
            },
            SECRET_KEY="test-secret-key-not-for-production",
            DEBUG=True,
            USE_TZ=True,
            TIME_ZONE="Africa/Lagos",
            ROOT_URLCONF="carespring.urls",
            DEFAULT_AUTO_FIELD="django.db.models.BigAutoField",
            TEMPLATES=[{
                "BACKEND": "django.template.backends.django.DjangoTemplates",
                "DIRS": [],
                "APP_DIRS": True,
                "OPTIONS": {
                    "context_processors": [
                        "django.template.context_processors.debug",
                        "django.template.context_processors.request",
                        "django.contrib.auth.context_processors.auth",
                        "django.contrib.messages.context_processors.messages",
                    ],
                },
            }],
            MIDDLEWARE=[
                "django.middleware.security.SecurityMiddleware",
                "corsheaders.middleware.CorsMiddleware",
                "django.contrib.sessions.middleware.SessionMiddleware",
                "django.middleware.common.CommonMiddleware",
                "django.middleware.csrf.CsrfViewMiddleware",
                "django.contrib.auth.middleware.AuthenticationMiddleware",
                "django.contrib.messages.middleware.MessageMiddleware",
            ],
            STATIC_URL="/static/",
            CACHES={
                "default": {
                    "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
                }
            },
            CELERY_TASK_ALWAYS_EAGER=True,   # Execute tasks synchronously in tests
            CELERY_TASK_EAGER_PROPAGATES=False,  # retries run inline instead of raising Retry
            CORS_ALLOW_ALL_ORIGINS=True,
            SIMPLE_JWT={
                "ACCESS_TOKEN_LIFETIME":  timedelta(hours=1),
                "REFRESH_TOKEN_LIFETIME": timedelta(days=1),
                "ALGORITHM": "HS256",
                "AUTH_HEADER_TYPES": ("Bearer",),
            },
            DEFAULT_FROM_EMAIL="CareSpring Foundation <test@localhost>",
            # Gateways mocked; external URLs never reached (requests is patched)
            APP_ENV="test",
            PRODUCTION=False,
            MOCK_PAYMENT=True,
            APP_VERSION="test",
            PAYSTACK_BASE_URL="http://paystack-mock",
            PAYSTACK_SECRET_KEY="sk_test_paystack",
            PAYSTACK_WEBHOOK_SECRET="sk_test_paystack",
            STRIPE_SECRET_KEY="sk_test_stripe",
            PAYMENT_CALLBACK_URL="http://localhost:3001/donate.html",
            PAYMENT_TIMEOUT=5,
            CONTACT_EMAIL="inbox@carespring.test",
            REGISTRATION_WEBHOOK_URL="http://workflow-mock/webhook/registration",
        )

    # Bind shared tasks to the project Celery app (eager in tests)
    import carespring  # noqa: F401


# ═══════════════════════════════════════════════════════════════════════════════
# SHARED FIXTURES
# ═══════════════════════════════════════════════════════════════════════════════

@pytest.fixture
def api_client():
    from rest_framework.test import APIClient
    return APIClient()


@pytest.fixture
def staff_user(db):
    from django.contrib.auth import get_user_model
    return get_user_model().objects.create_user(
        username="admin", email="admin@carespring.test", password="Test@1234", is_staff=True,
    )


@pytest.fixture
def admin_client(api_client, staff_user):
    api_client.force_authenticate(user=staff_user)
    return api_client


@pytest.fixture
def make_donation(db):
    from apps.donations.models import Donation

    def _make(reference, **kwargs):
        defaults = {
            "donor_name":     "Ada Obi",
            "donor_email":    "ada@example.com",
            "amount":         Decimal("5000.00"),
            "currency":       Donation.Currency.NGN,
            "payment_method": Donation.Method.PAYSTACK,
            "payment_status": Donation.Status.PENDING,
        }
        defaults.update(kwargs)
        return Donation.objects.create(reference=reference, **defaults)
    return _make
