"""WSGI entry point for CareSpring."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "carespring.settings")

application = get_wsgi_application()
