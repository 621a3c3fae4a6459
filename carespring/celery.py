"""
Celery app: runs form notifications and the registration workflow call
outside the request cycle. Settings are read from Django (CELERY_* keys).
"""

import os
from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "carespring.settings")

app = Celery("carespring")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()
