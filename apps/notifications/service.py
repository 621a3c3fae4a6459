"""
Notification service.
Email goes through Django's mail backend (SMTP in production, console in
dev, locmem in tests). Workflow hand-offs are plain JSON POSTs.
"""

import logging
import smtplib

import requests
from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger("carespring.notifications")


class NotificationService:
    """Send emails and workflow hand-offs. Returns a bool; never raises, so callers decide on retries."""

    def __init__(self, timeout=10):
        self.timeout = timeout

    def send_email(self, to: str, subject: str, body: str) -> bool:
        try:
            sent = send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [to], fail_silently=False)
        except (smtplib.SMTPException, OSError) as exc:
            logger.warning("Email to %s failed: %s", to, exc)
            return False
        if sent:
            logger.info("EMAIL → %s | Subject: %s", to, subject)
        return bool(sent)

    def post_workflow(self, url: str, payload: dict) -> bool:
        """POST `payload` as JSON to an automation webhook. True on any 2xx."""
        try:
            resp = requests.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Workflow %s unreachable: %s", url, exc)
            return False
        if resp.ok:
            logger.info("Workflow %s accepted submission", url)
            return True
        logger.warning("Workflow %s returned %s: %s", url, resp.status_code, resp.text[:200])
        return False
