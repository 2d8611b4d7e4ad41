"""Outbound email collaborator, delivered only after the causing transaction commits."""

import logging
from functools import partial

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction

logger = logging.getLogger(__name__)


def _deliver(to, subject, body):
    sent = send_mail(subject, body, getattr(settings, "DEFAULT_FROM_EMAIL", None), [to])
    logger.debug("Email %r to %s sent=%s", subject, to, sent)
    return sent


def send_email(to, subject, body):
    """Queue an email for `to`; a delivery failure is logged and never undoes the write."""
    if not to:
        logger.debug("Skipping email %r: recipient has no address", subject)
        return
    transaction.on_commit(partial(_deliver, to, subject, body), robust=True)
