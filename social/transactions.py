"""Run a unit of work atomically, retrying on concurrent write conflicts."""

import logging
import random
import time

from django.conf import settings
from django.db import IntegrityError, OperationalError, transaction

from social.errors import Transient

logger = logging.getLogger(__name__)

DEFAULT_RETRIES = 5
BACKOFF_BASE_SECONDS = 0.02


def _max_attempts():
    return max(1, int(getattr(settings, "SOCIAL_TRANSACTION_RETRIES", DEFAULT_RETRIES)))


def _backoff(attempt):
    time.sleep(BACKOFF_BASE_SECONDS * attempt * (1 + random.random()))


def run_in_transaction(fn, *args, **kwargs):
    """
    Call `fn(*args, **kwargs)` inside `transaction.atomic()`.

    A lock conflict (`OperationalError`) or a racing insert of the same unique
    row (`IntegrityError`) rolls the attempt back and runs `fn` again from the
    start, so every read is repeated against the winner's committed state.
    Once the budget is spent the caller gets `Transient`.
    """
    attempts = _max_attempts()
    for attempt in range(1, attempts + 1):
        try:
            with transaction.atomic():
                return fn(*args, **kwargs)
        except (OperationalError, IntegrityError) as exc:
            if attempt == attempts:
                logger.warning("Transaction %s gave up after %s attempts: %s", _name(fn), attempts, exc)
                raise Transient("TRANSACTION_CONFLICT") from exc
            logger.debug("Transaction %s conflicted (attempt %s): %s", _name(fn), attempt, exc)
            _backoff(attempt)


def _name(fn):
    return getattr(fn, "__qualname__", repr(fn))
