"""Per-user request counters in minute and day buckets."""

import logging
from datetime import timedelta

from django.conf import settings
from django.utils import timezone

from social.errors import ResourceExhausted
from social.models import RateLimitBucket
from social.transactions import run_in_transaction

logger = logging.getLogger(__name__)

WINDOW_MINUTE = "minute"
WINDOW_DAY = "day"

DEFAULT_LIMITS = {
    "requestFollow": {WINDOW_DAY: 10},
    "createPost": {WINDOW_MINUTE: 3, WINDOW_DAY: 20},
    "createComment": {WINDOW_MINUTE: 10, WINDOW_DAY: 200},
    "toggleLike": {WINDOW_MINUTE: 30},
    "createMessage": {WINDOW_MINUTE: 20, WINDOW_DAY: 500},
    "reportPost": {WINDOW_DAY: 50},
    "reportComment": {WINDOW_DAY: 100},
    "reportUser": {WINDOW_DAY: 50},
    "openDispute": {WINDOW_DAY: 10},
}


def limits_for(action):
    configured = getattr(settings, "SOCIAL_RATE_LIMITS", None)
    if configured is not None and action in configured:
        return configured[action] or {}
    return DEFAULT_LIMITS.get(action, {})


def bucket_for(window, now):
    """Return (bucket label, reset time) for `now` in the given window."""
    if window == WINDOW_MINUTE:
        start = now.replace(second=0, microsecond=0)
        return start.strftime("%Y%m%d%H%M"), start + timedelta(minutes=1)
    if window == WINDOW_DAY:
        start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        return start.strftime("%Y%m%d"), start + timedelta(days=1)
    raise ValueError(f"Unknown rate limit window: {window}")


def enforce_rate_limit(user, action, limits=None, now=None):
    """Count one call of `action` by `user`; raise `ResourceExhausted` when any window is full."""
    limits = limits_for(action) if limits is None else limits
    if not limits:
        return
    run_in_transaction(_consume, user.username, action, limits, now or timezone.now())


def _consume(uid, action, limits, now):
    for window, limit in limits.items():
        bucket, reset_at = bucket_for(window, now)
        row, _ = RateLimitBucket.objects.select_for_update().get_or_create(
            key=f"{action}:{uid}:{window}:{bucket}",
            defaults={"uid": uid, "action": action, "window": window, "bucket": bucket, "reset_at": reset_at},
        )
        if row.count >= limit:
            logger.info("Rate limit hit: %s by %s (%s/%s)", action, uid, limit, window)
            raise ResourceExhausted("RATE_LIMITED")
        row.count += 1
        row.save(update_fields=["count", "updated_at"])
