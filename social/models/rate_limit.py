"""Per-user, per-action request counters bucketed by minute or day."""

from django.db import models


class RateLimitBucket(models.Model):
    """Counter row keyed by `<action>:<uid>:<bucket>`."""
    key = models.CharField(max_length=200, unique=True)
    uid = models.CharField(max_length=128)
    action = models.CharField(max_length=60)
    window = models.CharField(max_length=10)
    bucket = models.CharField(max_length=40)
    count = models.PositiveIntegerField(default=0)
    reset_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "rate_limits"

    def __str__(self):
        return f"RateLimitBucket({self.key}={self.count})"
