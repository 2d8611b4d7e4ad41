"""Directed block edge; read as a symmetric denial between the two users."""

from __future__ import annotations
from django.conf import settings
from django.db import models
from django.db.models import Q, F


class Block(models.Model):
    """Row written by the blocker; only the blocker may remove it."""
    blocker = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blocks_made",
        db_column="blocker_uid",
    )
    blocked = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="blocks_received",
        db_column="blocked_uid",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """One row per ordered pair, never self-referential."""
        db_table = "blocks"
        constraints = [
            models.UniqueConstraint(fields=["blocker", "blocked"], name="uniq_blocks_blocker_blocked"),
            models.CheckConstraint(condition=~Q(blocker=F("blocked")), name="chk_blocks_not_self"),
        ]
        indexes = [
            models.Index(fields=["blocked"], name="blocks_blocked_idx"),
        ]

    def __str__(self) -> str:
        return f"Block({self.blocker_id} -> {self.blocked_id})"
