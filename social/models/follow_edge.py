"""Model representing an accepted follower -> followee relationship."""

from __future__ import annotations
from django.conf import settings
from django.db import models
from django.db.models import Q, F


class FollowEdge(models.Model):
    """Accepted follow; its presence drives follower counts and followers-only visibility."""
    follower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="following_edges",  # edges this user created (outbound)
        db_column="follower_uid",
    )
    followee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="follower_edges",  # edges pointing at this user (inbound)
        db_column="followee_uid",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """DB metadata and constraints for follow edges."""
        db_table = "follow_edges"
        constraints = [
            models.UniqueConstraint(fields=["follower", "followee"], name="uniq_follow_edges_pair"),
            models.CheckConstraint(condition=~Q(follower=F("followee")), name="chk_follow_edges_not_self"),
        ]
        indexes = [
            models.Index(fields=["followee"], name="follow_edges_followee_idx"),
        ]

    def __str__(self) -> str:
        """Readable representation for admin/debugging."""
        return f"FollowEdge(follower={self.follower_id}, followee={self.followee_id})"
