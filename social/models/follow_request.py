"""Model capturing follow requests and their decision state."""

from django.conf import settings
from django.db import models
from django.db.models import Q, F


class FollowRequest(models.Model):
    """Ask from `from_user` to follow `to_user`; auto-approved for public accounts."""
    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
    ]

    from_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="follow_requests_sent",
        db_column="from_uid",
    )
    to_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="follow_requests_received",
        db_column="to_uid",
    )
    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    decided_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        """At most one live (non-rejected) request per ordered pair."""
        db_table = "follow_requests"
        constraints = [
            models.UniqueConstraint(
                fields=["from_user", "to_user"],
                condition=~Q(status="rejected"),
                name="uniq_follow_requests_live_pair",
            ),
            models.CheckConstraint(
                condition=~Q(from_user=F("to_user")),
                name="chk_follow_requests_not_self",
            ),
        ]

    def __str__(self) -> str:
        """Readable summary of the follow request and status."""
        return f"FollowRequest({self.from_user_id} -> {self.to_user_id}, {self.status})"
