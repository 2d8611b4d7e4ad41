"""Model for user-submitted reports against posts, comments or users."""

from django.conf import settings
from django.db import models

from social.utils.uuid import uuid7_or_4


class Report(models.Model):
    """User-submitted report; moves open -> resolved|dismissed by an admin."""
    TARGET_POST = "post"
    TARGET_COMMENT = "comment"
    TARGET_USER = "user"

    TARGET_TYPES = [
        (TARGET_POST, "Post"),
        (TARGET_COMMENT, "Comment"),
        (TARGET_USER, "User"),
    ]

    STATUS_OPEN = "open"
    STATUS_RESOLVED = "resolved"
    STATUS_DISMISSED = "dismissed"

    STATUSES = [
        (STATUS_OPEN, "Open"),
        (STATUS_RESOLVED, "Resolved"),
        (STATUS_DISMISSED, "Dismissed"),
    ]

    REPORT_REASONS = [
        ("spam", "Spam"),
        ("harassment", "Harassment"),
        ("hate", "Hate"),
        ("sexual", "Sexual content"),
        ("copyright", "Copyright"),
        ("impersonation", "Impersonation"),
        ("other", "Other"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid7_or_4, editable=False)

    reporter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="submitted_reports",
        db_column="reporter_uid",
    )
    target_type = models.CharField(max_length=20, choices=TARGET_TYPES)
    # post id, comment id or user uid depending on target_type
    target_id = models.CharField(max_length=128)
    target_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reports_against",
        db_column="target_uid",
    )
    post = models.ForeignKey(
        "social.Post",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reports",
    )
    comment = models.ForeignKey(
        "social.Comment",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="reports",
    )

    reason_code = models.CharField(max_length=50, choices=REPORT_REASONS)
    message = models.TextField(max_length=2000)
    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_OPEN)
    admin_note = models.TextField(blank=True, null=True)
    resolved_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    resolved_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Ordering and table name for reports."""
        db_table = "reports"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="reports_status_created_idx"),
        ]

    def __str__(self):
        """Readable summary of the report target and reporter."""
        return f"Report({self.target_type}:{self.target_id}) by {self.reporter_id}"

    @property
    def is_open(self):
        return self.status == self.STATUS_OPEN
