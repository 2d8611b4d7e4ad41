"""Model for user comments on posts (one level of replies)."""

from django.conf import settings
from django.db import models

from social.utils.uuid import uuid7_or_4
from .post import Post


class Comment(models.Model):
    """User-authored comment on a post, optionally replying to a top-level comment."""
    id = models.UUIDField(primary_key=True, default=uuid7_or_4, editable=False)

    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        db_column="post_id",
        related_name="comments",
    )

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        db_column="author_uid",
        related_name="comments",
    )

    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        db_column="parent_comment_id",
        related_name="replies",
    )

    body = models.TextField(max_length=1000)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """DB table name and ordering for comments."""
        db_table = "comments"
        ordering = ["created_at"]

    def __str__(self):
        """Readable identifier for admin/debugging."""
        return f"Comment by {self.author_id} on {self.post_id}"
