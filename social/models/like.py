"""Model representing a user's like on a post."""

from django.conf import settings
from django.db import models
from .post import Post


class Like(models.Model):
    """User like on a post; its existence is the source of truth for like_count."""
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        db_column="uid",
        related_name="likes",
    )

    post = models.ForeignKey(
        Post,
        on_delete=models.CASCADE,
        db_column="post_id",
        related_name="likes",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Enforce one like per user/post pair."""
        db_table = "likes"
        constraints = [
            models.UniqueConstraint(fields=["post", "user"], name="uniq_likes_post_user"),
        ]

    def __str__(self):
        """Readable representation for admin/debugging."""
        return f"{self.user_id} → {self.post_id}"
