from django.conf import settings
from django.db import models

from social.utils.uuid import uuid7_or_4

"""
Post model

A Post is the unit of social content an artist or creator publishes.

- `visibility` decides which viewers may read it (public / followers / private).
- `media` is a JSON list of `{"assetId", "path", "kind"}` entries pointing at
  stored uploads; media is fetched through the same checks as the post.
- `like_count` / `comment_count` are denormalized counters. They are only ever
  changed by the counter primitive, inside the transaction that creates or
  removes the like/comment row.
- `deleted_at` soft-deletes the post. Posts are never hard-deleted while
  comments or likes reference them; a deleted post is invisible to everyone
  except admins.
"""


class Post(models.Model):
    VISIBILITY_PUBLIC = "public"
    VISIBILITY_FOLLOWERS = "followers"
    VISIBILITY_PRIVATE = "private"

    VISIBILITY_CHOICES = [
        (VISIBILITY_PUBLIC, "Public"),
        (VISIBILITY_FOLLOWERS, "Followers only"),
        (VISIBILITY_PRIVATE, "Only me"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid7_or_4, editable=False)

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="posts",
        db_column="author_uid",
    )

    caption = models.TextField(max_length=2000)
    tags = models.JSONField(default=list, blank=True)
    media = models.JSONField(default=list, blank=True)

    visibility = models.CharField(
        max_length=20,
        choices=VISIBILITY_CHOICES,
        default=VISIBILITY_PUBLIC,
    )

    like_count = models.PositiveIntegerField(default=0)
    comment_count = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)
    deleted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        db_table = "posts"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["author", "created_at"], name="posts_author_created_idx"),
        ]

    def __str__(self):
        return f"Post({self.id}) by {self.author_id}"

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def media_asset(self, asset_id):
        """Return the media entry with the given asset id, or None."""
        for item in self.media or []:
            if str(item.get("assetId")) == str(asset_id):
                return item
        return None
