"""Public, denormalized projection of a user used for social display."""

from django.conf import settings
from django.db import models
from libgravatar import Gravatar


class PublicProfile(models.Model):
    """Handle, display data, privacy flag and follower counter for a user."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="public_profile",
        db_column="uid",
    )
    handle = models.CharField(max_length=24, unique=True)
    display_name = models.CharField(max_length=60, blank=True, default="")
    bio = models.TextField(max_length=500, blank=True, default="")
    is_private_account = models.BooleanField(default=False)
    follower_count = models.PositiveIntegerField(default=0)
    avatar_asset_id = models.CharField(max_length=200, blank=True, null=True)
    handle_changed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Table name matches the `publicProfiles` collection."""
        db_table = "public_profiles"

    def __str__(self) -> str:
        return f"@{self.handle}"

    @property
    def uid(self) -> str:
        return self.user.username

    def gravatar(self, size=120):
        """Return gravatar URL for the owner's email."""
        return Gravatar(self.user.email or self.user.username).get_image(size=size, default="mp")

    @property
    def avatar_url(self):
        """Uploaded avatar path when present, otherwise a gravatar fallback."""
        if self.avatar_asset_id:
            return self.avatar_asset_id
        return self.gravatar(size=200)
