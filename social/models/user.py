"""Custom user model carrying the marketplace role and account status."""

from django.contrib.auth.models import AbstractUser
from django.db import models


class Role(models.TextChoices):
    """Closed set of marketplace roles."""
    UNASSIGNED = "unassigned", "Unassigned"
    ARTIST = "artist", "Artist"
    CREATOR = "creator", "Creator"
    ADMIN = "admin", "Admin"


class User(AbstractUser):
    """Authenticated identity; `username` stores the identity-provider uid."""

    STATUS_ACTIVE = "active"
    STATUS_SUSPENDED = "suspended"

    STATUSES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_SUSPENDED, "Suspended"),
    ]

    username = models.CharField(max_length=128, unique=True)
    email = models.EmailField(blank=True, default="")
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.UNASSIGNED)
    email_verified = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_ACTIVE)

    class Meta:
        """Table name matches the `users` collection."""
        db_table = "users"
        ordering = ["date_joined", "id"]

    def __str__(self) -> str:
        """Readable summary for admin/debugging."""
        return f"User({self.username}, {self.role})"

    @property
    def uid(self) -> str:
        """Identity-provider uid."""
        return self.username

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_active_account(self) -> bool:
        return self.status == self.STATUS_ACTIVE

    @property
    def has_assigned_role(self) -> bool:
        return bool(self.role) and self.role != Role.UNASSIGNED
