"""Creator-only profile data: verification state and payout onboarding status."""

from django.conf import settings
from django.db import models


class CreatorProfile(models.Model):
    """Verification lifecycle for creators: unverified -> pending -> verified|rejected."""
    VERIFICATION_UNVERIFIED = "unverified"
    VERIFICATION_PENDING = "pending"
    VERIFICATION_VERIFIED = "verified"
    VERIFICATION_REJECTED = "rejected"

    VERIFICATION_STATUSES = [
        (VERIFICATION_UNVERIFIED, "Unverified"),
        (VERIFICATION_PENDING, "Pending"),
        (VERIFICATION_VERIFIED, "Verified"),
        (VERIFICATION_REJECTED, "Rejected"),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="creator_profile",
        db_column="uid",
    )
    verification_status = models.CharField(
        max_length=20, choices=VERIFICATION_STATUSES, default=VERIFICATION_UNVERIFIED
    )
    evidence_paths = models.JSONField(default=list, blank=True)
    verification_notes = models.TextField(blank=True, null=True)
    verification_requested_at = models.DateTimeField(null=True, blank=True)
    verification_reviewed_at = models.DateTimeField(null=True, blank=True)
    verification_reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    # opaque status string returned by the payment provider
    payout_onboarding_status = models.CharField(max_length=40, default="not_started")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "creator_profiles"

    def __str__(self):
        return f"CreatorProfile({self.user_id}, {self.verification_status})"
