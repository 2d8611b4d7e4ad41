"""Marketplace dispute raised by a contract party and resolved by an admin."""

from django.conf import settings
from django.db import models

from social.utils.uuid import uuid7_or_4


class Dispute(models.Model):
    """Dispute state machine: open -> under_review -> resolved."""
    STATUS_OPEN = "open"
    STATUS_UNDER_REVIEW = "under_review"
    STATUS_RESOLVED = "resolved"

    STATUSES = [
        (STATUS_OPEN, "Open"),
        (STATUS_UNDER_REVIEW, "Under review"),
        (STATUS_RESOLVED, "Resolved"),
    ]

    OUTCOME_REFUND = "resolved_refund"
    OUTCOME_NO_REFUND = "resolved_no_refund"
    OUTCOME_PARTIAL_REFUND = "resolved_partial_refund"

    OUTCOMES = [
        (OUTCOME_REFUND, "Full refund"),
        (OUTCOME_NO_REFUND, "No refund"),
        (OUTCOME_PARTIAL_REFUND, "Partial refund"),
    ]

    REASONS = [
        ("non_delivery", "Non delivery"),
        ("wrong_music", "Wrong music"),
        ("missing_disclosure", "Missing disclosure"),
        ("late_post", "Late post"),
        ("quality_issue", "Quality issue"),
        ("other", "Other"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid7_or_4, editable=False)
    contract = models.ForeignKey(
        "social.Contract",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="disputes",
    )
    artist = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="artist_disputes",
        db_column="artist_uid",
    )
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="creator_disputes",
        db_column="creator_uid",
    )
    opened_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
    )
    reason_code = models.CharField(max_length=40, choices=REASONS)
    description = models.TextField(max_length=2000)
    evidence_paths = models.JSONField(default=list, blank=True)
    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_OPEN)

    outcome = models.CharField(max_length=40, choices=OUTCOMES, blank=True, null=True)
    refund_cents = models.PositiveIntegerField(default=0)
    resolution_notes = models.TextField(blank=True, null=True)
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
        db_table = "disputes"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Dispute({self.id}, {self.status})"

    def is_party(self, user):
        return user is not None and user.pk in (self.artist_id, self.creator_id)
