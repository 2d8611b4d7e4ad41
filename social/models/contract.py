"""Minimal marketplace contract between an artist and a creator."""

from django.conf import settings
from django.db import models

from social.utils.uuid import uuid7_or_4


class Contract(models.Model):
    """Agreement a dispute is scoped to; payment details live with the payment provider."""
    STATUS_ACTIVE = "active"
    STATUS_DISPUTED = "disputed"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"

    STATUSES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_DISPUTED, "Disputed"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    PAYMENT_UNPAID = "unpaid"
    PAYMENT_PAID = "paid"
    PAYMENT_REFUNDED = "refunded"
    PAYMENT_PARTIAL_REFUND = "partial_refund"

    PAYMENT_STATUSES = [
        (PAYMENT_UNPAID, "Unpaid"),
        (PAYMENT_PAID, "Paid"),
        (PAYMENT_REFUNDED, "Refunded"),
        (PAYMENT_PARTIAL_REFUND, "Partially refunded"),
    ]

    TRANSFER_NONE = "none"
    TRANSFER_PENDING = "pending"
    TRANSFER_SENT = "sent"
    TRANSFER_FAILED = "failed"

    TRANSFER_STATUSES = [
        (TRANSFER_NONE, "None"),
        (TRANSFER_PENDING, "Pending"),
        (TRANSFER_SENT, "Sent"),
        (TRANSFER_FAILED, "Failed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid7_or_4, editable=False)
    artist = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="artist_contracts",
        db_column="artist_uid",
    )
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="creator_contracts",
        db_column="creator_uid",
    )
    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_ACTIVE)
    total_price_cents = models.PositiveIntegerField(default=0)
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUSES, default=PAYMENT_UNPAID)
    # payout to the creator; once sent, refunds need manual handling
    payout_transfer_status = models.CharField(max_length=20, choices=TRANSFER_STATUSES, default=TRANSFER_NONE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "contracts"

    def __str__(self):
        return f"Contract({self.id}, {self.status})"

    def is_party(self, user):
        return user is not None and user.pk in (self.artist_id, self.creator_id)

    def other_party(self, user):
        return self.creator if user.pk == self.artist_id else self.artist
