from django.conf import settings
from django.db import models

"""
Notification model

In-app notifications (the "bell" feed).

- `recipient`: who receives the notification
- `sender`: who triggered it (empty for system/admin events)
- `notification_type`: follow, follow_request, comment, like, message,
  dispute and verification events
- `title` / `body` / `link`: pre-rendered copy for the client
- `follow_request`: the pending request a follow_request notification refers to

Notifications are written inside the same transaction as the event that
causes them, so a rolled back follow never leaves a stray notification.
"""


class Notification(models.Model):
    TYPES = [
        ("follow", "Follow"),
        ("follow_request", "Follow Request"),
        ("like", "Like"),
        ("comment", "Comment"),
        ("message", "Message"),
        ("dispute_opened", "Dispute opened"),
        ("dispute_resolved", "Dispute resolved"),
        ("verification_requested", "Verification requested"),
        ("verification_decision", "Verification decision"),
        ("admin_message", "Admin message"),
    ]

    recipient = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="notifications", on_delete=models.CASCADE)
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="sent_notifications",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
    )
    notification_type = models.CharField(max_length=30, choices=TYPES)
    title = models.CharField(max_length=120, blank=True, default="")
    body = models.CharField(max_length=500, blank=True, default="")
    link = models.CharField(max_length=200, blank=True, default="")
    follow_request = models.ForeignKey(
        "social.FollowRequest",
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="notifications",
    )

    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "notifications"
        ordering = ["-created_at"]

    def __str__(self):
        return f"Notification for {self.recipient_id}: {self.notification_type}"
