"""Direct message threads between two users."""

from django.conf import settings
from django.db import models

from social.utils.uuid import uuid7_or_4


class Thread(models.Model):
    """Conversation between participants; admins may post into any thread."""
    id = models.UUIDField(primary_key=True, default=uuid7_or_4, editable=False)
    participants = models.ManyToManyField(settings.AUTH_USER_MODEL, related_name="threads")
    last_message_at = models.DateTimeField(null=True, blank=True)
    last_message_preview = models.CharField(max_length=140, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "threads"

    def __str__(self):
        return f"Thread({self.id})"


class Message(models.Model):
    """Single message in a thread."""
    id = models.UUIDField(primary_key=True, default=uuid7_or_4, editable=False)
    thread = models.ForeignKey(Thread, on_delete=models.CASCADE, related_name="messages")
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        db_column="sender_uid",
    )
    text = models.TextField(max_length=2000)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "messages"
        ordering = ["created_at"]

    def __str__(self):
        return f"Message({self.id}) in {self.thread_id}"
