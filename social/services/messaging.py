"""Direct messaging between two users, gated on blocks."""

import logging

from social.errors import InvalidArgument, NotFound, PermissionDenied
from social.models import Message, Thread
from social.services.gate import InteractionGate
from social.transactions import run_in_transaction

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 140


class MessagingService:
    def __init__(self, actor):
        self.actor = actor

    def find_thread(self, a, b):
        """Existing thread whose participants are exactly `a` and `b`."""
        candidates = (
            Thread.objects.filter(participants=a)
            .filter(participants=b)
            .prefetch_related("participants")
            .order_by("created_at")
        )
        for thread in candidates:
            if len(thread.participants.all()) == 2:
                return thread
        return None

    def open_thread(self, target):
        """Return the two-party thread with `target`, creating it when needed."""
        gate = InteractionGate(self.actor)
        gate.require_writer()
        if target.pk == self.actor.pk:
            raise InvalidArgument("CANNOT_MESSAGE_SELF")
        return run_in_transaction(self._open_thread, gate, target)

    def _open_thread(self, gate, target):
        gate.check_counterpart(target)
        thread = self.find_thread(self.actor, target)
        if thread is None:
            thread = Thread.objects.create()
            thread.participants.add(self.actor, target)
            logger.debug("Opened thread %s between %s and %s", thread.pk, self.actor.username, target.username)
        return thread

    def create_message(self, thread_id, text):
        gate = InteractionGate(self.actor)
        gate.require_writer()
        text = (text or "").strip()
        if not text:
            raise InvalidArgument("EMPTY_MESSAGE")
        return run_in_transaction(self._create_message, gate, thread_id, text)

    def _create_message(self, gate, thread_id, text):
        thread = Thread.objects.select_for_update().filter(pk=thread_id).first()
        if thread is None:
            raise NotFound("THREAD_NOT_FOUND")
        participants = list(thread.participants.all())
        is_participant = any(p.pk == self.actor.pk for p in participants)
        if not is_participant and not self.actor.is_admin:
            raise PermissionDenied("NOT_PARTICIPANT")
        if is_participant:
            for other in participants:
                gate.check_counterpart(other)

        message = Message.objects.create(thread=thread, sender=self.actor, text=text)
        thread.last_message_at = message.created_at
        thread.last_message_preview = text[:PREVIEW_LENGTH]
        thread.save(update_fields=["last_message_at", "last_message_preview", "updated_at"])
        return message
