"""Idempotent like toggling; the Like row's existence is the source of truth for like_count."""

from social.models import Like, Post
from social.services.counters import adjust_counter
from social.services.gate import InteractionGate
from social.transactions import run_in_transaction


class LikeService:
    def __init__(self, actor):
        self.actor = actor

    def toggle_like(self, post_id, like):
        """Set the like state and return the post's like_count afterwards."""
        gate = InteractionGate(self.actor)
        gate.require_writer()
        return run_in_transaction(self._toggle_like, gate, post_id, bool(like))

    def _toggle_like(self, gate, post_id, like):
        post = gate.check_content(post_id)
        if like:
            _, created = Like.objects.get_or_create(post=post, user=self.actor)
            if created:
                return adjust_counter(Post, post.pk, "like_count", 1)
            return post.like_count
        removed, _ = Like.objects.filter(post=post, user=self.actor).delete()
        if removed:
            return adjust_counter(Post, post.pk, "like_count", -removed)
        return post.like_count

    def has_liked(self, post):
        return Like.objects.filter(post=post, user=self.actor).exists()
