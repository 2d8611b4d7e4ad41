"""Comment creation and removal with comment_count maintenance."""

import logging

from social.errors import InvalidArgument, NotFound, PermissionDenied
from social.models import Comment, Post
from social.services.counters import adjust_counter
from social.services.gate import InteractionGate
from social.transactions import run_in_transaction

logger = logging.getLogger(__name__)


def remove_comment(comment):
    """Delete a comment and its replies, decrementing the post's comment_count by the rows removed."""
    removed = 1 + comment.replies.count()
    post_id = comment.post_id
    comment.delete()
    adjust_counter(Post, post_id, "comment_count", -removed)
    return removed


class CommentService:
    def __init__(self, actor):
        self.actor = actor

    def create_comment(self, post_id, body, parent_comment_id=None):
        gate = InteractionGate(self.actor)
        gate.require_writer()
        body = (body or "").strip()
        if not body:
            raise InvalidArgument("EMPTY_COMMENT")
        return run_in_transaction(self._create_comment, gate, post_id, body, parent_comment_id)

    def _create_comment(self, gate, post_id, body, parent_comment_id):
        post = gate.check_content(post_id)
        parent = None
        if parent_comment_id:
            parent = Comment.objects.filter(pk=parent_comment_id).first()
            if parent is None:
                raise NotFound("PARENT_NOT_FOUND")
            if parent.post_id != post.pk or parent.parent_id is not None:
                raise InvalidArgument("INVALID_PARENT")
        comment = Comment.objects.create(post=post, author=self.actor, parent=parent, body=body)
        adjust_counter(Post, post.pk, "comment_count", 1)
        return comment

    def delete_comment(self, post_id, comment_id):
        """Comment author, post author or an admin may delete; returns rows removed."""
        InteractionGate(self.actor).require_writer()
        return run_in_transaction(self._delete_comment, post_id, comment_id)

    def _delete_comment(self, post_id, comment_id):
        post = Post.objects.select_for_update().filter(pk=post_id).first()
        if post is None:
            raise NotFound("POST_NOT_FOUND")
        comment = Comment.objects.filter(pk=comment_id, post=post).first()
        if comment is None:
            raise NotFound("COMMENT_NOT_FOUND")
        allowed = self.actor.pk in (comment.author_id, post.author_id) or self.actor.is_admin
        if not allowed:
            raise PermissionDenied("NOT_OWNER")
        removed = remove_comment(comment)
        logger.debug("Comment %s removed by %s (%s rows)", comment_id, self.actor.username, removed)
        return removed
