"""Post authoring, soft deletion and visibility-aware reads."""

import logging

from django.utils import timezone

from social.errors import NotFound, PermissionDenied, InvalidArgument
from social.models import Post
from social.services.gate import InteractionGate
from social.services.visibility import REASON_DELETED, VisibilityService
from social.transactions import run_in_transaction

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("caption", "tags", "visibility")


def _clean_tags(tags):
    seen = []
    for tag in tags or []:
        tag = str(tag).strip().lower().lstrip("#")
        if tag and tag not in seen:
            seen.append(tag)
    return seen


def soft_delete_post(post, actor):
    """Stamp `deleted_at`; shared by author deletes and moderation takedowns."""
    if post.is_deleted:
        return False
    post.deleted_at = timezone.now()
    post.deleted_by = actor
    post.save(update_fields=["deleted_at", "deleted_by", "updated_at"])
    return True


class PostService:
    def __init__(self, actor, visibility=None):
        self.actor = actor
        self.visibility = visibility or VisibilityService()

    def create_post(self, caption, visibility, tags=None, media=None):
        InteractionGate(self.actor).require_writer()
        if visibility not in dict(Post.VISIBILITY_CHOICES):
            raise InvalidArgument("INVALID_VISIBILITY")
        return Post.objects.create(
            author=self.actor,
            caption=caption.strip(),
            visibility=visibility,
            tags=_clean_tags(tags),
            media=list(media or []),
        )

    def _locked_owned_post(self, post_id):
        post = Post.objects.select_for_update().filter(pk=post_id).first()
        if post is None:
            raise NotFound("POST_NOT_FOUND")
        if post.author_id != self.actor.pk and not self.actor.is_admin:
            raise PermissionDenied("NOT_OWNER")
        return post

    def update_post(self, post_id, **changes):
        InteractionGate(self.actor).require_writer()
        changes = {k: v for k, v in changes.items() if k in EDITABLE_FIELDS}
        if not changes:
            raise InvalidArgument("NO_CHANGES")
        return run_in_transaction(self._update_post, post_id, changes)

    def _update_post(self, post_id, changes):
        post = self._locked_owned_post(post_id)
        if post.is_deleted:
            raise NotFound("POST_NOT_FOUND")
        if "caption" in changes:
            post.caption = changes["caption"].strip()
        if "tags" in changes:
            post.tags = _clean_tags(changes["tags"])
        if "visibility" in changes:
            post.visibility = changes["visibility"]
        post.save()
        return post

    def delete_post(self, post_id):
        """Soft delete; deleting an already deleted post succeeds."""
        InteractionGate(self.actor).require_writer()
        return run_in_transaction(self._delete_post, post_id)

    def _delete_post(self, post_id):
        post = self._locked_owned_post(post_id)
        if soft_delete_post(post, self.actor):
            logger.info("Post %s deleted by %s", post.pk, self.actor.username)
        return post

    def get_post(self, post_id):
        """Return the post if the actor (possibly anonymous) may read it."""
        post = Post.objects.select_related("author").filter(pk=post_id).first()
        if post is None:
            raise NotFound("POST_NOT_FOUND")
        decision = self.visibility.decide_for_post(self.actor, post)
        if not decision.visible:
            if decision.reason == REASON_DELETED:
                raise NotFound("POST_NOT_FOUND")
            raise PermissionDenied(decision.reason)
        return post

    def list_user_posts(self, author, limit=20):
        queryset = Post.objects.filter(author=author).select_related("author").order_by("-created_at")
        return list(self.visibility.filter_visible_posts(queryset, self.actor)[:limit])
