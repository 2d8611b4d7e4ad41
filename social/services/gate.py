"""
Interaction Gate

The shared precondition for every mutating social action. Handlers call it
inside the transaction that performs the write:

    gate = InteractionGate(request.user)
    gate.require_writer()
    post = gate.check_content(post_id)      # lock, block check, visibility
    ... write + adjust_counter ...

Each check raises a `SocialError` before anything is written.
"""

from social.errors import FailedPrecondition, NotFound, PermissionDenied, Unauthenticated
from social.models import Post
from social.services.relationships import RelationshipGraph, lock_pair
from social.services.visibility import (
    REASON_NOT_VISIBLE,
    ContentFacts,
    ViewerContext,
    resolve_visibility,
)


class InteractionGate:
    def __init__(self, actor, graph=None):
        self.actor = actor
        self.graph = graph or RelationshipGraph()

    @property
    def is_identified(self):
        return self.actor is not None and getattr(self.actor, "is_authenticated", False)

    def require_authenticated(self):
        if not self.is_identified:
            raise Unauthenticated("AUTH_REQUIRED")
        return self.actor

    def require_active(self):
        actor = self.require_authenticated()
        if not actor.is_active_account:
            raise PermissionDenied("USER_SUSPENDED")
        return actor

    def require_writer(self):
        """Active account with a verified email and an assigned role."""
        actor = self.require_active()
        if not actor.email_verified:
            raise FailedPrecondition("EMAIL_NOT_VERIFIED")
        if not actor.has_assigned_role:
            raise PermissionDenied("ROLE_REQUIRED")
        return actor

    def check_counterpart(self, counterpart):
        """Lock the pair and fail with `BLOCKED` when either side blocked the other."""
        if not self.is_identified or counterpart is None or counterpart.pk == self.actor.pk:
            return
        lock_pair(self.actor, counterpart)
        if self.graph.is_blocked_pair(self.actor, counterpart):
            raise PermissionDenied("BLOCKED")

    def check_content(self, post_or_id):
        """Lock the post and return it once the actor may interact with it."""
        post_id = getattr(post_or_id, "pk", post_or_id)
        post = Post.objects.select_for_update().filter(pk=post_id).first()
        if post is None or post.is_deleted:
            raise NotFound("POST_NOT_FOUND")

        self.check_counterpart(post.author)

        follows = False
        if self.is_identified and self.actor.pk != post.author_id:
            follows = self.graph.is_following(self.actor, post.author)
        decision = resolve_visibility(
            ViewerContext.for_user(self.actor),
            ContentFacts.from_post(post),
            blocked=False,
            viewer_follows_author=follows,
        )
        if not decision.visible:
            raise PermissionDenied(decision.reason or REASON_NOT_VISIBLE)
        return post
