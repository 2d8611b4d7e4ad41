"""
Visibility Resolver

`resolve_visibility` is a pure decision over a viewer, the facts of one piece of
content and the two relationship facts it depends on (block between viewer and
author, follow edge viewer -> author). It performs no queries, so the same
rules serve API handlers, the interaction gate and server-rendered pages.

`VisibilityService` loads those facts for a post and applies the same rules to
querysets.
"""

from dataclasses import dataclass
from typing import Optional

from django.db.models import Q

from social.models import Post
from social.services.relationships import RelationshipGraph

REASON_DELETED = "DELETED"
REASON_BLOCKED = "BLOCKED"
REASON_NOT_VISIBLE = "NOT_VISIBLE"


@dataclass(frozen=True)
class ViewerContext:
    uid: Optional[str] = None
    is_admin: bool = False

    @property
    def is_anonymous(self) -> bool:
        return self.uid is None

    @classmethod
    def for_user(cls, user) -> "ViewerContext":
        if user is None or not getattr(user, "is_authenticated", False):
            return cls()
        return cls(uid=user.username, is_admin=bool(getattr(user, "is_admin", False)))


@dataclass(frozen=True)
class ContentFacts:
    author_uid: str
    visibility: str
    deleted: bool = False

    @classmethod
    def from_post(cls, post) -> "ContentFacts":
        return cls(author_uid=post.author.username, visibility=post.visibility, deleted=post.is_deleted)


@dataclass(frozen=True)
class VisibilityDecision:
    visible: bool
    reason: Optional[str] = None


VISIBLE = VisibilityDecision(True)


def resolve_visibility(
    viewer: ViewerContext,
    content: ContentFacts,
    *,
    blocked: bool = False,
    viewer_follows_author: bool = False,
) -> VisibilityDecision:
    if content.deleted and not viewer.is_admin:
        return VisibilityDecision(False, REASON_DELETED)
    if viewer.is_admin:
        return VISIBLE
    if viewer.is_anonymous:
        # No identity, so no follow edge, no authorship and no block to consult.
        if content.visibility == Post.VISIBILITY_PUBLIC:
            return VISIBLE
        return VisibilityDecision(False, REASON_NOT_VISIBLE)
    if viewer.uid == content.author_uid:
        return VISIBLE
    if blocked:
        return VisibilityDecision(False, REASON_BLOCKED)
    if content.visibility == Post.VISIBILITY_PUBLIC:
        return VISIBLE
    if content.visibility == Post.VISIBILITY_FOLLOWERS and viewer_follows_author:
        return VISIBLE
    return VisibilityDecision(False, REASON_NOT_VISIBLE)


def _is_identified(user):
    return user is not None and getattr(user, "is_authenticated", False)


class VisibilityService:
    """Loads relationship facts for posts from the graph and filters post querysets."""

    def __init__(self, graph=None):
        self.graph = graph or RelationshipGraph()

    def decide_for_post(self, viewer, post) -> VisibilityDecision:
        context = ViewerContext.for_user(viewer)
        facts = ContentFacts.from_post(post)
        blocked = follows = False
        if _is_identified(viewer) and viewer.pk != post.author_id and not context.is_admin:
            blocked = self.graph.is_blocked_pair(viewer, post.author)
            follows = not blocked and self.graph.is_following(viewer, post.author)
        return resolve_visibility(context, facts, blocked=blocked, viewer_follows_author=follows)

    def can_view_post(self, viewer, post):
        return self.decide_for_post(viewer, post).visible

    def filter_visible_posts(self, queryset, viewer):
        """Restrict `queryset` to the posts `viewer` may read."""
        if not _is_identified(viewer):
            return queryset.filter(deleted_at__isnull=True, visibility=Post.VISIBILITY_PUBLIC)
        if getattr(viewer, "is_admin", False):
            return queryset

        followed_authors = self.graph.followees(viewer)

        allowed = (
            Q(author=viewer)
            | Q(visibility=Post.VISIBILITY_PUBLIC)
            | Q(visibility=Post.VISIBILITY_FOLLOWERS, author__in=followed_authors)
        )
        return (
            queryset.filter(deleted_at__isnull=True)
            .filter(allowed)
            .exclude(self.graph.blocked_pair_q(viewer, "author"))
        )
