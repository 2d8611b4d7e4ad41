"""
Relationship Graph

Directed block edges, the follow-request state machine and accepted follow
edges. Every operation runs as one transaction that first locks both users'
public profiles in ascending id order; any other write that gates on the same
pair takes the same locks, so a block and a like/comment/follow between the
same two users can never interleave.
"""

import logging

from django.db.models import Q
from django.utils import timezone

from social.errors import InvalidArgument, NotFound, PermissionDenied
from social.models import Block, FollowEdge, FollowRequest, PublicProfile
from social.services.counters import adjust_counter
from social.services.notifications import NotificationService
from social.transactions import run_in_transaction

logger = logging.getLogger(__name__)

STATUS_APPROVED = FollowRequest.STATUS_APPROVED
STATUS_PENDING = FollowRequest.STATUS_PENDING

DECISION_APPROVE = "approve"
DECISION_REJECT = "reject"


def lock_pair(a, b):
    """Lock the public profiles of `a` and `b` (ascending id); returns {user_id: profile}."""
    ids = sorted({a.pk, b.pk})
    profiles = PublicProfile.objects.select_for_update().filter(user_id__in=ids).order_by("user_id")
    return {profile.user_id: profile for profile in profiles}


class RelationshipGraph:
    """Single source of truth for blocks and follows between users."""

    def __init__(self, notifications=None):
        self.notifications = notifications or NotificationService()

    # Reads

    def is_blocked_pair(self, a, b):
        """True when either user has blocked the other."""
        if a is None or b is None:
            return False
        return Block.objects.filter(Q(blocker=a, blocked=b) | Q(blocker=b, blocked=a)).exists()

    def has_blocked(self, blocker, target):
        return Block.objects.filter(blocker=blocker, blocked=target).exists()

    def blocked_pair_q(self, user, field):
        """`Q` matching rows whose `field` is a user on either side of a block with `user`."""
        return Q(**{f"{field}__in": Block.objects.filter(blocker=user).values("blocked")}) | Q(
            **{f"{field}__in": Block.objects.filter(blocked=user).values("blocker")}
        )

    def is_following(self, follower, followee):
        return FollowEdge.objects.filter(follower=follower, followee=followee).exists()

    def followees(self, user):
        return FollowEdge.objects.filter(follower=user).values("followee")

    def pending_request(self, from_user, to_user):
        return FollowRequest.objects.filter(from_user=from_user, to_user=to_user, status=STATUS_PENDING).first()

    # Blocks

    def block(self, blocker, target):
        """Block `target`; severs follows and follow requests in both directions."""
        if blocker.pk == target.pk:
            raise InvalidArgument("CANNOT_BLOCK_SELF")
        return run_in_transaction(self._block, blocker, target)

    def _block(self, blocker, target):
        lock_pair(blocker, target)
        block, created = Block.objects.get_or_create(blocker=blocker, blocked=target)
        self._sever(blocker, target)
        self._sever(target, blocker)
        if created:
            logger.info("User %s blocked %s", blocker.username, target.username)
        return block

    def unblock(self, blocker, target):
        """Remove the caller's own block row; prior follows are not restored."""
        if blocker.pk == target.pk:
            raise InvalidArgument("CANNOT_UNBLOCK_SELF")
        return run_in_transaction(self._unblock, blocker, target)

    def _unblock(self, blocker, target):
        lock_pair(blocker, target)
        removed, _ = Block.objects.filter(blocker=blocker, blocked=target).delete()
        if removed:
            logger.info("User %s unblocked %s", blocker.username, target.username)
        return bool(removed)

    def _sever(self, follower, followee):
        removed = self._delete_edge(follower, followee)
        FollowRequest.objects.filter(from_user=follower, to_user=followee).delete()
        return removed

    # Follows

    def request_follow(self, from_user, to_user):
        """Return `approved` (public target, or already following) or `pending` (private target)."""
        if from_user.pk == to_user.pk:
            raise InvalidArgument("CANNOT_FOLLOW_SELF")
        return run_in_transaction(self._request_follow, from_user, to_user)

    def _request_follow(self, from_user, to_user):
        profiles = lock_pair(from_user, to_user)
        target_profile = profiles.get(to_user.pk)
        if target_profile is None:
            raise NotFound("USER_NOT_FOUND")
        if self.is_blocked_pair(from_user, to_user):
            raise PermissionDenied("BLOCKED")
        if self.is_following(from_user, to_user):
            return STATUS_APPROVED

        live = (
            FollowRequest.objects.select_for_update()
            .filter(from_user=from_user, to_user=to_user)
            .exclude(status=FollowRequest.STATUS_REJECTED)
            .first()
        )

        if live is not None and live.status == STATUS_APPROVED:
            # approved earlier and never unfollowed; the edge is what is missing
            self._create_edge(from_user, to_user)
            return STATUS_APPROVED

        if target_profile.is_private_account:
            if live is not None:
                return STATUS_PENDING
            follow_request = FollowRequest.objects.create(from_user=from_user, to_user=to_user, status=STATUS_PENDING)
            self.notifications.notify(
                to_user,
                "follow_request",
                sender=from_user,
                title="New follow request",
                follow_request=follow_request,
            )
            return STATUS_PENDING

        now = timezone.now()
        if live is not None:
            live.status = STATUS_APPROVED
            live.decided_at = now
            live.save(update_fields=["status", "decided_at"])
            self.notifications.clear_follow_request_prompt(live)
        else:
            FollowRequest.objects.create(from_user=from_user, to_user=to_user, status=STATUS_APPROVED, decided_at=now)
        self._create_edge(from_user, to_user)
        return STATUS_APPROVED

    def decide_follow_request(self, to_user, from_user, decision):
        """Only the target (`to_user`) decides a pending request."""
        if decision not in (DECISION_APPROVE, DECISION_REJECT):
            raise InvalidArgument("INVALID_DECISION")
        if from_user.pk == to_user.pk:
            raise InvalidArgument("CANNOT_FOLLOW_SELF")
        return run_in_transaction(self._decide_follow_request, to_user, from_user, decision)

    def _decide_follow_request(self, to_user, from_user, decision):
        lock_pair(from_user, to_user)
        if self.is_blocked_pair(from_user, to_user):
            raise PermissionDenied("BLOCKED")
        follow_request = (
            FollowRequest.objects.select_for_update()
            .filter(from_user=from_user, to_user=to_user, status=STATUS_PENDING)
            .first()
        )
        if follow_request is None:
            raise NotFound("FOLLOW_REQUEST_NOT_FOUND")

        follow_request.decided_at = timezone.now()
        if decision == DECISION_APPROVE:
            follow_request.status = STATUS_APPROVED
            follow_request.save(update_fields=["status", "decided_at"])
            self._create_edge(from_user, to_user)
        else:
            follow_request.status = FollowRequest.STATUS_REJECTED
            follow_request.save(update_fields=["status", "decided_at"])
        self.notifications.clear_follow_request_prompt(follow_request)
        return follow_request

    def cancel_follow_request(self, from_user, to_user):
        """Withdraw the caller's pending request; returns True when one existed."""
        return run_in_transaction(self._cancel_follow_request, from_user, to_user)

    def _cancel_follow_request(self, from_user, to_user):
        lock_pair(from_user, to_user)
        removed, _ = FollowRequest.objects.filter(
            from_user=from_user, to_user=to_user, status=STATUS_PENDING
        ).delete()
        return bool(removed)

    def unfollow(self, from_user, to_user):
        """Remove the follow edge and its approved request; returns True when an edge existed."""
        if from_user.pk == to_user.pk:
            raise InvalidArgument("CANNOT_FOLLOW_SELF")
        return run_in_transaction(self._remove_follow, from_user, to_user)

    def remove_follower(self, owner, follower):
        """The followee drops one of its followers."""
        if owner.pk == follower.pk:
            raise InvalidArgument("CANNOT_FOLLOW_SELF")
        return run_in_transaction(self._remove_follow, follower, owner)

    def _remove_follow(self, follower, followee):
        lock_pair(follower, followee)
        removed = self._delete_edge(follower, followee)
        FollowRequest.objects.filter(from_user=follower, to_user=followee, status=STATUS_APPROVED).delete()
        return bool(removed)

    # Edge primitives; callers hold the pair lock.

    def _create_edge(self, follower, followee):
        _, created = FollowEdge.objects.get_or_create(follower=follower, followee=followee)
        if created:
            adjust_counter(PublicProfile, followee.pk, "follower_count", 1)
        return created

    def _delete_edge(self, follower, followee):
        removed, _ = FollowEdge.objects.filter(follower=follower, followee=followee).delete()
        if removed:
            adjust_counter(PublicProfile, followee.pk, "follower_count", -removed)
        return removed
