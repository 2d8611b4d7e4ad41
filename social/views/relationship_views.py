from social.serializers import DecideFollowRequestSchema, FollowerSchema, TargetUserSchema
from social.services.gate import InteractionGate
from social.services.identity import get_user_by_uid
from social.services.relationships import RelationshipGraph
from social.views.rpc import procedure


def _writer(request):
    return InteractionGate(request.user).require_writer()


@procedure("blockUser", TargetUserSchema)
def block_user(request, data):
    """Block another user; severs follows in both directions."""
    actor = InteractionGate(request.user).require_active()
    RelationshipGraph().block(actor, get_user_by_uid(data["targetUid"]))


@procedure("unblockUser", TargetUserSchema)
def unblock_user(request, data):
    actor = InteractionGate(request.user).require_active()
    RelationshipGraph().unblock(actor, get_user_by_uid(data["targetUid"]))


@procedure("requestFollow", TargetUserSchema, rate_limited=True)
def request_follow(request, data):
    status = RelationshipGraph().request_follow(_writer(request), get_user_by_uid(data["targetUid"]))
    return {"status": status}


@procedure("decideFollowRequest", DecideFollowRequestSchema)
def decide_follow_request(request, data):
    RelationshipGraph().decide_follow_request(_writer(request), get_user_by_uid(data["fromUid"]), data["decision"])


@procedure("cancelFollowRequest", TargetUserSchema)
def cancel_follow_request(request, data):
    RelationshipGraph().cancel_follow_request(_writer(request), get_user_by_uid(data["targetUid"]))


@procedure("unfollow", TargetUserSchema)
def unfollow(request, data):
    actor = InteractionGate(request.user).require_active()
    RelationshipGraph().unfollow(actor, get_user_by_uid(data["targetUid"]))


@procedure("removeFollower", FollowerSchema)
def remove_follower(request, data):
    actor = InteractionGate(request.user).require_active()
    RelationshipGraph().remove_follower(actor, get_user_by_uid(data["followerUid"]))
