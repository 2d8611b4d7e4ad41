from .user import User, Role
from .public_profile import PublicProfile
from .creator_profile import CreatorProfile
from .block import Block
from .follow_request import FollowRequest
from .follow_edge import FollowEdge
from .post import Post
from .comment import Comment
from .like import Like
from .report import Report
from .contract import Contract
from .dispute import Dispute
from .thread import Thread, Message
from .notification import Notification
from .rate_limit import RateLimitBucket

__all__ = [
    "User",
    "Role",
    "PublicProfile",
    "CreatorProfile",
    "Block",
    "FollowRequest",
    "FollowEdge",
    "Post",
    "Comment",
    "Like",
    "Report",
    "Contract",
    "Dispute",
    "Thread",
    "Message",
    "Notification",
    "RateLimitBucket",
]
