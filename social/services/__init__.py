from .comments import CommentService
from .gate import InteractionGate
from .identity import IdentityService
from .likes import LikeService
from .media import MediaService
from .messaging import MessagingService
from .moderation import DisputeService, ReportService
from .notifications import NotificationService
from .payouts import PayoutService
from .posts import PostService
from .profiles import ProfileService
from .relationships import RelationshipGraph
from .visibility import VisibilityService, resolve_visibility

__all__ = [
    "CommentService",
    "DisputeService",
    "IdentityService",
    "InteractionGate",
    "LikeService",
    "MediaService",
    "MessagingService",
    "NotificationService",
    "PayoutService",
    "PostService",
    "ProfileService",
    "RelationshipGraph",
    "ReportService",
    "VisibilityService",
    "resolve_visibility",
]
