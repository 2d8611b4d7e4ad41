from .identity_views import (
    admin_change_user_role,
    admin_set_creator_verification,
    admin_set_user_status,
    me,
    refresh_payout_onboarding,
    request_creator_verification,
    set_initial_role,
    start_payout_onboarding,
    sync_payout_status,
)
from .messaging_views import create_message, list_notifications, mark_notifications_read, open_thread
from .moderation_views import (
    admin_resolve_dispute,
    admin_resolve_report,
    admin_review_dispute,
    open_dispute,
    report_comment,
    report_post,
    report_user,
)
from .post_views import (
    access_media,
    create_comment,
    create_post,
    delete_comment,
    delete_post,
    get_post,
    list_user_posts,
    toggle_like,
    update_post,
)
from .profile_views import claim_handle, get_profile, set_account_privacy, update_profile
from .relationship_views import (
    block_user,
    cancel_follow_request,
    decide_follow_request,
    remove_follower,
    request_follow,
    unblock_user,
    unfollow,
)
