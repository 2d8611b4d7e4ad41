from django.urls import path

from social import views

# Each procedure is POST /api/<name> with a JSON payload.
PROCEDURES = [
    views.me,
    views.set_initial_role,
    views.request_creator_verification,
    views.admin_set_creator_verification,
    views.admin_change_user_role,
    views.admin_set_user_status,
    views.start_payout_onboarding,
    views.refresh_payout_onboarding,
    views.sync_payout_status,
    views.get_profile,
    views.set_account_privacy,
    views.update_profile,
    views.claim_handle,
    views.block_user,
    views.unblock_user,
    views.request_follow,
    views.decide_follow_request,
    views.cancel_follow_request,
    views.unfollow,
    views.remove_follower,
    views.create_post,
    views.update_post,
    views.delete_post,
    views.get_post,
    views.list_user_posts,
    views.create_comment,
    views.delete_comment,
    views.toggle_like,
    views.access_media,
    views.open_thread,
    views.create_message,
    views.list_notifications,
    views.mark_notifications_read,
    views.report_post,
    views.report_comment,
    views.report_user,
    views.admin_resolve_report,
    views.open_dispute,
    views.admin_review_dispute,
    views.admin_resolve_dispute,
]

urlpatterns = [
    path(view.procedure_name, view, name=view.procedure_name) for view in PROCEDURES
]
