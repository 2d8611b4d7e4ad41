from social.serializers import (
    AdminChangeUserRoleSchema,
    AdminSetCreatorVerificationSchema,
    AdminSetUserStatusSchema,
    RequestCreatorVerificationSchema,
    SetInitialRoleSchema,
)
from social.services.identity import IdentityService
from social.services.payouts import PayoutService
from social.views.rpc import procedure


@procedure("me", social=False)
def me(request, data):
    """Return the caller's identity as the backend sees it."""
    user = request.user
    profile = getattr(user, "public_profile", None)
    return {
        "uid": user.username,
        "email": user.email,
        "emailVerified": user.email_verified,
        "role": user.role,
        "status": user.status,
        "handle": profile.handle if profile else None,
    }


@procedure("setInitialRole", SetInitialRoleSchema, social=False)
def set_initial_role(request, data):
    return {"role": IdentityService().set_initial_role(request.user, data["role"])}


@procedure("requestCreatorVerification", RequestCreatorVerificationSchema, social=False)
def request_creator_verification(request, data):
    IdentityService().request_creator_verification(request.user, data["evidencePaths"], data.get("notes"))


@procedure("adminSetCreatorVerification", AdminSetCreatorVerificationSchema, social=False)
def admin_set_creator_verification(request, data):
    IdentityService().admin_set_creator_verification(
        request.user, data["creatorUid"], data["status"], data.get("notes")
    )


@procedure("adminChangeUserRole", AdminChangeUserRoleSchema, social=False)
def admin_change_user_role(request, data):
    IdentityService().admin_change_user_role(request.user, data["uid"], data["role"])


@procedure("adminSetUserStatus", AdminSetUserStatusSchema, social=False)
def admin_set_user_status(request, data):
    IdentityService().admin_set_user_status(request.user, data["uid"], data["status"])


@procedure("startPayoutOnboarding", social=False)
def start_payout_onboarding(request, data):
    return {"status": PayoutService(request.user).start_onboarding()}


@procedure("refreshPayoutOnboarding", social=False)
def refresh_payout_onboarding(request, data):
    return {"status": PayoutService(request.user).refresh_onboarding()}


@procedure("syncPayoutStatus", social=False)
def sync_payout_status(request, data):
    return {"status": PayoutService(request.user).sync_status()}
