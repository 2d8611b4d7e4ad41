from social.serializers import (
    ClaimHandleSchema,
    GetProfileSchema,
    PublicProfileSerializer,
    SetAccountPrivacySchema,
    UpdateProfileSchema,
)
from social.services.profiles import ProfileService
from social.views.rpc import procedure


@procedure("getProfile", GetProfileSchema, public=True)
def get_profile(request, data):
    profile = ProfileService(request.user).get_profile(data["handle"])
    return PublicProfileSerializer(profile).data


@procedure("setAccountPrivacy", SetAccountPrivacySchema)
def set_account_privacy(request, data):
    ProfileService(request.user).set_account_privacy(data["isPrivateAccount"])


@procedure("updateProfile", UpdateProfileSchema)
def update_profile(request, data):
    field_map = {"displayName": "display_name", "bio": "bio", "avatarAssetId": "avatar_asset_id"}
    changes = {field_map[key]: value for key, value in data.items() if key in field_map}
    ProfileService(request.user).update_profile(**changes)


@procedure("claimHandle", ClaimHandleSchema)
def claim_handle(request, data):
    return {"handle": ProfileService(request.user).claim_handle(data["handle"])}
