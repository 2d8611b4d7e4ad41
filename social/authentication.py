from firebase_admin import auth
from rest_framework import authentication
from rest_framework import exceptions

from .firebase_admin_client import verify_id_token
from .services.identity import IdentityService


class FirebaseAuthentication(authentication.BaseAuthentication):
    """DRF authentication backend validating Firebase ID tokens."""

    keyword = "Bearer"

    def authenticate(self, request):
        """Validate the bearer token and return (user, decoded_token)."""
        auth_header = request.META.get("HTTP_AUTHORIZATION")
        if not auth_header:
            return None

        parts = auth_header.split()
        if len(parts) != 2 or parts[0] != self.keyword:
            return None

        try:
            decoded_token = verify_id_token(parts[1])
        except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError, auth.RevokedIdTokenError,
                auth.CertificateFetchError, auth.UserDisabledError):
            raise exceptions.AuthenticationFailed("Invalid Firebase token")

        uid = decoded_token.get("uid")
        if not uid:
            raise exceptions.AuthenticationFailed("Invalid Firebase token")

        # first authenticated request provisions the user and its public profile
        user = IdentityService().ensure_user(
            uid,
            email=decoded_token.get("email") or "",
            email_verified=bool(decoded_token.get("email_verified")),
            display_name=decoded_token.get("name") or "",
        )
        return (user, decoded_token)

    def authenticate_header(self, request):
        return self.keyword
