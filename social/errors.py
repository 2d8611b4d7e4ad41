"""Structured errors raised by social services and rendered as `{code, message}`."""


class SocialError(Exception):
    """Base error; `message` is a reason token such as `BLOCKED` or `NOT_VISIBLE`."""

    code = "internal"
    status_code = 500

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details

    def as_payload(self):
        payload = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidArgument(SocialError):
    code = "invalid-argument"
    status_code = 400


class Unauthenticated(SocialError):
    code = "unauthenticated"
    status_code = 401


class PermissionDenied(SocialError):
    code = "permission-denied"
    status_code = 403


class NotFound(SocialError):
    code = "not-found"
    status_code = 404


class FailedPrecondition(SocialError):
    code = "failed-precondition"
    status_code = 400


class ResourceExhausted(SocialError):
    code = "resource-exhausted"
    status_code = 429


class Transient(SocialError):
    """Write conflict persisted past the retry budget; the whole call may be retried."""
    code = "aborted"
    status_code = 409
