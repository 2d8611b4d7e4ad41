"""Feature flag parsing for the social surface."""

import os

from social.errors import FailedPrecondition

TRUTHY = ("true", "1", "yes", "y", "on")
FALSY = ("false", "0", "no", "n", "off")


def parse_boolean_flag(raw, default):
    """Parse a loosely-typed env value; unknown values fall back to `default`."""
    if raw is None:
        return default
    value = str(raw).strip().lower()
    if value in TRUTHY:
        return True
    if value in FALSY:
        return False
    return default


def is_social_enabled():
    return parse_boolean_flag(os.getenv("SOCIAL_ENABLED"), True)


def assert_social_enabled():
    if not is_social_enabled():
        raise FailedPrecondition("SOCIAL_DISABLED")
