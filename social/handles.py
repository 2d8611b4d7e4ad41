"""Public handle normalization, validation and candidate generation."""

import math
import re
import zlib
from datetime import timedelta

HANDLE_MIN_LENGTH = 3
HANDLE_MAX_LENGTH = 24
HANDLE_CHANGE_COOLDOWN = timedelta(days=7)

_HANDLE_RE = re.compile(r"^[a-z0-9](?:[a-z0-9_]*[a-z0-9])?$")

RESERVED_HANDLES = frozenset({
    "admin", "api", "assets", "auth", "billing", "blog", "campaigns", "careers",
    "cdn", "dashboard", "discover", "explore", "feed", "help", "home", "legal",
    "login", "logout", "messages", "notifications", "onboarding", "p", "privacy",
    "profile", "robots", "signup", "support", "terms", "u", "user", "users",
})


def normalize_handle(value):
    return (value or "").strip().lower()


def is_valid_handle(value):
    handle = normalize_handle(value)
    if not HANDLE_MIN_LENGTH <= len(handle) <= HANDLE_MAX_LENGTH:
        return False
    if not _HANDLE_RE.match(handle):
        return False
    return handle not in RESERVED_HANDLES


def slugify_handle_base(value):
    """Collapse arbitrary text (display name, email) into a handle stem."""
    text = normalize_handle(value).split("@")[0]
    text = re.sub(r"[^a-z0-9]+", "_", text).strip("_")
    text = re.sub(r"_+", "_", text)
    return text[:16].strip("_") or "user"


def suggest_handle_candidates(uid, display_name_or_email=None):
    """Ordered candidates; the caller keeps the first one that is free."""
    base = slugify_handle_base(display_name_or_email or "user")
    if len(base) < HANDLE_MIN_LENGTH:
        base = f"{base}_user"
    digest = zlib.crc32(uid.encode("utf-8")) % 10000
    candidates = [
        base,
        f"{base}_2",
        f"{base}_3",
        f"{base}_{uid[:4].lower()}",
        f"{base}_{digest:04d}",
        f"user_{re.sub(r'[^a-z0-9]', '', uid.lower())[:12]}",
    ]
    return [c for c in candidates if is_valid_handle(c)]


def cooldown_remaining(now, last_changed_at):
    """Seconds left before the handle may change again (0 when allowed)."""
    if last_changed_at is None:
        return 0
    remaining = (last_changed_at + HANDLE_CHANGE_COOLDOWN - now).total_seconds()
    return max(0, math.ceil(remaining))
