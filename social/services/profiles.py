"""Profile edits: privacy flag, display fields and handle claims."""

import logging

from django.utils import timezone

from social.errors import FailedPrecondition, InvalidArgument, NotFound
from social.handles import cooldown_remaining, is_valid_handle, normalize_handle
from social.models import PublicProfile
from social.services.gate import InteractionGate
from social.transactions import run_in_transaction

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, actor):
        self.actor = actor

    def _locked_profile(self):
        profile = PublicProfile.objects.select_for_update().filter(user=self.actor).first()
        if profile is None:
            raise NotFound("PROFILE_NOT_FOUND")
        return profile

    def get_profile(self, handle):
        profile = PublicProfile.objects.select_related("user").filter(handle=normalize_handle(handle)).first()
        if profile is None:
            raise NotFound("PROFILE_NOT_FOUND")
        return profile

    def set_account_privacy(self, is_private):
        InteractionGate(self.actor).require_writer()
        return run_in_transaction(self._set_privacy, bool(is_private))

    def _set_privacy(self, is_private):
        profile = self._locked_profile()
        if profile.is_private_account != is_private:
            profile.is_private_account = is_private
            profile.save(update_fields=["is_private_account", "updated_at"])
        return profile

    def update_profile(self, **changes):
        """Apply any of display_name / bio / avatar_asset_id."""
        InteractionGate(self.actor).require_writer()
        changes = {k: v for k, v in changes.items() if k in ("display_name", "bio", "avatar_asset_id")}
        if not changes:
            raise InvalidArgument("NO_CHANGES")
        return run_in_transaction(self._update_profile, changes)

    def _update_profile(self, changes):
        profile = self._locked_profile()
        if "display_name" in changes:
            profile.display_name = (changes["display_name"] or "").strip()
        if "bio" in changes:
            profile.bio = changes["bio"] or ""
        if "avatar_asset_id" in changes:
            profile.avatar_asset_id = changes["avatar_asset_id"] or None
        profile.save()
        return profile

    def claim_handle(self, handle):
        InteractionGate(self.actor).require_writer()
        handle = normalize_handle(handle)
        if not is_valid_handle(handle):
            raise InvalidArgument("INVALID_HANDLE")
        return run_in_transaction(self._claim_handle, handle)

    def _claim_handle(self, handle):
        profile = self._locked_profile()
        if profile.handle == handle:
            return profile.handle
        now = timezone.now()
        if cooldown_remaining(now, profile.handle_changed_at) > 0:
            raise FailedPrecondition("HANDLE_COOLDOWN")
        if PublicProfile.objects.filter(handle=handle).exclude(user=self.actor).exists():
            raise FailedPrecondition("HANDLE_TAKEN")
        previous = profile.handle
        profile.handle = handle
        profile.handle_changed_at = now
        profile.save(update_fields=["handle", "handle_changed_at", "updated_at"])
        logger.info("User %s changed handle %s -> %s", self.actor.username, previous, handle)
        return handle
