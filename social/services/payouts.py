"""Creator payout onboarding, delegated to the configured payment provider."""

import logging

from social.errors import PermissionDenied
from social.models import CreatorProfile, Role
from social.services.gate import InteractionGate
from social.services.payments import get_payment_provider

logger = logging.getLogger(__name__)


class PayoutService:
    def __init__(self, actor, provider=None):
        self.actor = actor
        self.provider = provider or get_payment_provider()

    def _creator_profile(self):
        InteractionGate(self.actor).require_writer()
        if self.actor.role != Role.CREATOR:
            raise PermissionDenied("CREATOR_ONLY")
        profile, _ = CreatorProfile.objects.get_or_create(user=self.actor)
        return profile

    def _store(self, profile, status):
        status = str(status or "not_started")
        if profile.payout_onboarding_status != status:
            profile.payout_onboarding_status = status
            profile.save(update_fields=["payout_onboarding_status", "updated_at"])
        return status

    def start_onboarding(self):
        profile = self._creator_profile()
        return self._store(profile, self.provider.start_onboarding(self.actor))

    def refresh_onboarding(self):
        profile = self._creator_profile()
        return self._store(profile, self.provider.refresh_onboarding(self.actor))

    def sync_status(self):
        profile = self._creator_profile()
        status = self._store(profile, self.provider.sync_status(self.actor))
        logger.debug("Payout status for %s is %s", self.actor.username, status)
        return status
