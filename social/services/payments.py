"""Payment provider collaborator: payout onboarding and refunds."""

import logging

from django.conf import settings
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "social.services.payments.NullPaymentProvider"


class PaymentProvider:
    """Interface; statuses returned are opaque strings stored as-is."""

    def start_onboarding(self, user):
        raise NotImplementedError

    def refresh_onboarding(self, user):
        raise NotImplementedError

    def sync_status(self, user):
        raise NotImplementedError

    def refund(self, contract, amount_cents, idempotency_key):
        """
        Return `amount_cents` of the contract payment.

        Calls repeating an `idempotency_key` must not move money twice.
        """
        raise NotImplementedError


class NullPaymentProvider(PaymentProvider):
    """Used when no provider is configured: records nothing, moves no money."""

    def start_onboarding(self, user):
        logger.info("Payout onboarding requested for %s (no provider configured)", user.username)
        return "not_started"

    def refresh_onboarding(self, user):
        return "not_started"

    def sync_status(self, user):
        return "not_started"

    def refund(self, contract, amount_cents, idempotency_key):
        logger.info(
            "Refund %s of %s cents for contract %s skipped (no provider configured)",
            idempotency_key,
            amount_cents,
            contract.pk,
        )
        return None


def get_payment_provider():
    path = getattr(settings, "SOCIAL_PAYMENT_PROVIDER", None) or DEFAULT_PROVIDER
    return import_string(path)()
