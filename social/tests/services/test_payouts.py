from unittest.mock import Mock

from django.test import TestCase, override_settings

from social.errors import PermissionDenied
from social.models import CreatorProfile, Role
from social.services import PayoutService
from social.services.payments import NullPaymentProvider, get_payment_provider
from social.tests.helpers import make_user


class PayoutServiceTestCase(TestCase):
    def setUp(self):
        self.creator = make_user("creator", role=Role.CREATOR)
        self.provider = Mock()

    def test_start_onboarding_stores_status(self):
        self.provider.start_onboarding.return_value = "pending"
        status = PayoutService(self.creator, provider=self.provider).start_onboarding()
        self.assertEqual(status, "pending")
        self.provider.start_onboarding.assert_called_once_with(self.creator)
        self.assertEqual(CreatorProfile.objects.get(user=self.creator).payout_onboarding_status, "pending")

    def test_sync_and_refresh(self):
        self.provider.refresh_onboarding.return_value = "pending"
        self.provider.sync_status.return_value = "complete"
        service = PayoutService(self.creator, provider=self.provider)
        self.assertEqual(service.refresh_onboarding(), "pending")
        self.assertEqual(service.sync_status(), "complete")
        self.assertEqual(CreatorProfile.objects.get(user=self.creator).payout_onboarding_status, "complete")

    def test_creator_only(self):
        with self.assertRaises(PermissionDenied) as ctx:
            PayoutService(make_user("artist"), provider=self.provider).start_onboarding()
        self.assertEqual(ctx.exception.message, "CREATOR_ONLY")
        self.provider.start_onboarding.assert_not_called()

    def test_default_provider(self):
        self.assertIsInstance(get_payment_provider(), NullPaymentProvider)
        self.assertEqual(PayoutService(self.creator).start_onboarding(), "not_started")

    @override_settings(SOCIAL_PAYMENT_PROVIDER="social.services.payments.NullPaymentProvider")
    def test_configured_provider(self):
        self.assertIsInstance(get_payment_provider(), NullPaymentProvider)
