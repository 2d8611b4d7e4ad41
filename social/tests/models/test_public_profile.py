from django.db import IntegrityError, transaction
from django.test import TestCase

from social.models import PublicProfile, User
from social.tests.helpers import make_user


class PublicProfileModelTestCase(TestCase):
    def setUp(self):
        self.user = make_user("alice")
        self.profile = self.user.public_profile

    def test_defaults(self):
        self.assertEqual(self.profile.follower_count, 0)
        self.assertFalse(self.profile.is_private_account)
        self.assertEqual(str(self.profile), "@alice")
        self.assertEqual(self.profile.uid, "alice")

    def test_handle_is_unique(self):
        other = User.objects.create_user(username="bob")
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                PublicProfile.objects.create(user=other, handle="alice")

    def test_avatar_url_falls_back_to_gravatar(self):
        self.assertIn("gravatar.com", self.profile.avatar_url)

    def test_avatar_url_uses_uploaded_asset(self):
        self.profile.avatar_asset_id = "avatars/alice/me.png"
        self.assertEqual(self.profile.avatar_url, "avatars/alice/me.png")
