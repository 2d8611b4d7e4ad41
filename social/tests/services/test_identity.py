from unittest.mock import patch

from django.core import mail
from django.test import TestCase, override_settings

from social.errors import FailedPrecondition, InvalidArgument, NotFound, PermissionDenied
from social.models import CreatorProfile, Notification, PublicProfile, Role, User
from social.services import IdentityService
from social.services.identity import admin_emails, require_admin
from social.tests.helpers import make_admin, make_user


class EnsureUserTestCase(TestCase):
    def setUp(self):
        self.service = IdentityService()

    def test_first_login_provisions_user_and_profile(self):
        user = self.service.ensure_user("uid-1", "Alice@Example.org", True, "Alice Smith")
        self.assertEqual(user.username, "uid-1")
        self.assertEqual(user.email, "alice@example.org")
        self.assertEqual(user.role, Role.UNASSIGNED)
        self.assertFalse(user.has_usable_password())
        profile = PublicProfile.objects.get(user=user)
        self.assertEqual(profile.handle, "alice_smith")
        self.assertEqual(profile.display_name, "Alice Smith")

    def test_handle_collision_picks_next_candidate(self):
        self.service.ensure_user("uid-1", "a@example.org", True, "Alice Smith")
        second = self.service.ensure_user("uid-2", "b@example.org", True, "Alice Smith")
        self.assertEqual(second.public_profile.handle, "alice_smith_2")

    def test_second_call_refreshes_email_flags(self):
        self.service.ensure_user("uid-1", "a@example.org", False)
        user = self.service.ensure_user("uid-1", "new@example.org", True)
        self.assertEqual(User.objects.count(), 1)
        user.refresh_from_db()
        self.assertEqual(user.email, "new@example.org")
        self.assertTrue(user.email_verified)

    @override_settings(ADMIN_EMAIL_ALLOWLIST=[" Boss@Example.org "])
    def test_allowlisted_email_becomes_admin(self):
        self.assertEqual(admin_emails(), {"boss@example.org"})
        user = self.service.ensure_user("boss", "boss@example.org", True)
        self.assertEqual(user.role, Role.ADMIN)

    @patch("social.services.identity.set_role_claim")
    def test_role_claim_pushed_on_provision(self, set_role_claim):
        self.service.ensure_user("uid-1", "a@example.org", True)
        set_role_claim.assert_called_once_with("uid-1", Role.UNASSIGNED)


class RoleTestCase(TestCase):
    def setUp(self):
        self.service = IdentityService()
        self.user = make_user("newbie", role=Role.UNASSIGNED)

    @patch("social.services.identity.set_role_claim")
    def test_set_initial_role_once(self, set_role_claim):
        self.assertEqual(self.service.set_initial_role(self.user, Role.ARTIST), Role.ARTIST)
        set_role_claim.assert_called_once_with("newbie", Role.ARTIST)

        with self.assertRaises(FailedPrecondition) as ctx:
            self.service.set_initial_role(self.user, Role.CREATOR)
        self.assertEqual(ctx.exception.message, "ROLE_ALREADY_SET")
        self.assertEqual(User.objects.get(pk=self.user.pk).role, Role.ARTIST)

    def test_creator_gets_creator_profile(self):
        self.service.set_initial_role(self.user, Role.CREATOR)
        self.assertTrue(CreatorProfile.objects.filter(user=self.user).exists())

    def test_admin_role_not_self_assignable(self):
        with self.assertRaises(InvalidArgument):
            self.service.set_initial_role(self.user, Role.ADMIN)
        self.assertEqual(User.objects.get(pk=self.user.pk).role, Role.UNASSIGNED)

    def test_unverified_email(self):
        user = make_user("unverified", role=Role.UNASSIGNED, email_verified=False)
        with self.assertRaises(FailedPrecondition):
            self.service.set_initial_role(user, Role.ARTIST)

    def test_admin_change_user_role(self):
        admin = make_admin()
        target = self.service.admin_change_user_role(admin, "newbie", Role.CREATOR)
        self.assertEqual(target.role, Role.CREATOR)
        self.assertTrue(CreatorProfile.objects.filter(user=self.user).exists())

    def test_admin_change_role_requires_admin(self):
        with self.assertRaises(PermissionDenied) as ctx:
            self.service.admin_change_user_role(make_user("artist"), "newbie", Role.CREATOR)
        self.assertEqual(ctx.exception.message, "ADMIN_ONLY")

    def test_admin_change_role_unknown_user(self):
        with self.assertRaises(NotFound):
            self.service.admin_change_user_role(make_admin(), "nobody", Role.ARTIST)

    def test_admin_set_user_status(self):
        admin = make_admin()
        self.service.admin_set_user_status(admin, "newbie", User.STATUS_SUSPENDED)
        self.assertEqual(User.objects.get(pk=self.user.pk).status, User.STATUS_SUSPENDED)
        with self.assertRaises(InvalidArgument):
            self.service.admin_set_user_status(admin, "admin", User.STATUS_SUSPENDED)
        with self.assertRaises(InvalidArgument):
            self.service.admin_set_user_status(admin, "newbie", "banned")

    def test_suspended_admin_is_rejected(self):
        admin = make_admin(status=User.STATUS_SUSPENDED)
        with self.assertRaises(PermissionDenied) as ctx:
            require_admin(admin)
        self.assertEqual(ctx.exception.message, "USER_SUSPENDED")


class CreatorVerificationTestCase(TestCase):
    def setUp(self):
        self.service = IdentityService()
        self.admin = make_admin()
        self.creator = make_user("creator", role=Role.CREATOR)
        self.paths = ["creatorEvidence/creator/id.png"]

    def test_request_notifies_admins(self):
        profile = self.service.request_creator_verification(self.creator, self.paths, "portfolio")
        self.assertEqual(profile.verification_status, CreatorProfile.VERIFICATION_PENDING)
        self.assertEqual(profile.evidence_paths, self.paths)
        self.assertTrue(
            Notification.objects.filter(recipient=self.admin, notification_type="verification_requested").exists()
        )

    def test_request_twice_is_pending(self):
        self.service.request_creator_verification(self.creator, self.paths)
        with self.assertRaises(FailedPrecondition) as ctx:
            self.service.request_creator_verification(self.creator, self.paths)
        self.assertEqual(ctx.exception.message, "VERIFICATION_PENDING")

    def test_request_validates_evidence(self):
        cases = [
            ([], "EVIDENCE_REQUIRED"),
            (["creatorEvidence/someone_else/id.png"], "EVIDENCE_PATH_INVALID"),
            (["creatorEvidence/creator/../x.png"], "EVIDENCE_PATH_INVALID"),
            ([f"creatorEvidence/creator/{i}.png" for i in range(6)], "TOO_MANY_EVIDENCE_PATHS"),
        ]
        for paths, reason in cases:
            with self.subTest(reason=reason):
                with self.assertRaises(InvalidArgument) as ctx:
                    self.service.request_creator_verification(self.creator, paths)
                self.assertEqual(ctx.exception.message, reason)

    def test_request_creator_only(self):
        with self.assertRaises(PermissionDenied):
            self.service.request_creator_verification(make_user("artist"), self.paths)

    def test_admin_decision_notifies_and_emails(self):
        self.service.request_creator_verification(self.creator, self.paths)
        with self.captureOnCommitCallbacks(execute=True):
            profile = self.service.admin_set_creator_verification(
                self.admin, "creator", CreatorProfile.VERIFICATION_VERIFIED
            )
        self.assertEqual(profile.verification_status, CreatorProfile.VERIFICATION_VERIFIED)
        self.assertEqual(profile.verification_reviewed_by, self.admin)
        self.assertTrue(
            Notification.objects.filter(recipient=self.creator, notification_type="verification_decision").exists()
        )
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["creator@example.org"])

    def test_verified_creator_cannot_request_again(self):
        self.service.admin_set_creator_verification(self.admin, "creator", CreatorProfile.VERIFICATION_VERIFIED)
        with self.assertRaises(FailedPrecondition) as ctx:
            self.service.request_creator_verification(self.creator, self.paths)
        self.assertEqual(ctx.exception.message, "ALREADY_VERIFIED")

    def test_admin_decision_on_non_creator(self):
        make_user("artist")
        with self.assertRaises(NotFound):
            self.service.admin_set_creator_verification(self.admin, "artist", CreatorProfile.VERIFICATION_REJECTED)

    def test_admin_decision_invalid_status(self):
        with self.assertRaises(InvalidArgument):
            self.service.admin_set_creator_verification(self.admin, "creator", CreatorProfile.VERIFICATION_PENDING)
