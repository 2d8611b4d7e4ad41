from django.test import TestCase
from rest_framework import exceptions
from unittest.mock import patch, MagicMock
from social.authentication import FirebaseAuthentication
from social.models import PublicProfile, Role, User
from social.tests.helpers import make_user


class FirebaseAuthenticationTests(TestCase):
    def setUp(self):
        self.auth = FirebaseAuthentication()
        self.request = MagicMock()

    @patch('social.authentication.verify_id_token')
    def test_authenticate_existing_user(self, mock_verify):
        user = make_user("uid-1")
        self.request.META = {'HTTP_AUTHORIZATION': 'Bearer token123'}
        mock_verify.return_value = {'uid': 'uid-1', 'email': 'uid-1@example.org', 'email_verified': True}

        authed, decoded = self.auth.authenticate(self.request)

        self.assertEqual(authed, user)
        self.assertEqual(decoded['uid'], 'uid-1')
        mock_verify.assert_called_once_with('token123')

    @patch('social.authentication.verify_id_token')
    def test_first_request_provisions_user(self, mock_verify):
        self.request.META = {'HTTP_AUTHORIZATION': 'Bearer token123'}
        mock_verify.return_value = {'uid': 'new-uid', 'email': 'New@Example.org', 'name': 'New Person'}

        user, _ = self.auth.authenticate(self.request)

        self.assertEqual(user.username, 'new-uid')
        self.assertEqual(user.email, 'new@example.org')
        self.assertFalse(user.email_verified)
        self.assertEqual(user.role, Role.UNASSIGNED)
        self.assertEqual(PublicProfile.objects.get(user=user).handle, 'new_person')

    @patch('social.authentication.verify_id_token')
    def test_email_verification_refreshed_from_token(self, mock_verify):
        make_user("uid-1", email_verified=False)
        self.request.META = {'HTTP_AUTHORIZATION': 'Bearer token123'}
        mock_verify.return_value = {'uid': 'uid-1', 'email_verified': True}

        self.auth.authenticate(self.request)

        self.assertTrue(User.objects.get(username='uid-1').email_verified)

    def test_authenticate_no_header(self):
        self.request.META = {}
        self.assertIsNone(self.auth.authenticate(self.request))

    @patch('social.authentication.verify_id_token')
    def test_authenticate_other_scheme_is_ignored(self, mock_verify):
        self.request.META = {'HTTP_AUTHORIZATION': 'Basic token'}
        self.assertIsNone(self.auth.authenticate(self.request))
        mock_verify.assert_not_called()

    @patch('social.authentication.verify_id_token')
    def test_authenticate_invalid_token(self, mock_verify):
        self.request.META = {'HTTP_AUTHORIZATION': 'Bearer bad'}
        mock_verify.side_effect = ValueError("Boom")

        with self.assertRaises(exceptions.AuthenticationFailed):
            self.auth.authenticate(self.request)

    @patch('social.authentication.verify_id_token')
    def test_authenticate_token_without_uid(self, mock_verify):
        self.request.META = {'HTTP_AUTHORIZATION': 'Bearer token'}
        mock_verify.return_value = {'email': 'x@example.org'}

        with self.assertRaises(exceptions.AuthenticationFailed):
            self.auth.authenticate(self.request)
        self.assertFalse(User.objects.exists())

    def test_authenticate_header(self):
        self.assertEqual(self.auth.authenticate_header(self.request), 'Bearer')
