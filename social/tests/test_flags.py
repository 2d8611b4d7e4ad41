import os
from unittest.mock import patch

from django.test import SimpleTestCase

from social.errors import FailedPrecondition
from social.flags import assert_social_enabled, is_social_enabled, parse_boolean_flag


class FeatureFlagTests(SimpleTestCase):
    def test_parse_boolean_flag(self):
        for raw in ("true", " YES ", "1", "on"):
            self.assertTrue(parse_boolean_flag(raw, False))
        for raw in ("false", "No", "0", "off"):
            self.assertFalse(parse_boolean_flag(raw, True))
        self.assertTrue(parse_boolean_flag(None, True))
        self.assertFalse(parse_boolean_flag("maybe", False))

    def test_social_enabled_by_default(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertTrue(is_social_enabled())
            assert_social_enabled()

    def test_social_disabled(self):
        with patch.dict(os.environ, {"SOCIAL_ENABLED": "off"}):
            self.assertFalse(is_social_enabled())
            with self.assertRaises(FailedPrecondition) as ctx:
                assert_social_enabled()
        self.assertEqual(ctx.exception.message, "SOCIAL_DISABLED")
