from unittest.mock import patch

from django.db import DatabaseError
from django.test import TestCase

from .. import settings_store
from ..models import Option
from ..settings_store import OPTION_NAME, PurgeSettings, sanitize_settings


class SettingsGetUpdateTests(TestCase):
    def test_get_returns_default_when_missing(self):
        """With nothing stored every key falls back to the caller's default"""
        self.assertEqual(settings_store.get('days_inactive', 30), 30)
        self.assertTrue(settings_store.get('send_emails', True))
        self.assertIsNone(settings_store.get('notify_admin'))

    def test_update_stores_value_without_autoload(self):
        """update() writes the whole mapping into one non-autoloaded row"""
        self.assertTrue(settings_store.update('days_inactive', 45))

        self.assertEqual(settings_store.get('days_inactive', 0), 45)
        option = Option.objects.get(name=OPTION_NAME)
        self.assertFalse(option.autoload)
        self.assertEqual(option.value, {'days_inactive': 45})

    def test_update_keeps_other_keys(self):
        settings_store.update('days_inactive', 60)
        settings_store.update('send_emails', False)

        option = Option.objects.get(name=OPTION_NAME)
        self.assertEqual(option.value, {'days_inactive': 60, 'send_emails': False})
        self.assertEqual(Option.objects.filter(name=OPTION_NAME).count(), 1)

    def test_get_handles_non_mapping_value(self):
        """A malformed stored value is treated as empty"""
        for bad in ('not-a-dict', [1, 2, 3], 42, None):
            Option.objects.update_or_create(name=OPTION_NAME, defaults={'value': bad})

            self.assertTrue(settings_store.get('send_emails', True))
            self.assertEqual(settings_store.get('days_inactive', 30), 30)
            self.assertTrue(settings_store.get('notify_admin', True))

    def test_update_over_malformed_value_starts_fresh(self):
        Option.objects.create(name=OPTION_NAME, value='garbage')

        self.assertTrue(settings_store.update('notify_admin', False))
        self.assertEqual(Option.objects.get(name=OPTION_NAME).value, {'notify_admin': False})

    def test_failed_update_leaves_previous_value(self):
        """A persistence failure returns False and the old value stays readable"""
        settings_store.update('days_inactive', 45)

        with patch('subscriber_purge.settings_store.Option.objects.update_or_create',
                   side_effect=DatabaseError('disk full')):
            self.assertFalse(settings_store.update('days_inactive', 90))

        self.assertEqual(settings_store.get('days_inactive', 30), 45)


class SanitizeSettingsTests(TestCase):
    def test_clamps_days_inactive(self):
        cases = {
            0: 1,
            -5: 1,
            1: 1,
            365: 365,
            366: 365,
            10 ** 9: 365,
            -10 ** 9: 1,
            '45': 45,
            '3.7': 3,
            7.9: 7,
            'abc': 1,
            None: 1,
            float('inf'): 1,
        }
        for given, expected in cases.items():
            with self.subTest(given=given):
                self.assertEqual(sanitize_settings({'days_inactive': given})['days_inactive'], expected)

    def test_booleans_are_coerced(self):
        result = sanitize_settings({'days_inactive': 10, 'send_emails': '1', 'notify_admin': 0})
        self.assertIs(result['send_emails'], True)
        self.assertIs(result['notify_admin'], False)

    def test_false_like_strings_are_false(self):
        for value in ('0', '', 'false', 'False', 'off', 'no', ' 0 '):
            with self.subTest(value=value):
                result = sanitize_settings({'send_emails': value, 'notify_admin': value})
                self.assertIs(result['send_emails'], False)
                self.assertIs(result['notify_admin'], False)

        result = sanitize_settings({'send_emails': '1', 'notify_admin': 'on'})
        self.assertIs(result['send_emails'], True)
        self.assertIs(result['notify_admin'], True)

    def test_save_settings_with_string_zero_disables_notifications(self):
        settings_store.save_settings({'days_inactive': '30', 'send_emails': '0', 'notify_admin': '0'})

        config = PurgeSettings.load()
        self.assertFalse(config.send_emails)
        self.assertFalse(config.notify_admin)

    def test_missing_keys_fall_back_to_defaults(self):
        self.assertEqual(
            sanitize_settings({}),
            {'days_inactive': 30, 'send_emails': True, 'notify_admin': True},
        )

    def test_non_mapping_input_gives_defaults(self):
        for bad in ('string', None, [('days_inactive', 5)]):
            self.assertEqual(sanitize_settings(bad), settings_store.DEFAULTS)

    def test_unknown_keys_are_dropped(self):
        result = sanitize_settings({'days_inactive': 10, 'evil': 'yes', 'role': 'admin'})
        self.assertEqual(set(result), {'days_inactive', 'send_emails', 'notify_admin'})

    def test_sanitize_is_idempotent(self):
        for data in ({'days_inactive': 9999, 'send_emails': ''},
                     {'days_inactive': '-3', 'notify_admin': 'yes'},
                     {}):
            once = sanitize_settings(data)
            self.assertEqual(sanitize_settings(once), once)

    def test_save_settings_sanitizes_before_writing(self):
        self.assertTrue(settings_store.save_settings({'days_inactive': 500, 'send_emails': 0, 'junk': 1}))

        self.assertEqual(
            Option.objects.get(name=OPTION_NAME).value,
            {'days_inactive': 365, 'send_emails': False, 'notify_admin': True},
        )


class PurgeSettingsTests(TestCase):
    def test_load_defaults(self):
        config = PurgeSettings.load()
        self.assertEqual(config, PurgeSettings(days_inactive=30, send_emails=True, notify_admin=True))

    def test_load_stored_values(self):
        settings_store.update('days_inactive', 45)
        settings_store.update('notify_admin', False)

        config = PurgeSettings.load()
        self.assertEqual(config.days_inactive, 45)
        self.assertTrue(config.send_emails)
        self.assertFalse(config.notify_admin)

    def test_load_clamps_out_of_range_stored_days(self):
        settings_store.update('days_inactive', 0)
        self.assertEqual(PurgeSettings.load().days_inactive, 1)
