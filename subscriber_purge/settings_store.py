"""
Purge settings kept in a single, non-autoloaded Option row.
"""
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from django.db import DatabaseError, transaction

from .models import Option

logger = logging.getLogger(__name__)

OPTION_NAME = 'subscriber_purge_settings'

DEFAULTS = {
    'days_inactive': 30,
    'send_emails':   True,
    'notify_admin':  True,
}

MIN_DAYS_INACTIVE = 1
MAX_DAYS_INACTIVE = 365


def _load():
    value = (
        Option.objects
              .filter(name=OPTION_NAME)
              .values_list('value', flat=True)
              .first()
    )
    if not isinstance(value, Mapping):
        return {}
    return dict(value)


def get(key, default=None):
    return _load().get(key, default)


def _save(values):
    try:
        with transaction.atomic():
            Option.objects.update_or_create(
                name=OPTION_NAME,
                defaults={'value': values, 'autoload': False},
            )
    except DatabaseError:
        logger.exception("Could not save purge settings")
        return False
    return True


def update(key, value):
    """Store ``value`` under ``key``, keeping every other stored setting."""
    values = _load()
    values[key] = value
    return _save(values)


def _to_int(value):
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        pass
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


FALSE_STRINGS = {'', '0', 'false', 'off', 'no'}


def _to_bool(value):
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_STRINGS
    return bool(value)


def sanitize_settings(data):
    """
    Coerce submitted settings into the stored shape.

    Unknown keys are dropped, missing ones take their default and
    ``days_inactive`` is clamped to 1..365.
    """
    if not isinstance(data, Mapping):
        data = {}

    days = _to_int(data.get('days_inactive', DEFAULTS['days_inactive']))
    return {
        'days_inactive': max(MIN_DAYS_INACTIVE, min(MAX_DAYS_INACTIVE, days)),
        'send_emails':   _to_bool(data.get('send_emails', DEFAULTS['send_emails'])),
        'notify_admin':  _to_bool(data.get('notify_admin', DEFAULTS['notify_admin'])),
    }


def save_settings(data):
    return _save(sanitize_settings(data))


@dataclass(frozen=True)
class PurgeSettings:
    days_inactive: int = DEFAULTS['days_inactive']
    send_emails:   bool = DEFAULTS['send_emails']
    notify_admin:  bool = DEFAULTS['notify_admin']

    @classmethod
    def load(cls):
        return cls(**sanitize_settings(_load()))
