"""
Typed view of the auth user store.

Everything the purge needs from users and comments goes through this module:
finding candidates, counting engagement and deleting an account.
"""
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone as dt_timezone

from dateutil import parser as date_parser
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.utils import timezone

from .models import Comment

logger = logging.getLogger(__name__)

User = get_user_model()

DAY = timedelta(days=1)


def parse_registered(value):
    """
    Return the registration time as an aware datetime, or None if the value
    cannot be understood. Naive values are taken to be UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = date_parser.parse(value)
        except (ValueError, OverflowError):
            return None
    else:
        return None

    if timezone.is_naive(parsed):
        parsed = parsed.replace(tzinfo=dt_timezone.utc)
    return parsed


@dataclass(frozen=True)
class Account:
    id: int
    login: str
    email: str
    registered: object
    roles: frozenset = field(default_factory=frozenset)

    @classmethod
    def from_user(cls, user):
        return cls(
            id=int(user.pk),
            login=str(user.get_username()),
            email=str(user.email or ''),
            registered=user.date_joined,
            roles=frozenset(g.name for g in user.groups.all()),
        )

    @property
    def registered_at(self):
        return parse_registered(self.registered)

    def has_role(self, role):
        return role in self.roles


def find_accounts(role, registered_before, limit=0):
    """
    Accounts in ``role`` registered at or before the cutoff, oldest first.

    Staff and superusers are never returned, even if they still hold the role.
    """
    qs = (
        User.objects
            .filter(groups__name=role, date_joined__lte=registered_before)
            .exclude(is_staff=True)
            .exclude(is_superuser=True)
            .order_by('date_joined', 'pk')
            .prefetch_related('groups')
    )
    if limit:
        qs = qs[:limit]
    return [Account.from_user(u) for u in qs]


def count_engagement(account_id):
    return Comment.objects.filter(user_id=account_id).count()


def delete_account(account_id):
    try:
        deleted, _ = User.objects.filter(pk=account_id).delete()
    except DatabaseError:
        logger.exception("Could not delete account %s", account_id)
        return False

    if not deleted:
        logger.warning("Account %s was already gone when the purge tried to delete it", account_id)
        return False
    return True


def get_days_until_purge(account, days_inactive, now=None):
    registered = account.registered_at
    if registered is None:
        return 0

    now = now or timezone.now()
    purge_time = registered + timedelta(days=days_inactive)
    days_until_purge = math.ceil((purge_time - now) / DAY)
    return max(0, days_until_purge)
