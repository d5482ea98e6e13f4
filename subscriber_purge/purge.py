"""
Selection and execution of the subscriber purge.

A cycle deletes at most one account: the oldest subscriber past the
inactivity threshold with no comments. The scheduler interval is the rate
limit for both deletions and outgoing mail.
"""
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from django.conf import settings
from django.utils import timezone

from . import accounts
from .accounts import Account
from .notifications import send_admin_notification, send_deletion_email
from .settings_store import PurgeSettings

logger = logging.getLogger(__name__)

DEFAULT_ROLE = 'subscriber'


def target_role():
    return getattr(settings, 'PURGE_TARGET_ROLE', DEFAULT_ROLE) or DEFAULT_ROLE


def get_inactive_subscribers(days_inactive, limit=0, role=None):
    """
    Subscribers registered at least ``days_inactive`` days ago with no comments,
    oldest first.

    ``limit`` caps the candidate query, not the result: accounts with comments
    are dropped after the cap, so fewer than ``limit`` accounts may come back.
    """
    cutoff = timezone.now() - timedelta(days=days_inactive)
    candidates = accounts.find_accounts(role or target_role(), cutoff, limit)

    inactive = []
    for account in candidates:
        if accounts.count_engagement(account.id) != 0:
            continue

        inactive.append(account)

        if limit and len(inactive) >= limit:
            break

    return inactive


@dataclass
class PurgeOutcome:
    account: Optional[Account] = None
    user_notified: Optional[bool] = None
    admin_notified: Optional[bool] = None
    deleted: bool = False


def run_purge(config=None):
    """
    Run one purge cycle.

    Mail failures are logged and do not stop the deletion. A failed deletion
    leaves the account in place for the next cycle.
    """
    config = config or PurgeSettings.load()
    outcome = PurgeOutcome()

    users = get_inactive_subscribers(config.days_inactive, 1)
    if not users:
        logger.debug("No inactive subscribers older than %s days", config.days_inactive)
        return outcome

    account = outcome.account = users[0]
    logger.info("Purging subscriber %s (id=%s)", account.login, account.id)

    if config.send_emails:
        outcome.user_notified = send_deletion_email(account, config)
        if not outcome.user_notified:
            logger.warning("Deletion notice to %s failed", account.email)

    if config.notify_admin:
        outcome.admin_notified = send_admin_notification(account, config)
        if not outcome.admin_notified:
            logger.warning("Admin notice for subscriber %s failed", account.id)

    outcome.deleted = accounts.delete_account(account.id)
    if outcome.deleted:
        logger.info("Deleted subscriber %s (id=%s)", account.login, account.id)
    else:
        logger.warning("Subscriber %s (id=%s) was not deleted; retrying next cycle", account.login, account.id)

    return outcome
