"""
Emails sent when a subscriber is purged: one to the user, one to the admin.

Neither function raises on a transport failure; the result is the returned
flag and a log line.
"""
import logging
from datetime import timezone as dt_timezone
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone

from .accounts import DAY

logger = logging.getLogger(__name__)

UNKNOWN_DATE = 'Unknown'


def site_name():
    return getattr(settings, 'PURGE_SITE_NAME', '') or 'PurgeSite'


def admin_email():
    address = getattr(settings, 'PURGE_ADMIN_EMAIL', '')
    if address:
        return address
    admins = getattr(settings, 'ADMINS', None) or []
    if not admins:
        return ''
    first = admins[0]
    return first[1] if isinstance(first, (list, tuple)) else first


def _dispatch(to, subject, body, html_body=None):
    msg = EmailMultiAlternatives(
        subject=subject,
        body=body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[to] if to else [],
    )
    if html_body:
        msg.attach_alternative(html_body, "text/html")

    try:
        sent = msg.send(fail_silently=False)
    except (SMTPException, OSError, ValueError) as exc:  # ValueError covers bad headers
        logger.warning("Mail to %r (%s) failed: %s", to, subject, exc)
        return False

    if not sent:
        logger.warning("Mail to %r (%s) was not sent", to, subject)
        return False
    return True


def send_deletion_email(account, config):
    """Tell the user their account was deleted and why."""
    blog_name = site_name()
    context = {
        'account':       account,
        'site_name':     blog_name,
        'days_inactive': config.days_inactive,
    }
    subject = f"Your account on {blog_name} has been deleted"
    body = render_to_string('subscriber_purge/emails/account_deleted.txt', context)
    html_body = render_to_string('subscriber_purge/emails/account_deleted.html', context)
    return _dispatch(account.email, subject, body, html_body)


def send_admin_notification(account, config, now=None):
    blog_name = site_name()
    registered = account.registered_at

    if registered is not None:
        now = now or timezone.now()
        registered_date = registered.astimezone(dt_timezone.utc).strftime('%Y-%m-%d %H:%M:%S')
        days_registered = (now - registered) // DAY
    else:
        registered_date = UNKNOWN_DATE
        days_registered = 0

    subject = f"[{blog_name}] User Account Purged"
    body = render_to_string('subscriber_purge/emails/admin_notification.txt', {
        'account':         account,
        'site_name':       blog_name,
        'registered_date': registered_date,
        'days_registered': days_registered,
        'days_inactive':   config.days_inactive,
    })
    return _dispatch(admin_email(), subject, body)
