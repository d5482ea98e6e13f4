from django.core.management.base import BaseCommand
from django.db import DatabaseError

from subscriber_purge.accounts import get_days_until_purge
from subscriber_purge.purge import get_inactive_subscribers, run_purge
from subscriber_purge.settings_store import PurgeSettings


class Command(BaseCommand):
    help = 'Runs one subscriber purge cycle (deletes at most one account)'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='List the subscribers scheduled for purge without deleting anything.',
        )

    def handle(self, *args, **options):
        config = PurgeSettings.load()

        try:
            if options['dry_run']:
                self._list_upcoming(config)
                return

            outcome = run_purge(config)
        except DatabaseError as e:
            self.stderr.write(self.style.ERROR(f'Error running subscriber purge: {e}'))
            return

        if outcome.account is None:
            self.stdout.write(self.style.WARNING('No inactive subscribers to purge'))
            return

        account = outcome.account
        if outcome.deleted:
            self.stdout.write(self.style.SUCCESS(f'Purged subscriber: {account.login} (id={account.id})'))
        else:
            self.stderr.write(self.style.ERROR(f'Could not delete subscriber: {account.login} (id={account.id})'))

        if outcome.user_notified is False:
            self.stderr.write(self.style.WARNING(f'Deletion notice to {account.email} failed'))
        if outcome.admin_notified is False:
            self.stderr.write(self.style.WARNING('Admin notice failed'))

    def _list_upcoming(self, config):
        upcoming = get_inactive_subscribers(config.days_inactive, 0)
        if not upcoming:
            self.stdout.write(self.style.WARNING('No subscriber accounts are currently scheduled for purge'))
            return

        for account in upcoming:
            days = get_days_until_purge(account, config.days_inactive)
            self.stdout.write(f'{account.login}\t{account.email}\t{days} day(s) until purge')
