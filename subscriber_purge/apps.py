from django.apps import AppConfig
from django.conf import settings
import sys

class SubscriberPurgeConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'subscriber_purge'
    verbose_name = 'Subscriber Purge'

    def ready(self):
        import subscriber_purge.signals
        if 'runserver' not in sys.argv and not getattr(settings, 'PURGE_SCHEDULER_ENABLED', False):
            return

        # delay imports until here
        from apscheduler.schedulers.background import BackgroundScheduler
        from django_apscheduler.jobstores import DjangoJobStore
        from subscriber_purge.scheduler import ensure_purge_job

        # avoid double-starting on auto-reload
        if hasattr(self, 'apscheduler'):
            return

        scheduler = BackgroundScheduler()
        scheduler.add_jobstore(DjangoJobStore(), "default")

        # stored jobs are only visible once the scheduler is running
        scheduler.start()
        ensure_purge_job(scheduler)
        self.apscheduler = scheduler
