import logging
from datetime import timedelta

from apscheduler.triggers.interval import IntervalTrigger
from django.conf import settings

logger = logging.getLogger(__name__)

PURGE_JOB_ID = 'purge_inactive_subscribers'
PURGE_JOB_FUNC = 'subscriber_purge.tasks:purge_inactive_subscribers'


def purge_interval():
    return timedelta(minutes=getattr(settings, 'PURGE_INTERVAL_MINUTES', 15))


def _add_purge_job(scheduler):
    scheduler.add_job(
        func=PURGE_JOB_FUNC,
        trigger='interval',
        minutes=int(purge_interval().total_seconds() // 60),
        id=PURGE_JOB_ID,
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )


def ensure_purge_job(scheduler):
    """
    Make sure the purge job exists and runs on the expected interval.

    A job whose trigger was changed elsewhere is removed and added again.
    Returns True if the job was (re)registered.
    """
    job = scheduler.get_job(PURGE_JOB_ID)

    if job is None:
        _add_purge_job(scheduler)
        logger.info("Scheduled %s every %s", PURGE_JOB_ID, purge_interval())
        return True

    trigger = job.trigger
    if isinstance(trigger, IntervalTrigger) and trigger.interval == purge_interval():
        return False

    logger.warning("Rescheduling %s: found trigger %s, expected every %s", PURGE_JOB_ID, trigger, purge_interval())
    scheduler.remove_job(PURGE_JOB_ID)
    _add_purge_job(scheduler)
    return True
