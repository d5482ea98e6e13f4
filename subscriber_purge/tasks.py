import logging

from .purge import run_purge

logger = logging.getLogger(__name__)


def purge_inactive_subscribers():
    """
    Scheduled entry point: run one purge cycle and summarise it.
    """
    try:
        outcome = run_purge()
    except Exception as e:
        logger.exception("Subscriber purge failed")
        return f"Subscriber purge failed: {e}"

    if outcome.account is None:
        return "Purged 0 inactive subscribers."
    if outcome.deleted:
        return f"Purged 1 inactive subscriber: {outcome.account.login}."
    return f"Could not delete inactive subscriber {outcome.account.login}; will retry."
