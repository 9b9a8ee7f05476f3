"""
Queuable background tasks that talk to the CI server.
"""

from typing import Dict, Optional
from urllib.parse import quote

from urlobject import URLObject

from team_events_webhooks import celery
from team_events_webhooks.auth import get_ci_session
from team_events_webhooks.tasks import logger
from team_events_webhooks.utils import log_check_response

# What we can ask the CI server to do with a job.
JOB_ACTIONS = {"poll", "build"}


@celery.task(bind=True)
def trigger_job_task(_, job_name, action, parameters=None):
    """A bound Celery task to call trigger_job."""
    try:
        return trigger_job(job_name, action, parameters)
    except Exception:
        logger.exception("Couldn't trigger_job_task")
        raise


def trigger_job_url(job_name: str, action: str, parameters: Optional[Dict[str, str]] = None) -> str:
    """
    The CI server URL, relative to the server, that triggers a job.
    """
    if action not in JOB_ACTIONS:
        raise ValueError(f"Unknown job action {action!r}")
    job_path = "/job/" + quote(job_name, safe="")
    if action == "poll":
        return job_path + "/polling"
    if parameters:
        return str(URLObject(job_path + "/buildWithParameters").set_query_params(**parameters))
    return job_path + "/build"


def trigger_job(job_name: str, action: str, parameters: Optional[Dict[str, str]] = None) -> str:
    """
    Ask the CI server to poll or build a job.

    Returns:
        The queue item URL the server reports, or "" if it didn't say.
    """
    url = trigger_job_url(job_name, action, parameters)
    logger.info(f"Triggering {action} of {job_name}: {url}")
    resp = get_ci_session().post(url)
    log_check_response(resp)
    return resp.headers.get("Location", "")
