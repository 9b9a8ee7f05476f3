"""
Celery logging, and a view of how queued job triggers are doing.
"""

from celery.utils.log import get_task_logger
from flask import Blueprint, jsonify

from team_events_webhooks import celery, log_level
from team_events_webhooks.utils import requires_auth


logger = get_task_logger(__name__)
logger.setLevel(log_level)

tasks = Blueprint('tasks', __name__)


@tasks.route('/status/<task_id>')
@requires_auth
def status(task_id):
    """
    Report on a queued task, like the ones listed in an event's response.

    ``info`` is the task's return value (the CI queue URL for a job
    trigger), or the repr of the exception it failed with.
    """
    result = celery.AsyncResult(task_id)
    info = result.info
    if isinstance(info, BaseException):
        info = repr(info)
    return jsonify({
        "task_id": task_id,
        "status": result.state,
        "ready": result.ready(),
        "info": info,
    })
