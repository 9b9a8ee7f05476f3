"""
Turn pushes and merge commits into CI work.

For every job watching the repository, a background task is queued to
poll the job's SCM or to build it.  The result documents list what was
scheduled.
"""

import logging

from team_events_webhooks.info import find_jobs
from team_events_webhooks.tasks.builds import trigger_job_task
from team_events_webhooks.types import CodePushedArgs, Document, PullRequestMergeArgs
from team_events_webhooks.utils import queue_task

logger = logging.getLogger(__name__)


def poll_or_queue_from_push(args: CodePushedArgs) -> Document:
    """Schedule polling, or a build, of each job watching the pushed repository."""
    jobs = find_jobs(args.repo_uri, ref=args.ref)
    messages = []
    tasks = []
    for job in jobs:
        if job.poll:
            action = "poll"
            messages.append(f"Scheduled polling of {job.name}")
        else:
            action = "build"
            messages.append(f"Scheduled {job.name}")
        task_info = queue_task(trigger_job_task, job.name, action)
        tasks.append(dict(task_info, job=job.name, action=action))

    if not jobs:
        messages.append(f"No jobs watch {args.repo_uri}")
    logger.info(
        f"Push of {args.commit} to {args.repo_uri} by {args.pushed_by or 'someone'}: "
        f"{len(jobs)} job(s) scheduled"
    )
    return {"messages": messages, "tasks": tasks}


def queue_from_merge_commit(args: PullRequestMergeArgs) -> Document:
    """Queue a parameterized build of each job building this repository's pull requests."""
    jobs = find_jobs(args.repo_uri, ref=args.target_ref, pull_requests=True)
    parameters = args.build_parameters()
    messages = []
    tasks = []
    for job in jobs:
        messages.append(f"Scheduled {job.name}")
        task_info = queue_task(trigger_job_task, job.name, "build", parameters)
        tasks.append(dict(task_info, job=job.name, action="build"))

    if not jobs:
        messages.append(f"No jobs build pull requests of {args.repo_uri}")
    logger.info(
        f"Merge commit {args.commit} for pull request {args.pull_request_id} "
        f"of {args.repo_uri}: {len(jobs)} job(s) scheduled"
    )
    return {"messages": messages, "tasks": tasks}
