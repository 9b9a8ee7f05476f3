"""
Get information about the jobs that react to team events.
"""

import fnmatch
import logging
from typing import List, Optional

import yaml

from team_events_webhooks import settings
from team_events_webhooks.types import Job
from team_events_webhooks.utils import memoize_timed

logger = logging.getLogger(__name__)


def _read_yaml_file(filename):
    with open(filename, encoding="utf-8") as f:
        return yaml.safe_load(f)


# Cache the jobs file, because every push reads it.
@memoize_timed(minutes=15)
def get_jobs() -> List[Job]:
    """
    Read the jobs file, a YAML list of jobs like::

        - name: web-app
          repository: https://dev.azure.com/org/Project/_git/web-app
          branches: ["refs/heads/main"]
          poll: true
          pull_requests: true

    Only ``name`` and ``repository`` are required.
    """
    jobs_data = _read_yaml_file(settings.JOBS_FILE) or []
    jobs = []
    for job_data in jobs_data:
        jobs.append(Job(
            name=job_data["name"],
            repository=job_data["repository"],
            branches=tuple(job_data.get("branches") or ()),
            poll=bool(job_data.get("poll", False)),
            pull_requests=bool(job_data.get("pull_requests", False)),
        ))
    logger.debug(f"Read {len(jobs)} jobs from {settings.JOBS_FILE}")
    return jobs


def normalize_repo_uri(uri: str) -> str:
    """Make repository URLs comparable: lowercase, no trailing slash or .git."""
    uri = uri.strip().lower().rstrip("/")
    if uri.endswith(".git"):
        uri = uri[:-4]
    return uri


def branch_matches(job: Job, ref: Optional[str]) -> bool:
    """Does a pushed `ref` match the branch patterns of `job`?"""
    if not job.branches or ref is None:
        return True
    return any(fnmatch.fnmatchcase(ref, pattern) for pattern in job.branches)


def find_jobs(repo_uri: str, ref: Optional[str] = None, pull_requests: bool = False) -> List[Job]:
    """
    Find the jobs that watch a repository.

    Arguments:
        `repo_uri`: the remote URL of the repository.
        `ref`: the full name of the pushed ref, if known.
        `pull_requests`: only find jobs that build pull requests.
    """
    wanted = normalize_repo_uri(repo_uri)
    jobs = []
    for job in get_jobs():
        if normalize_repo_uri(job.repository) != wanted:
            continue
        if pull_requests and not job.pull_requests:
            continue
        if branch_matches(job, ref):
            jobs.append(job)
    return jobs
