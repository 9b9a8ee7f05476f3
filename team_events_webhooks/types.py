"""Types specific to team_events_webhooks."""

from __future__ import annotations

import dataclasses
from typing import Any, Dict, Optional, Tuple

# A JSON object, as received in a request body or sent in a response.
Document = Dict[str, Any]


@dataclasses.dataclass(frozen=True)
class CodePushedArgs:
    """What a code push tells us: where it happened and which commit."""
    collection_uri: str
    repo_uri: str
    project_id: str
    repo_id: str
    commit: str
    pushed_by: str

    # The full name of the pushed ref, like "refs/heads/main", if known.
    ref: Optional[str] = None


@dataclasses.dataclass(frozen=True)
class PullRequestMergeArgs(CodePushedArgs):
    """A code push made by a pull request's merge commit."""
    pull_request_id: int = 0
    source_ref: Optional[str] = None
    target_ref: Optional[str] = None
    title: str = ""

    def build_parameters(self) -> Dict[str, str]:
        """The parameters handed to a pull request build."""
        params = {
            "TEAM_COLLECTION_URI": self.collection_uri,
            "TEAM_REPOSITORY_URI": self.repo_uri,
            "TEAM_COMMIT": self.commit,
            "TEAM_PULL_REQUEST_ID": str(self.pull_request_id),
        }
        if self.source_ref:
            params["TEAM_SOURCE_BRANCH"] = self.source_ref
        if self.target_ref:
            params["TEAM_TARGET_BRANCH"] = self.target_ref
        return params


@dataclasses.dataclass(frozen=True)
class Job:
    """A CI job, as declared in the jobs file."""
    name: str
    repository: str

    # fnmatch patterns of full ref names.  Empty means every branch.
    branches: Tuple[str, ...] = ()

    # True: a push schedules polling.  False: a push queues a build.
    poll: bool = False

    # Build merge commits of pull requests.
    pull_requests: bool = False
