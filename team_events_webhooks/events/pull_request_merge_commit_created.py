"""
The ``pullRequestMergeCommitCreated`` event: a ``git.pullrequest.merged``
service hook, sent when the server has made a merge commit for a pull
request.
"""

from team_events_webhooks.events import HookEvent, HookEventFactory, optional, require
from team_events_webhooks.events.git_code_pushed import collection_uri_from
from team_events_webhooks.scheduling import queue_from_merge_commit
from team_events_webhooks.types import Document, PullRequestMergeArgs


class PullRequestMergeCommitCreatedHookEvent(HookEvent):

    class Factory(HookEventFactory):
        sample_request_payload = """{
    "eventType": "git.pullrequest.merged",
    "resource": {
        "repository": {
            "id": "4bc14d40-c903-45e2-872e-0462c7748079",
            "name": "Fabrikam",
            "url": "https://fabrikam.visualstudio.com/DefaultCollection/_apis/git/repositories/4bc14d40-c903-45e2-872e-0462c7748079",
            "project": {
                "id": "6ce954b1-ce1f-45d1-b94d-e6bf2464ba2c",
                "name": "Fabrikam"
            },
            "remoteUrl": "https://fabrikam.visualstudio.com/DefaultCollection/_git/Fabrikam"
        },
        "pullRequestId": 1,
        "status": "active",
        "createdBy": {
            "displayName": "Jamal Hartnett"
        },
        "title": "my first pull request",
        "sourceRefName": "refs/heads/mytopic",
        "targetRefName": "refs/heads/main",
        "mergeStatus": "succeeded",
        "lastMergeCommit": {
            "commitId": "eef717f69257a6333f221566c1c987dc94cc0d72"
        }
    }
}"""

        def create(self, payload):
            args = PullRequestMergeArgs(
                collection_uri=collection_uri_from(payload),
                repo_uri=require(payload, "resource.repository.remoteUrl"),
                project_id=require(payload, "resource.repository.project.id"),
                repo_id=require(payload, "resource.repository.id"),
                commit=require(payload, "resource.lastMergeCommit.commitId"),
                pushed_by=optional(payload, "resource.createdBy.displayName", default=""),
                ref=optional(payload, "resource.targetRefName"),
                pull_request_id=require(payload, "resource.pullRequestId", int),
                source_ref=optional(payload, "resource.sourceRefName"),
                target_ref=optional(payload, "resource.targetRefName"),
                title=optional(payload, "resource.title", default=""),
            )
            return PullRequestMergeCommitCreatedHookEvent(args)

    def __init__(self, args: PullRequestMergeArgs):
        self.args = args

    def perform(self, payload: Document) -> Document:
        return queue_from_merge_commit(self.args)
