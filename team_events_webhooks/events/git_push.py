"""
The ``gitPush`` event, the older flat description of a push.
"""

from team_events_webhooks.events import HookEvent, HookEventFactory, require
from team_events_webhooks.scheduling import poll_or_queue_from_push
from team_events_webhooks.types import CodePushedArgs, Document


class GitPushEvent(HookEvent):

    class Factory(HookEventFactory):
        sample_request_payload = """{
    "collectionUri": "https://fabrikam.visualstudio.com/DefaultCollection/",
    "repoUri": "https://fabrikam.visualstudio.com/DefaultCollection/_git/Fabrikam-Fiber-Git",
    "projectId": "Fabrikam-Fiber-Git",
    "repoId": "Fabrikam-Fiber-Git",
    "commit": "33b55f7cb7e7e245323987634f960cf4a6e6bc74",
    "pushedBy": "jhartnett"
}"""

        def create(self, payload):
            args = CodePushedArgs(
                collection_uri=require(payload, "collectionUri"),
                repo_uri=require(payload, "repoUri"),
                project_id=require(payload, "projectId"),
                repo_id=require(payload, "repoId"),
                commit=require(payload, "commit"),
                pushed_by=require(payload, "pushedBy"),
            )
            return GitPushEvent(args)

    def __init__(self, args: CodePushedArgs):
        self.args = args

    def perform(self, payload: Document) -> Document:
        return poll_or_queue_from_push(self.args)
