"""
The ``gitCodePushed`` event: a ``git.push`` service hook.
"""

from team_events_webhooks.events import HookEvent, HookEventFactory, optional, require
from team_events_webhooks.scheduling import poll_or_queue_from_push
from team_events_webhooks.types import CodePushedArgs, Document


def collection_uri_from(payload: Document) -> str:
    """
    Find the URI of the project collection that sent a service hook.

    Newer servers say it in ``resourceContainers``, otherwise it's the
    start of the repository's API URL.  Empty if neither is there.
    """
    base_url = optional(payload, "resourceContainers.collection.baseUrl")
    if base_url:
        return base_url
    api_url = optional(payload, "resource.repository.url")
    if not api_url or not isinstance(api_url, str):
        return ""
    collection_uri, sep, _ = api_url.partition("/_apis/")
    if not sep:
        return api_url
    return collection_uri + "/"


def code_pushed_args_from(payload: Document) -> CodePushedArgs:
    """Read the repository and commit of a ``git.push`` service hook."""
    return CodePushedArgs(
        collection_uri=collection_uri_from(payload),
        repo_uri=require(payload, "resource.repository.remoteUrl"),
        project_id=require(payload, "resource.repository.project.id"),
        repo_id=require(payload, "resource.repository.id"),
        commit=require(payload, "resource.refUpdates.0.newObjectId"),
        pushed_by=optional(payload, "resource.pushedBy.displayName", default=""),
        ref=optional(payload, "resource.refUpdates.0.name"),
    )


class GitCodePushedHookEvent(HookEvent):

    class Factory(HookEventFactory):
        sample_request_payload = """{
    "eventType": "git.push",
    "resource": {
        "refUpdates": [
            {
                "name": "refs/heads/main",
                "oldObjectId": "aad331d8d3b131fa9ae03cf5e53965b51942618a",
                "newObjectId": "33b55f7cb7e7e245323987634f960cf4a6e6bc74"
            }
        ],
        "repository": {
            "id": "278d5cd2-584d-4b63-824a-2ba458937249",
            "name": "Fabrikam-Fiber-Git",
            "url": "https://fabrikam.visualstudio.com/DefaultCollection/_apis/git/repositories/278d5cd2-584d-4b63-824a-2ba458937249",
            "project": {
                "id": "6ce954b1-ce1f-45d1-b94d-e6bf2464ba2c",
                "name": "Fabrikam-Fiber-Git"
            },
            "remoteUrl": "https://fabrikam.visualstudio.com/DefaultCollection/_git/Fabrikam-Fiber-Git"
        },
        "pushedBy": {
            "displayName": "Jamal Hartnett",
            "uniqueName": "Windows Live ID\\\\fabrikamfiber4@hotmail.com"
        },
        "pushId": 14
    }
}"""

        def create(self, payload):
            return GitCodePushedHookEvent(code_pushed_args_from(payload))

    def __init__(self, args: CodePushedArgs):
        self.args = args

    def perform(self, payload: Document) -> Document:
        return poll_or_queue_from_push(self.args)
