"""Tests of the event factories and handlers in events/"""

import copy
import json

import pytest

from team_events_webhooks.events import optional, require
from team_events_webhooks.events.git_code_pushed import GitCodePushedHookEvent, collection_uri_from
from team_events_webhooks.events.git_push import GitPushEvent
from team_events_webhooks.events.ping import PingHookEvent
from team_events_webhooks.events.pull_request_merge_commit_created import (
    PullRequestMergeCommitCreatedHookEvent,
)
from team_events_webhooks.exceptions import ValidationError


def sample(event_class):
    """The sample payload of an event, parsed."""
    return json.loads(event_class.Factory.sample_request_payload)


class TestPayloadAccess:
    payload = {
        "resource": {
            "refUpdates": [{"name": "refs/heads/main", "newObjectId": "abc123"}],
            "pullRequestId": 7,
            "merged": True,
            "empty": "",
        },
    }

    def test_optional(self):
        assert optional(self.payload, "resource.refUpdates.0.name") == "refs/heads/main"
        assert optional(self.payload, "resource.refUpdates.1.name") is None
        assert optional(self.payload, "resource.nope", default="x") == "x"
        assert optional(self.payload, "resource.pullRequestId.deeper") is None

    def test_require(self):
        assert require(self.payload, "resource.refUpdates.0.newObjectId") == "abc123"
        assert require(self.payload, "resource.pullRequestId", int) == 7

    @pytest.mark.parametrize("path, expected_type, message", [
        ("resource.missing", str, "Payload is missing 'resource.missing'"),
        ("resource.empty", str, "Payload is missing 'resource.empty'"),
        ("resource.pullRequestId", str, "Payload value 'resource.pullRequestId' must be of type str"),
        ("resource.merged", int, "Payload value 'resource.merged' must be of type int"),
    ])
    def test_require_fails(self, path, expected_type, message):
        with pytest.raises(ValidationError, match=message):
            require(self.payload, path, expected_type)


class TestPing:
    def test_pong(self):
        factory = PingHookEvent.Factory()
        payload = sample(PingHookEvent)
        result = factory.create(payload).perform(payload)
        assert result == {"result": "pong", "request": {"message": "Hello, world!"}}

    def test_empty_payload(self):
        result = PingHookEvent.Factory().create({}).perform({})
        assert result["result"] == "pong"


class TestGitCodePushed:
    def test_args_from_sample(self):
        event = GitCodePushedHookEvent.Factory().create(sample(GitCodePushedHookEvent))
        args = event.args
        assert args.collection_uri == "https://fabrikam.visualstudio.com/DefaultCollection/"
        assert args.repo_uri == "https://fabrikam.visualstudio.com/DefaultCollection/_git/Fabrikam-Fiber-Git"
        assert args.project_id == "6ce954b1-ce1f-45d1-b94d-e6bf2464ba2c"
        assert args.repo_id == "278d5cd2-584d-4b63-824a-2ba458937249"
        assert args.commit == "33b55f7cb7e7e245323987634f960cf4a6e6bc74"
        assert args.pushed_by == "Jamal Hartnett"
        assert args.ref == "refs/heads/main"

    def test_collection_uri_from_resource_containers(self):
        payload = sample(GitCodePushedHookEvent)
        payload["resourceContainers"] = {
            "collection": {"id": "c1", "baseUrl": "https://dev.azure.com/fabrikam/"},
        }
        assert collection_uri_from(payload) == "https://dev.azure.com/fabrikam/"

    def test_collection_uri_is_optional(self, queued_tasks):
        payload = sample(GitCodePushedHookEvent)
        del payload["resource"]["repository"]["url"]
        event = GitCodePushedHookEvent.Factory().create(payload)
        assert event.args.collection_uri == ""
        result = event.perform(payload)
        assert result["messages"] == [
            "Scheduled polling of fabrikam-poll",
            "Scheduled fabrikam-build",
        ]

    def test_collection_uri_without_apis(self):
        payload = sample(GitCodePushedHookEvent)
        payload["resource"]["repository"]["url"] = "https://tfs.example.com/tfs/DefaultCollection"
        assert collection_uri_from(payload) == "https://tfs.example.com/tfs/DefaultCollection"

    @pytest.mark.parametrize("remove", [
        ("resource", "repository", "remoteUrl"),
        ("resource", "repository", "id"),
        ("resource", "refUpdates"),
    ])
    def test_missing_fields(self, remove):
        payload = sample(GitCodePushedHookEvent)
        *parents, key = remove
        target = payload
        for parent in parents:
            target = target[parent]
        del target[key]
        with pytest.raises(ValidationError, match="Payload is missing"):
            GitCodePushedHookEvent.Factory().create(payload)

    def test_no_resource(self):
        with pytest.raises(ValidationError):
            GitCodePushedHookEvent.Factory().create({"eventType": "git.push"})

    def test_perform(self, queued_tasks):
        payload = sample(GitCodePushedHookEvent)
        result = GitCodePushedHookEvent.Factory().create(payload).perform(payload)
        assert result["messages"] == [
            "Scheduled polling of fabrikam-poll",
            "Scheduled fabrikam-build",
        ]
        assert [(t["job"], t["action"], t["task_id"]) for t in result["tasks"]] == [
            ("fabrikam-poll", "poll", "task-1"),
            ("fabrikam-build", "build", "task-2"),
        ]
        assert result["tasks"][0]["status_url"] == "https://webhooks.example.com/tasks/status/task-1"
        assert queued_tasks.call_count == 2
        assert queued_tasks.call_args_list[0].args == ("fabrikam-poll", "poll")
        assert "wsgi_environ" in queued_tasks.call_args_list[0].kwargs

    def test_perform_other_branch(self, queued_tasks):
        payload = sample(GitCodePushedHookEvent)
        payload["resource"]["refUpdates"][0]["name"] = "refs/heads/feature"
        result = GitCodePushedHookEvent.Factory().create(payload).perform(payload)
        # fabrikam-poll only watches main.
        assert result["messages"] == ["Scheduled fabrikam-build"]

    def test_perform_unwatched_repo(self, queued_tasks):
        payload = sample(GitCodePushedHookEvent)
        payload["resource"]["repository"]["remoteUrl"] = "https://example.com/_git/nobody"
        result = GitCodePushedHookEvent.Factory().create(payload).perform(payload)
        assert result == {"messages": ["No jobs watch https://example.com/_git/nobody"], "tasks": []}
        assert queued_tasks.call_count == 0


class TestGitPush:
    def test_args_from_sample(self):
        event = GitPushEvent.Factory().create(sample(GitPushEvent))
        assert event.args.repo_uri == "https://fabrikam.visualstudio.com/DefaultCollection/_git/Fabrikam-Fiber-Git"
        assert event.args.pushed_by == "jhartnett"
        assert event.args.ref is None

    @pytest.mark.parametrize("field", [
        "collectionUri", "repoUri", "projectId", "repoId", "commit", "pushedBy",
    ])
    def test_missing_field(self, field):
        payload = sample(GitPushEvent)
        del payload[field]
        with pytest.raises(ValidationError, match=f"Payload is missing '{field}'"):
            GitPushEvent.Factory().create(payload)

    def test_wrong_type(self):
        payload = sample(GitPushEvent)
        payload["commit"] = ["33b55f7c"]
        with pytest.raises(ValidationError, match="must be of type str"):
            GitPushEvent.Factory().create(payload)

    def test_perform_matches_every_branch(self, queued_tasks):
        payload = sample(GitPushEvent)
        result = GitPushEvent.Factory().create(payload).perform(payload)
        assert result["messages"] == [
            "Scheduled polling of fabrikam-poll",
            "Scheduled fabrikam-build",
        ]


class TestPullRequestMergeCommitCreated:
    def test_args_from_sample(self):
        factory = PullRequestMergeCommitCreatedHookEvent.Factory()
        args = factory.create(sample(PullRequestMergeCommitCreatedHookEvent)).args
        assert args.pull_request_id == 1
        assert args.commit == "eef717f69257a6333f221566c1c987dc94cc0d72"
        assert args.source_ref == "refs/heads/mytopic"
        assert args.target_ref == "refs/heads/main"
        assert args.ref == "refs/heads/main"
        assert args.title == "my first pull request"
        assert args.build_parameters() == {
            "TEAM_COLLECTION_URI": "https://fabrikam.visualstudio.com/DefaultCollection/",
            "TEAM_REPOSITORY_URI": "https://fabrikam.visualstudio.com/DefaultCollection/_git/Fabrikam",
            "TEAM_COMMIT": "eef717f69257a6333f221566c1c987dc94cc0d72",
            "TEAM_PULL_REQUEST_ID": "1",
            "TEAM_SOURCE_BRANCH": "refs/heads/mytopic",
            "TEAM_TARGET_BRANCH": "refs/heads/main",
        }

    @pytest.mark.parametrize("pr_id", ["1", 1.5, True, None])
    def test_bad_pull_request_id(self, pr_id):
        payload = sample(PullRequestMergeCommitCreatedHookEvent)
        payload["resource"]["pullRequestId"] = pr_id
        with pytest.raises(ValidationError, match="pullRequestId"):
            PullRequestMergeCommitCreatedHookEvent.Factory().create(payload)

    def test_missing_merge_commit(self):
        payload = sample(PullRequestMergeCommitCreatedHookEvent)
        del payload["resource"]["lastMergeCommit"]
        with pytest.raises(ValidationError, match="resource.lastMergeCommit.commitId"):
            PullRequestMergeCommitCreatedHookEvent.Factory().create(payload)

    def test_perform(self, queued_tasks):
        payload = sample(PullRequestMergeCommitCreatedHookEvent)
        event = PullRequestMergeCommitCreatedHookEvent.Factory().create(payload)
        result = event.perform(payload)
        # fabrikam-nightly watches the repo, but doesn't build pull requests.
        assert result["messages"] == ["Scheduled fabrikam-prs"]
        assert queued_tasks.call_count == 1
        job_name, action, parameters = queued_tasks.call_args.args
        assert (job_name, action) == ("fabrikam-prs", "build")
        assert parameters == event.args.build_parameters()

    def test_perform_release_branch(self, queued_tasks):
        payload = sample(PullRequestMergeCommitCreatedHookEvent)
        payload["resource"]["targetRefName"] = "refs/heads/release/2.0"
        result = PullRequestMergeCommitCreatedHookEvent.Factory().create(payload).perform(payload)
        assert result["messages"] == ["Scheduled fabrikam-prs"]

    def test_perform_unmatched_branch(self, queued_tasks):
        payload = copy.deepcopy(sample(PullRequestMergeCommitCreatedHookEvent))
        payload["resource"]["targetRefName"] = "refs/heads/experimental"
        result = PullRequestMergeCommitCreatedHookEvent.Factory().create(payload).perform(payload)
        assert result["tasks"] == []
        assert result["messages"] == [
            "No jobs build pull requests of "
            "https://fabrikam.visualstudio.com/DefaultCollection/_git/Fabrikam"
        ]
        assert queued_tasks.call_count == 0
