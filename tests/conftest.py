"""Automatically run by pytest to set up test infrastructure."""

import pytest
import requests_mock

import team_events_webhooks
import team_events_webhooks.utils
from team_events_webhooks.tasks.builds import trigger_job_task

from . import settings as test_settings


@pytest.fixture
def requests_mocker():
    """Make requests_mock available as a fixture."""
    mocker = requests_mock.Mocker(real_http=False, case_sensitive=True)
    mocker.start()
    try:
        yield mocker
    finally:
        mocker.stop()


@pytest.fixture(autouse=True)
def settings_for_tests(mocker):
    for name, value in vars(test_settings).items():
        if name.isupper():
            mocker.patch(f"team_events_webhooks.settings.{name}", value)


@pytest.fixture
def app():
    return team_events_webhooks.create_app(config="testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def configure_flask_app(app):
    """
    Needed to make the app understand it's running under HTTPS, and have Flask
    initialized properly.
    """
    with app.test_request_context('/', base_url="https://webhooks.example.com"):
        yield


@pytest.fixture(autouse=True)
def reset_all_memoized_functions():
    """Clears the values cached by @memoize before each test. Applied automatically."""
    team_events_webhooks.utils.clear_memoized_values()


@pytest.fixture
def queued_tasks(mocker):
    """Keep trigger_job_task from reaching Celery, and record what was queued."""
    task_ids = iter(f"task-{n}" for n in range(1, 100))
    def _fake_delay(*args, **kwargs):
        return mocker.Mock(id=next(task_ids))
    return mocker.patch.object(trigger_job_task, "delay", side_effect=_fake_delay)
