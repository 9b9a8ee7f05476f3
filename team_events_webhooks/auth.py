"""
Create authenticated sessions for access to the CI server.
"""

import requests
from urlobject import URLObject

from team_events_webhooks import settings


class BaseUrlSession(requests.Session):
    """
    A requests Session class that applies a base URL to the requested URL.
    """
    def __init__(self, base_url):
        super().__init__()
        self.base_url = URLObject(base_url)

    def request(self, method, url, data=None, headers=None, **kwargs):
        return super().request(
            method=method,
            url=self.base_url.relative(url),
            data=data,
            headers=headers,
            **kwargs
        )


def get_ci_session():
    """
    Get the CI server session to use, in an easily test-patchable way.
    """
    session = BaseUrlSession(base_url=settings.CI_SERVER_URL)
    if settings.CI_USERNAME and settings.CI_API_TOKEN:
        session.auth = (settings.CI_USERNAME, settings.CI_API_TOKEN)
    session.verify = settings.CI_VERIFY_TLS
    session.trust_env = False   # prevent reading the local .netrc
    return session
