"""Settings for how the webhook should behave."""

import os
from typing import Optional


def read_bool_setting(setting_name: str, default: bool = False) -> bool:
    """Read a yes/no setting from the environment.

    "1", "true", "yes" and "on" (any case) are true, anything else is false.
    """
    value: Optional[str] = os.environ.get(setting_name, None)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# The CI server that jobs are triggered on, like "https://ci.example.com".
CI_SERVER_URL = os.environ.get("CI_SERVER_URL", "http://localhost:8080")

# Credentials for triggering jobs on the CI server.
CI_USERNAME = os.environ.get("CI_USERNAME", None)
CI_API_TOKEN = os.environ.get("CI_API_TOKEN", None)

# Verify TLS certificates when talking to the CI server.
CI_VERIFY_TLS = read_bool_setting("CI_VERIFY_TLS", default=True)

# The YAML file listing the jobs that react to team events.
JOBS_FILE = os.environ.get("JOBS_FILE", "jobs.yaml")
