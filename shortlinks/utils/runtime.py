"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if running in a local environment, False otherwise.

Example:
    >>> from shortlinks.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os

from shortlinks.constants import ENV


def running_locally() -> bool:
    """Check if the application runs locally (APP_ENV=local or under SAM)"""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'
