"""Helper utilities.

Functions:
    days_ago(days: int | float) -> datetime
        Compute the UTC moment `days` days before now
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
"""

import os
import functools
from datetime import datetime, timedelta, UTC
from collections.abc import Callable

from shortlinks.exceptions import MissingEnvironmentVariableError


def days_ago(days: int | float) -> datetime:
    """Compute the UTC moment `days` days before now.

    Example:
        >>> # at 2025-10-15T00:00:00Z
        >>> days_ago(30)
        datetime.datetime(2025, 9, 15, 0, 0, tzinfo=datetime.timezone.utc)
    """
    return datetime.now(UTC) - timedelta(days=days)


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
