"""Utility functions for application configuration management.

Configuration is stored as a JSON document in **AWS AppConfig**. Each
environment (`APP_ENV`) has a dedicated AppConfig *Environment* within the
AppConfig *Application* identified by `APP_NAME`.

The configuration JSON follows this structure:

    {
        "active_backend": "redis",
        "configs": {
            "shortlinks": {
                "redis": {"host": "...", "port": 6379, "db": 0},
                "manager": {"short_id_length": 4, "max_attempts": 3},
                "caches": [{"type": "memory", "max_size": 1024}, {"type": "redis", "ttl": 3600}]
            }
        }
    }

Functions:
    app_env() -> str
        Current application environment (`APP_ENV`), `'local'` by default.

    app_name() -> str | None
        Application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Key prefix for DAOs, or None if `APP_NAME` is not set.

    load_config(section: str) -> dict
        Load one section of the AppConfig document. When running locally
        with a local AppConfig agent configured, the agent is used instead.

Example:
    >>> from shortlinks.utils.config import load_config
    >>> config = load_config('shortlinks')
    >>> config['backend']
    'redis'
    >>> config['redis']['host']
    'redis-15501.host.docker.internal'
"""

import os
import json
import functools
import logging
import urllib.parse
import urllib.request
from collections.abc import Callable
from typing import Any

import boto3

from shortlinks.constants import ENV
from shortlinks.exceptions import AppConfigError
from shortlinks.utils.helpers import require_environment
from shortlinks.utils.runtime import running_locally


logger = logging.getLogger(__name__)

LOCAL_AGENT_HOSTS = frozenset({'localhost', '127.0.0.1', 'host.docker.internal'})
LOCAL_AGENT_PORT = 2772


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'shortlinks'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'shortlinks:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def extract_section(document: dict[str, Any], section: str) -> dict[str, Any]:
    """Extract a section of the AppConfig document

    Returns:
        dict: {"backend": <active backend>, **<section config>}

    Raises:
        AppConfigError:
            If the document lacks the active backend or the requested section.
    """
    try:
        backend = document['active_backend']
        section_config = document['configs'][section]
    except (KeyError, TypeError) as e:
        raise AppConfigError(f"Malformed AppConfig document: missing {e} for section '{section}'.") from e
    return {'backend': backend, **section_config}


def validate_agent_url(url: str | None) -> str:
    """Accept only local AppConfig agent URLs, '' if unset

    Raises:
        ValueError: if the URL doesn't point to a local agent.
    """
    if not url:
        return ''
    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'}:
        raise ValueError(f'Bad scheme {url}')
    if components.hostname not in LOCAL_AGENT_HOSTS:
        raise ValueError(f'Bad host {url}')
    if components.port not in {LOCAL_AGENT_PORT, None}:
        raise ValueError(f'Bad port {url}')
    return url


def _load_local_appconfig(func: Callable[[str], dict]) -> Callable[[str], dict]:
    """Decorator: load AppConfig from a local AppConfig agent when running locally

    Environment variables used:
        APPCONFIG_AGENT_URL    : Base URL of the local agent (e.g. http://localhost:2772).
        APPCONFIG_PROFILE_NAME : Optional profile name (default: "backend-config").
    """

    @functools.wraps(func)
    def wrapper(section: str, *args, **kwargs) -> dict:
        agent_url = validate_agent_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(section, *args, **kwargs)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'section': section})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        logger.debug('Loaded AppConfig from local agent.', extra={'section': section})
        return extract_section(document, section)

    return wrapper


@_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(section: str) -> dict:
    """Load one section of the configuration document from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID      : AppConfig Application ID
        APPCONFIG_ENV_ID      : AppConfig Environment ID
        APPCONFIG_PROFILE_ID  : AppConfig Configuration Profile ID

    Args:
        section (str):
            Name of the configuration section (e.g. "shortlinks").

    Returns:
        dict: {"backend": <active backend>, **<section config>}

    Raises:
        MissingEnvironmentVariableError:
            If a required environment variable is missing.
        AppConfigError:
            If the document is malformed.
        botocore.exceptions.BotoCoreError / ClientError:
            If the AppConfig Data API calls fail.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'section': section})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    try:
        document = json.loads(content.decode('utf-8'))
    except json.JSONDecodeError as e:
        raise AppConfigError('AppConfig document is not valid JSON.') from e

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'section': section})
    return extract_section(document, section)
