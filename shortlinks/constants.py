from enum import StrEnum


class TTL:
    """Cache TTL tiers in seconds."""

    HOT = 60 * 60  # 1 hour
    WARM = 24 * 60 * 60  # 24 hours
    COOL = 7 * 24 * 60 * 60  # 7 days


class Defaults:
    """Default manager parameters."""

    SHORT_ID_LENGTH = 4  # Initial short ID length before any escalation
    MAX_ATTEMPTS = 3  # Candidate batches tried before giving up
    BATCH_SIZE = 50  # Candidates checked against the backend per attempt
    MEMORY_CACHE_SIZE = 1024  # Max entries held by an in-process cache


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'
