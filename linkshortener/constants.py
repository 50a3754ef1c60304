from enum import StrEnum


class Shortcode:
    """Shortcode generation bounds."""

    DEFAULT_LENGTH = 7  # 62**7 ~ 3.5 * 10**12 candidates
    MIN_LENGTH = 6
    MAX_LENGTH = 22  # 62**22 > 2**128, no more entropy past this point
    DEFAULT_MAX_ATTEMPTS = 5  # Allocation attempts before giving up


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
