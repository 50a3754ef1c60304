"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to
access configuration data stored in **AWS AppConfig**. Each environment
(`APP_ENV`) has a dedicated AppConfig *Environment* within the shared
AppConfig *Application* identified by `APP_NAME`. Configuration data is
stored as a JSON document under a configuration profile (typically
`backend-config`) and deployed to the corresponding environment.

The configuration JSON follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "shortener": {
            "domain": "sho.rt",
            "shortcode_length": 7,
            "max_attempts": 5
        },
        "configs": {
            "shorten_url": {
                "redis": { ... }
            },
            "redirect_url": {
                "redis": { ... }
            }
        }
    }

Each Lambda loads its own section (e.g., `"shorten_url"`) from this
AppConfig document, along with the shared `"shortener"` section.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    load_config(lambda_name: str) -> dict
        Load configuration for a given Lambda from AWS AppConfig and
        return it as a Python dictionary. In SAM, load configuration
        from a local AppConfig agent.

    shortener_settings(app_config: dict) -> ShortenerSettings
        Validate the `shortener` section of a loaded configuration.

Example:
    Typical usage inside a Lambda handler:

        >>> from linkshortener.utils.config import load_config
        >>> config = load_config('shorten_url')
        >>> print(config['redis']['host'])
        redis-15501.host.docker.internal
"""

import os
import json
import functools
import urllib.parse
import urllib.request
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from collections.abc import Callable

import boto3

from linkshortener.constants import ENV, Shortcode
from linkshortener.exceptions import BadConfigurationError
from linkshortener.utils.helpers import require_environment
from linkshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Finds the project root via the CloudFormation environment variable PROJECT_ROOT.
    Falls back to the current file.

    Returns:
        Path:
            Absolute path to the project root directory.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, os.path.dirname(__file__)))


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _lambda_section(document: dict[str, Any], lambda_name: str) -> dict[str, Any]:
    """Pick the active backend config for one lambda out of a full AppConfig document"""
    backend = document['active_backend']
    return {
        backend: document['configs'][lambda_name][backend],
        'shortener': document.get('shortener', {}),
    }


def _validate_appconfig_agent_url(url: str | None) -> str:
    if not url:
        return ''
    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'}:
        raise ValueError(f'Bad scheme {url}')
    if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal'}:
        raise ValueError(f'Bad host {url}')
    if components.port not in {2772, None}:
        raise ValueError(f'Bad port {url}')
    return url


def _sam_load_local_appconfig(func: Callable[[str], dict]) -> Callable[[str], dict]:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the app configuration JSON from the local AppConfig agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).

    Environment variables used:
        APPCONFIG_AGENT_URL     – Base URL of the local AppConfig Agent (e.g., http://host.docker.internal:2772).
        APPCONFIG_PROFILE_NAME  – Optional profile name (default: "backend-config").

    Args:
        func (Callable[[str], dict]):
            load_config()

    Returns:
        Callable[[str], dict]:
            A compatible function with load_config() which prefers using the local AppConfig agent in SAM.
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> dict:
        agent_url = _validate_appconfig_agent_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name, *args, **kwargs)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        data = _lambda_section(document, lambda_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> dict:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'shorten_url', 'redirect_url').

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: The lambda's backend config plus the shared "shortener" section.

    Example:
        >>> app_config = load_config('shorten_url')
        >>> app_config['redis']['host']
        'redis-15501.host.docker.internal'
        >>> app_config['shortener']['domain']
        'sho.rt'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

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
    document = json.loads(content.decode('utf-8'))

    data = _lambda_section(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data


@dataclass(frozen=True)
class ShortenerSettings:
    """Validated shortener settings.

    Attributes:
        domain (str | None):
            The service's own public domain. Long URLs containing it are rejected.
            None means "use the domain the request was addressed to".
        shortcode_length (int):
            Length of newly generated shortcodes.
        max_attempts (int):
            Allocation attempts before giving up on a shorten request.
    """

    domain: str | None = None
    shortcode_length: int = Shortcode.DEFAULT_LENGTH
    max_attempts: int = Shortcode.DEFAULT_MAX_ATTEMPTS


def shortener_settings(app_config: dict[str, Any]) -> ShortenerSettings:
    """Validate the "shortener" section of a loaded configuration

    Args:
        app_config (dict):
            Configuration returned by load_config(). A missing section
            yields the default settings.

    Returns:
        ShortenerSettings: validated settings

    Raises:
        BadConfigurationError:
            If any setting has the wrong type or is out of range.

    Example:
        >>> shortener_settings({'shortener': {'domain': 'sho.rt'}})
        ShortenerSettings(domain='sho.rt', shortcode_length=7, max_attempts=5)
    """
    section = app_config.get('shortener') or {}
    if not isinstance(section, dict):
        raise BadConfigurationError(f"'shortener' config section must be an object (given type: {type(section)}).")

    domain = section.get('domain') or None
    length = section.get('shortcode_length', Shortcode.DEFAULT_LENGTH)
    attempts = section.get('max_attempts', Shortcode.DEFAULT_MAX_ATTEMPTS)

    if domain is not None and not isinstance(domain, str):
        raise BadConfigurationError(f"'shortener.domain' must be a string (given type: {type(domain)}).")
    if not isinstance(length, int) or not Shortcode.MIN_LENGTH <= length <= Shortcode.MAX_LENGTH:
        raise BadConfigurationError(
            f"'shortener.shortcode_length' must be an integer between {Shortcode.MIN_LENGTH} "
            f'and {Shortcode.MAX_LENGTH} (given value: {length!r}).'
        )
    if not isinstance(attempts, int) or attempts < 1:
        raise BadConfigurationError(f"'shortener.max_attempts' must be a positive integer (given value: {attempts!r}).")

    return ShortenerSettings(
        domain=domain.strip().lower() if domain else None,
        shortcode_length=length,
        max_attempts=attempts,
    )
