from linkshortener.utils.config import app_env, app_name, project_root, app_prefix, load_config, shortener_settings
from linkshortener.utils.helpers import base_url, get_short_url, request_domain, require_environment, guarantee_500_response
from linkshortener.utils.shortener import generate_shortcode
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'project_root',
    'load_config',
    'shortener_settings',
    'base_url',
    'get_short_url',
    'request_domain',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
