from urlshort.utils.config import app_env, app_name, app_prefix, load_config, mappings_file, public_host
from urlshort.utils.helpers import base_url, get_short_url, is_valid_url, require_environment, guarantee_500_response
from urlshort.utils.shortener import generate_shortcode
from urlshort.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'mappings_file',
    'public_host',
    'base_url',
    'get_short_url',
    'is_valid_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
