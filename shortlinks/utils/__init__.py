from shortlinks.utils.config import app_env, app_name, app_prefix, load_config
from shortlinks.utils.helpers import days_ago, require_environment
from shortlinks.utils.runtime import running_locally
from shortlinks.utils.logging import initialize_logging


__all__ = [
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'days_ago',
    'require_environment',
    'running_locally',
    'initialize_logging',
]
