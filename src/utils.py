import os
import copy
import logging
import logging.handlers
import yaml
from typing import Dict, Any, Optional
from dotenv import load_dotenv

from .exceptions import ConfigurationError


def load_config(config_path: str = 'config.yaml') -> Dict[str, Any]:
    """Load configuration from YAML file with environment variable overrides."""
    # Load environment variables
    load_dotenv()

    config = get_default_config()
    try:
        if os.path.exists(config_path):
            with open(config_path, 'r', encoding='utf-8') as f:
                file_config = yaml.safe_load(f) or {}
            config = merge_config(config, file_config)
    except (OSError, yaml.YAMLError) as e:
        logging.warning(f"Could not load config from {config_path}: {e}")

    # Override with environment variables
    config = apply_env_overrides(config)

    return config


def get_default_config() -> Dict[str, Any]:
    """Get default configuration values."""
    return {
        'cms': {
            'service_domain': None,
            'api_key': None,
            'endpoint': 'articles',
            'page_limit': 100,
            'timeout': 30
        },
        'http': {
            'user_agent': 'cms2mdx/1.0',
            'max_retries': 3,
            'retry_delay': 1
        },
        'markdown': {
            'extension': 'mdx',
            'heading_style': 'ATX',
            'bullets': '-',
            'body_field': 'htmls',
            'rich_field_ids': ['rich'],
            'plain_field_ids': ['plane'],
            'disambiguate_collisions': False
        },
        'logging': {
            'level': 'INFO',
            'log_to_file': False,
            'log_filename': 'cms2mdx.log',
            'rotate_logs': True,
            'logs_dir': 'logs'
        },
        'directories': {
            'output_dir': './output'
        }
    }


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value
    return merged


def apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration."""
    env_mappings = {
        'MICROCMS_SERVICE_DOMAIN': ('cms', 'service_domain', str),
        'MICROCMS_API_KEY': ('cms', 'api_key', str),
        'MICROCMS_ENDPOINT': ('cms', 'endpoint', str),
        'REQUEST_TIMEOUT': ('cms', 'timeout', int),
        'MAX_RETRIES': ('http', 'max_retries', int),
        'OUTPUT_DIR': ('directories', 'output_dir', str),
        'LOG_LEVEL': ('logging', 'level', str),
        'DEBUG_MODE': ('logging', 'level', lambda x: 'DEBUG' if x.lower() == 'true' else config['logging']['level'])
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            try:
                converted_value = converter(value)
                config[section][key] = converted_value
            except (ValueError, TypeError) as e:
                logging.warning(f"Invalid value for {env_var}: {value} - {e}")

    return config


def require_credentials(config: Dict[str, Any]) -> None:
    """Fail fast when the service domain or API key is missing."""
    cms_config = config.get('cms', {})
    missing = [name for name, key in (('service domain', 'service_domain'), ('API key', 'api_key'))
               if not cms_config.get(key)]
    if missing:
        raise ConfigurationError(
            f"microCMS {' and '.join(missing)} required. "
            "Use --domain/--api-key or MICROCMS_SERVICE_DOMAIN/MICROCMS_API_KEY."
        )


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    """Mask all but the last characters of a secret for logging."""
    if not value:
        return ''
    if len(value) <= visible:
        return '*' * len(value)
    return '*' * (len(value) - visible) + value[-visible:]


def setup_logging(logging_config: Dict[str, Any]) -> logging.Logger:
    """Setup logging configuration."""
    level = getattr(logging, str(logging_config.get('level', 'INFO')).upper(), logging.INFO)

    # Configure logging
    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if logging_config.get('log_to_file', False):
        logs_dir = logging_config.get('logs_dir', 'logs')
        os.makedirs(logs_dir, exist_ok=True)
        log_filename = os.path.join(logs_dir, logging_config.get('log_filename', 'cms2mdx.log'))

        if logging_config.get('rotate_logs', True):
            # Rotating file handler
            file_handler = logging.handlers.RotatingFileHandler(
                log_filename,
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5,
                encoding='utf-8'
            )
        else:
            file_handler = logging.FileHandler(log_filename, encoding='utf-8')

        file_handler.setLevel(logging.DEBUG)  # File gets all logs
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
