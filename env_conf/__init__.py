"""
env_conf: environment-derived configuration accessors

Provides a single lookup surface with:
- Precedence rules (process env > local .env override files > defaults)
- Case-insensitive keys (``DATABASE_URL`` and ``database_url`` are the same key)
- Typed accessors (int, bool, time, URI, comma-separated list)
- Run-mode predicates and well-known keys (APP_ENV, PORT, DATABASE_URL, ...)

``ConfigRegistry`` is the primary API. The module-level functions below
operate on a shared process-wide registry, ``env_conf.config``.
"""

from .errors import EnvConfError, InvalidFormatError, MissingConfigurationError
from .logging_config import configure_logging, configure_logging_from_config
from .overrides import OverrideFileLoader
from .registry import ConfigRegistry, RunMode, normalize_key

config = ConfigRegistry()

get = config.get
env = config.env
get_or_fail = config.get_or_fail
env_or_fail = config.env_or_fail
set_default = config.set_default
reset = config.reset
load_overrides = config.load_overrides
get_int = config.get_int
get_bool = config.get_bool
get_time = config.get_time
get_uri = config.get_uri
get_array = config.get_array
is_production = config.is_production
is_test = config.is_test
is_development = config.is_development
app_env = config.app_env
app_name = config.app_name
app_deploy = config.app_deploy
port = config.port
database_url = config.database_url


def defaults():
    """Copy of the shared registry's defaults (``config.defaults`` is a property)."""
    return config.defaults


__all__ = [
    "ConfigRegistry",
    "OverrideFileLoader",
    "RunMode",
    "normalize_key",
    "EnvConfError",
    "MissingConfigurationError",
    "InvalidFormatError",
    "configure_logging",
    "configure_logging_from_config",
    "config",
    "get",
    "env",
    "get_or_fail",
    "env_or_fail",
    "set_default",
    "defaults",
    "reset",
    "load_overrides",
    "get_int",
    "get_bool",
    "get_time",
    "get_uri",
    "get_array",
    "is_production",
    "is_test",
    "is_development",
    "app_env",
    "app_name",
    "app_deploy",
    "port",
    "database_url",
]

__version__ = "1.0.0"
