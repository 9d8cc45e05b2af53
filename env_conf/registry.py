"""
Configuration Registry for env_conf

Single lookup surface over three sources, highest precedence first:

1. Process environment (re-read on every lookup, never cached)
2. Override store (populated from local .env files by load_overrides)
3. Default store (populated by set_default)

The first source that contains the key wins outright, even when its value
is an empty string. Keys are case-insensitive: the environment and override
store are consulted with the upper-case form, the default store with the
lower-case form.

Usage:
    config = ConfigRegistry()
    config.set_default("workers", "4")
    config.load_overrides()

    workers = config.get_int("workers")
    if config.is_production():
        ...
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from dateutil import parser as date_parser
from pydantic import AnyUrl, TypeAdapter, ValidationError

from .errors import InvalidFormatError, MissingConfigurationError
from .overrides import OverrideFileLoader

logger = logging.getLogger(__name__)

_MISSING = object()

_URL_ADAPTER = TypeAdapter(AnyUrl)


def normalize_key(key: str) -> Tuple[str, str]:
    """
    Normalize a key to its environment (upper-case) and symbolic (lower-case) forms.

    Args:
        key: Key in either style, e.g. ``"DATABASE_URL"`` or ``"database_url"``

    Returns:
        Tuple of (upper-case form, lower-case form)
    """
    key = str(key)
    return key.upper(), key.lower()


class RunMode:
    """Run-mode literals recognised by the predicates."""
    PRODUCTION = "production"
    TEST = "test"
    DEVELOPMENT = "development"


class ConfigRegistry:
    """
    Process configuration registry with env > overrides > defaults precedence.

    Constructed once by the host application and passed to whatever needs
    lookups. Not thread-safe: register defaults and load overrides during
    startup, before concurrent readers exist.
    """

    DEFAULT_MODE_KEY = "APP_ENV"

    def __init__(
        self,
        mode_key: str = DEFAULT_MODE_KEY,
        environ: Optional[Mapping[str, str]] = None,
        base_dir: Optional[Path] = None,
    ):
        """
        Initialize the registry.

        Args:
            mode_key: Key holding the run mode (production/test/development)
            environ: Environment source (default: the live ``os.environ``)
            base_dir: Directory holding override files (default: cwd at load time)
        """
        self.mode_key = mode_key
        self._environ = environ
        self._loader = OverrideFileLoader(base_dir)
        self._overrides: Dict[str, str] = {}
        self._defaults: Dict[str, Any] = {}

    @property
    def environ(self) -> Mapping[str, str]:
        """The environment source consulted first on every lookup."""
        if self._environ is None:
            return os.environ
        return self._environ

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _resolve(self, key: str) -> Any:
        upper, lower = normalize_key(key)

        environ = self.environ
        if upper in environ:
            return environ[upper]
        if upper in self._overrides:
            return self._overrides[upper]
        return self._defaults.get(lower, _MISSING)

    def get(self, key: str) -> Any:
        """
        Resolve a key through env, overrides and defaults.

        Args:
            key: Key in either case style

        Returns:
            The first value found (defaults are returned as registered, not
            stringified), or None when no source defines the key
        """
        value = self._resolve(key)
        return None if value is _MISSING else value

    env = get

    def get_or_fail(self, key: str) -> Any:
        """
        Resolve a key that must be configured.

        Raises:
            MissingConfigurationError: If no source defines the key
        """
        value = self.get(key)
        if value is None:
            raise MissingConfigurationError(key)
        return value

    env_or_fail = get_or_fail

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __contains__(self, key: str) -> bool:
        return self._resolve(key) is not _MISSING

    # ------------------------------------------------------------------
    # Stores
    # ------------------------------------------------------------------

    def set_default(self, key: str, value: Any) -> Any:
        """Register a lowest-precedence fallback value for a key."""
        _, lower = normalize_key(key)
        self._defaults[lower] = value
        return value

    @property
    def defaults(self) -> Dict[str, Any]:
        """Copy of the registered defaults, keyed by lower-case name."""
        return dict(self._defaults)

    @property
    def overrides(self) -> Dict[str, str]:
        """Copy of the loaded override values, keyed by upper-case name."""
        return dict(self._overrides)

    def reset(self) -> None:
        """Clear the override and default stores."""
        self._overrides = {}
        self._defaults = {}
        logger.debug("Configuration registry reset")

    def load_overrides(self) -> None:
        """
        Merge local override files into the override store.

        Does nothing in production. Otherwise reads ``.env``, ``.env.local``,
        ``.env.{mode}`` and ``.env.{mode}.local``; later files win, and values
        loaded here win over values from earlier calls.
        """
        if self.is_production():
            logger.info("Production run mode, skipping override files")
            return

        mode = self.get(self.mode_key)
        loaded = self._loader.load(None if mode is None else str(mode))
        self._overrides.update(loaded)
        logger.debug(f"Override store holds {len(self._overrides)} key(s)")

    # ------------------------------------------------------------------
    # Typed accessors
    # ------------------------------------------------------------------

    def get_int(self, key: str) -> Optional[int]:
        """
        Resolve a key as a base-10 integer.

        Returns:
            The integer, or None if the key is absent

        Raises:
            InvalidFormatError: If the value is not an integer
        """
        value = self.get(key)
        if value is None:
            return None
        return self._to_int(key, value)

    def get_bool(self, key: str) -> bool:
        """
        Resolve a key as a flag.

        Only the boolean ``True`` or the exact string ``"true"`` count as
        true. Absent keys and every other value are false.
        """
        value = self.get(key)
        return value is True or value == "true"

    def get_time(self, key: str) -> Optional[datetime]:
        """
        Resolve a key as a datetime.

        Accepts flexible calendar input such as ``2000-2-2`` or
        ``2000-2-2T11:11``, with an optional zone. Values without a zone are
        returned naive.

        Raises:
            InvalidFormatError: If the value cannot be parsed
        """
        value = self.get(key)
        if value is None:
            return None
        if isinstance(value, datetime):
            return value

        try:
            return date_parser.parse(str(value))
        except (ValueError, OverflowError) as e:
            raise InvalidFormatError(key, value, "time") from e

    def get_uri(self, key: str) -> Optional[AnyUrl]:
        """
        Resolve a key as a URI.

        Returns:
            Parsed URL exposing scheme, host, port (scheme default when
            omitted), path, query, username and password; None if absent

        Raises:
            InvalidFormatError: If the value is not a valid absolute URI
        """
        value = self.get(key)
        if value is None:
            return None

        try:
            return _URL_ADAPTER.validate_python(str(value))
        except ValidationError as e:
            raise InvalidFormatError(key, value, "uri") from e

    def get_array(self, key: str) -> List[str]:
        """
        Resolve a key as a comma-separated list.

        Items are not trimmed. Absent and empty values yield an empty list,
        and trailing empty items are dropped.
        """
        value = self.get(key)
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return list(value)

        items = str(value).split(",")
        while items and items[-1] == "":
            items.pop()
        return items

    def _to_int(self, key: str, value: Any) -> int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        try:
            return int(str(value), 10)
        except ValueError as e:
            raise InvalidFormatError(key, value, "integer") from e

    # ------------------------------------------------------------------
    # Run mode
    # ------------------------------------------------------------------

    def is_production(self) -> bool:
        """True if the run mode is ``production``."""
        return self.get(self.mode_key) == RunMode.PRODUCTION

    def is_test(self) -> bool:
        """True if the run mode is ``test``."""
        return self.get(self.mode_key) == RunMode.TEST

    def is_development(self) -> bool:
        """True if the run mode is ``development``."""
        return self.get(self.mode_key) == RunMode.DEVELOPMENT

    def app_env(self) -> str:
        """
        The run mode as a lower-case identifier.

        Raises:
            MissingConfigurationError: If the run-mode key is not configured
        """
        return str(self.get_or_fail(self.mode_key)).lower()

    # ------------------------------------------------------------------
    # Well-known keys
    # ------------------------------------------------------------------

    def app_name(self) -> Optional[str]:
        """Name of the running codebase (``APP_NAME``)."""
        return self.get("APP_NAME")

    def app_deploy(self) -> Optional[str]:
        """Deployment identifier such as local or staging (``APP_DEPLOY``)."""
        return self.get("APP_DEPLOY")

    def port(self) -> int:
        """
        Port to listen on for web requests (``PORT``).

        Raises:
            MissingConfigurationError: If PORT is not configured
            InvalidFormatError: If PORT is not an integer
        """
        return self._to_int("PORT", self.get_or_fail("PORT"))

    def database_url(self, kind: Optional[str] = None) -> str:
        """
        Database connection string.

        Args:
            kind: Optional qualifier; ``"foo"`` reads ``FOO_DATABASE_URL``
                instead of ``DATABASE_URL``

        Raises:
            MissingConfigurationError: If the selected key is not configured
        """
        prefix = f"{kind}_".upper() if kind else ""
        return self.get_or_fail(f"{prefix}DATABASE_URL")
