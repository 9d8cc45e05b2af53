"""
Exceptions raised by the env_conf configuration accessors.

Only two failures exist: a required key that no source defines, and a
present value that cannot be coerced to the requested type. Absent optional
values are data, not errors.
"""

from typing import Any


class EnvConfError(Exception):
    """Base exception for all env_conf errors."""
    pass


class MissingConfigurationError(EnvConfError):
    """A required key resolved to absent in every source."""

    def __init__(self, key: str):
        super().__init__(f"missing {key}")
        self.key = key


class InvalidFormatError(EnvConfError, ValueError):
    """A present value could not be coerced to the requested type."""

    def __init__(self, key: str, value: Any, expected: str):
        super().__init__(f"invalid {expected} for {key}: {value!r}")
        self.key = key
        self.value = value
        self.expected = expected
