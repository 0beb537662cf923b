"""
Property sinks for the -D<key>=<value> escape hatch.

The matcher only needs an object with set(key, value). Two sinks ship with the
package:

- Properties: an in-memory, insertion-ordered mapping (the default sink of a
  session, so parsing never leaks into the process environment);
- EnvironmentProperties: writes through to os.environ, the closest Python
  analogue of process-wide system properties.
"""
import os
from collections.abc import MutableMapping
from typing import Protocol, runtime_checkable

from .logs import get_logger

logger = get_logger(__name__)


@runtime_checkable
class PropertySink(Protocol):
    def set(self, key: str, value: str) -> None: ...


class Properties(MutableMapping):
    """In-memory property store."""

    def __init__(self, *args, **kwargs):
        self._data = dict(*args, **kwargs)

    def set(self, key, value):
        logger.debug("setting property %s=%s", key, value)
        self[key] = value

    def __getitem__(self, key):
        return self._data[key]

    def __setitem__(self, key, value):
        self._data[key] = value

    def __delitem__(self, key):
        del self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

    def __repr__(self):
        return f"properties({self._data!r})"


class EnvironmentProperties:
    """Property sink backed by os.environ (or another str → str mapping)."""

    def __init__(self, environ=None):
        self._environ = os.environ if environ is None else environ

    def set(self, key, value):
        logger.debug("setting environment variable %s=%s", key, value)
        self._environ[key] = value

    def get(self, key, default=None):
        return self._environ.get(key, default)


__all__ = (
    "PropertySink",
    "Properties",
    "EnvironmentProperties",
)
