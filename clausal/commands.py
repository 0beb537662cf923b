"""
Parse results.

A Command is produced by the matcher for every recognized command token and
for every -D<key> property token. It carries the token as name and a
multi-valued variable map whose lists keep the order in which values were
consumed. Values are only appended while the matcher builds the command; the
host receives read-only copies.
"""
from .utils import IntrospectiveType


class Command(metaclass=IntrospectiveType):
    """
    One matched command.

    Example
        >>> command = Command("file")
        >>> command.add("name", "1.txt")
        >>> command.values("name")
        ['1.txt']
    """

    __introspectable__ = (
        "name",
        "variables",
    )

    def __init__(self, name, /):
        if not isinstance(name, str) or not name:
            raise TypeError("Command() argument must be a non-empty string")
        self._name = name
        self._variables = {}

    def add(self, variable, value, /):
        """Append value to variable (used while the command is being built)."""
        self._variables.setdefault(variable, []).append(value)

    def values(self, variable, /):
        """Return a copy of every value of variable ([] when it has none)."""
        return list(self._variables.get(variable, ()))

    def value(self, variable, default=None, /):
        """Return the first value of variable, or default."""
        try:
            return self._variables[variable][0]
        except (KeyError, IndexError):
            return default

    def has_variables(self):
        return bool(self._variables)

    def __contains__(self, variable):
        return variable in self._variables

    def __eq__(self, other):
        if not isinstance(other, Command):
            return NotImplemented
        return self._name == other._name and self._variables == other._variables

    def __hash__(self):
        return hash(self._name)


__all__ = (
    "Command",
)
