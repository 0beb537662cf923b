"""
Definition registry owned by a session.

The registry maps every alias to its CommandDefinition, remembers the
variable names claimed so far (they are unique across definitions), and feeds
command names into the SuggestionIndex. register() is all-or-nothing: a
definition that fails to compile or collides with an existing alias leaves
the registry exactly as it was.
"""
from types import MappingProxyType

from . import definitions
from .faults import DuplicateError, FaultCode
from .logs import get_logger
from .suggestions import SuggestionIndex

logger = get_logger(__name__)


class Registry:

    def __init__(self):
        self._definitions = {}
        self._variables = set()
        self._suggestions = SuggestionIndex()

    @property
    def definitions(self):
        """Read-only alias → definition view."""
        return MappingProxyType(self._definitions)

    @property
    def variables(self):
        return frozenset(self._variables)

    @property
    def suggestions(self):
        return self._suggestions

    def register(self, source, /):
        """
        Compile a definition (string or pre-split clauses) and store it.

        Returns the CommandDefinition. Raises the compiler's faults, or
        DuplicateError when one of its names is already registered.
        """
        definition = definitions.compile(definitions.tokenize(source), self._variables)

        for name in definition.names:
            if name in self._definitions:
                raise DuplicateError(
                    "command %r has already been defined" % name,
                    title="duplicate command",
                    code=FaultCode.DUPLICATE_NAME,
                    input=name,
                    hint="choose another name or alias for this command",
                )

        for name in definition.names:
            self._definitions[name] = definition
            self._suggestions.add(name)
        self._variables.update(definition.variables)

        logger.debug("registered %r", definition)
        return definition

    def lookup(self, name, /):
        """Return the definition registered under name, or None."""
        return self._definitions.get(name)

    def unique(self):
        """Registered definitions without alias repeats, in registration order."""
        seen = []
        for definition in self._definitions.values():
            if not any(definition is other for other in seen):
                seen.append(definition)
        return seen

    def clear(self):
        """Forget every definition, variable and suggestion (idempotent)."""
        self._definitions.clear()
        self._variables.clear()
        self._suggestions.clear()

    def __contains__(self, name):
        return name in self._definitions

    def __len__(self):
        return len(self.unique())

    def __iter__(self):
        return iter(self.unique())


__all__ = (
    "Registry",
)
