"""
Matching a token stream against a registry.

The matcher drains a deque of tokens front to back in a single loop:

- a token naming a registered command starts a Command; the values that
  command expects are consumed right away (required scalars, the required list,
  optional scalars, the optional list) and the finished Command is emitted;
- a token containing "-D<key>" is a property escape hatch: the next token is
  its value, the pair goes to the property sink, and a one-variable Command
  named after the token is emitted;
- anything else stops the parse with UnsupportedError and ranked suggestions.

Lists are greedy up to the next registered command name; a property token met
inside a list window takes the property path instead of joining the list.
Commands are emitted only once complete, in consumption order, to the result
list and to the optional listener.

Messages are position-first ("at third position") using the 1-based index of
the offending token in the tokenized stream.
"""
from collections import deque

from .commands import Command
from .faults import FaultCode, MatchError, MissingError, UnsupportedError
from .logs import get_logger
from .utils import ordinal

logger = get_logger(__name__)

PROPERTY_MARKER = "-D"


class Matcher:
    """
    Single-use consumer of one token stream.

    Parameters
    - registry: Registry holding the compiled definitions.
    - sink: object with set(key, value) receiving -D properties.
    - listener: optional callable receiving each Command as it is produced.
    """

    def __init__(self, registry, sink, listener=None):
        self._registry = registry
        self._sink = sink
        self._listener = listener
        self._tokens = deque()
        self._index = 0
        self._commands = []

    def match(self, tokens, /):
        """Consume every token and return the produced Commands in order."""
        self._tokens = deque(tokens)
        self._index = 0
        self._commands = []

        while self._tokens:
            token = self._pop()
            definition = self._registry.lookup(token)
            if definition is not None:
                self._emit(self._consume(token, definition))
            elif not self._property(token):
                self._unknown(token)

        return list(self._commands)

    def _pop(self):
        self._index += 1
        return self._tokens.popleft()

    def _ahead_is_command(self):
        return bool(self._tokens) and self._tokens[0] in self._registry

    def _emit(self, command):
        logger.debug("matched %r", command)
        self._commands.append(command)
        if self._listener is not None:
            self._listener(command)

    def _property(self, token):
        """Handle token as -D<key> <value>; return False when it is not one."""
        position = token.find(PROPERTY_MARKER)
        if position < 0 or not self._tokens:
            return False
        key = token[position + len(PROPERTY_MARKER):]
        if not key:
            return False

        value = self._pop()
        logger.debug("setting property %s=%s", key, value)
        self._sink.set(key, value)

        command = Command(token)
        command.add(key, value)
        self._emit(command)
        return True

    def _unknown(self, token):
        suggestions = self._registry.suggestions.suggest(token)
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "check the spelling against the defined commands"
        raise UnsupportedError(
            "command %r at %s position is not defined" % (token, ordinal(self._index)),
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            input=token,
            index=self._index,
            suggestions=suggestions,
            hint=hint,
        )

    def _accept(self, definition, variable, value):
        pattern = definition.pattern
        if pattern is not None and not pattern.fullmatch(value):
            raise MatchError(
                "value %r for %r at %s position does not match the pattern %r" % (
                    value, variable, ordinal(self._index), pattern.pattern
                ),
                title="value does not match",
                code=FaultCode.PATTERN_MISMATCH,
                input=value,
                index=self._index,
                variable=variable,
                pattern=pattern.pattern,
                hint="give %r a value matching %s" % (variable, pattern.pattern),
            )
        return value

    def _missing(self, token, variable):
        return MissingError(
            "command %r at %s position is missing a value for %r" % (token, ordinal(self._index), variable),
            title="missing value",
            code=FaultCode.MISSING_VALUE,
            input=token,
            index=self._index,
            variable=variable,
            hint="add a value for %r after %r" % (variable, token),
        )

    def _consume(self, token, definition):
        """Build the Command for token by draining the values definition expects."""
        command = Command(token)

        for variable in definition.required:
            if not self._tokens:
                raise self._missing(token, variable)
            command.add(variable, self._accept(definition, variable, self._pop()))

        if definition.required_list:
            self._consume_list(command, definition, definition.required_list, required=True)

        for variable in definition.optional:
            if not self._tokens:
                break
            command.add(variable, self._accept(definition, variable, self._pop()))

        if definition.optional_list:
            self._consume_list(command, definition, definition.optional_list, required=False)

        return command

    def _consume_list(self, command, definition, variable, *, required):
        collected = 0
        while self._tokens and not self._ahead_is_command():
            value = self._pop()
            if self._property(value):
                continue
            command.add(variable, self._accept(definition, variable, value))
            collected += 1

        if required and not collected:
            raise self._missing(command.name, variable)


__all__ = (
    "Matcher",
    "PROPERTY_MARKER",
)
