r"""
Clausal definition grammar: clauses → tokens → CommandDefinition.

Grammar
- A definition is a comma-delimited string, or a sequence of already split
  clauses. Each clause is classified by its leading sigil:
  • '#text'      → DESCRIPTION (zero or one)
  • ':regex'     → REGEX_VALUE (zero or one, full-matched against every value)
  • '!name'      → REQUIRED_VALUE, '!name...' → REQUIRED_LIST_VALUE
  • '?name'      → OPTIONAL_VALUE, '?name...' → OPTIONAL_LIST_VALUE
  • anything else → COMMAND (one or more aliases)

Compile-time rules (the first violation wins, nothing is stored)
- at least one command name, none containing whitespace;
- at most one description, one regex and one list variable;
- every required value is declared before any optional value;
- variable names are unique across every definition of a registry.

Examples
    "file, !name, :\d+\.txt, #Load a file"
    "-f, --file, !first, ?rest..., #Load files"
"""
import re
from enum import Enum
from typing import NamedTuple

from .faults import DuplicateError, FaultCode, MissingError, UnsupportedError
from .logs import get_logger
from .utils import IntrospectiveType, validate, validate_all

logger = get_logger(__name__)

_SEPARATOR = re.compile(r"\s*,\s*")
_LIST_SUFFIX = "..."


class TokenKind(Enum):
    COMMAND = "command"
    DESCRIPTION = "description"
    REQUIRED_VALUE = "required value"
    OPTIONAL_VALUE = "optional value"
    REGEX_VALUE = "regex"
    REQUIRED_LIST_VALUE = "required list"
    OPTIONAL_LIST_VALUE = "optional list"


class Token(NamedTuple):
    kind: TokenKind
    value: str


def clauses(source, /):
    """
    Normalize a definition into its clause strings.

    A single string is split on commas (surrounding whitespace dropped). A
    sequence is taken as already split: each element is stripped but never
    split again, so a regex clause may contain commas. Empty clauses vanish.
    """
    if isinstance(source, str):
        pieces = _SEPARATOR.split(validate(source, "definition").strip())
    else:
        pieces = [piece.strip() for piece in validate_all(source, "definition clause")]
    return [piece for piece in pieces if piece]


def classify(clause, /):
    """Turn one clause into a Token according to its leading sigil."""
    match clause[:1]:
        case "#":
            return Token(TokenKind.DESCRIPTION, clause[1:].strip())
        case ":":
            return Token(TokenKind.REGEX_VALUE, clause[1:].strip())
        case "!" | "?" as sigil:
            required = sigil == "!"
            if clause.endswith(_LIST_SUFFIX):
                kind = TokenKind.REQUIRED_LIST_VALUE if required else TokenKind.OPTIONAL_LIST_VALUE
                return Token(kind, clause[1:-len(_LIST_SUFFIX)])
            return Token(TokenKind.REQUIRED_VALUE if required else TokenKind.OPTIONAL_VALUE, clause[1:])
        case _:
            return Token(TokenKind.COMMAND, clause)


def tokenize(source, /):
    """Return the Token sequence of a definition (string or pre-split clauses)."""
    tokens = [classify(clause) for clause in clauses(source)]
    logger.debug("definition %r tokenized into %d tokens", source, len(tokens))
    return tokens


class CommandDefinition(metaclass=IntrospectiveType):
    """
    A compiled, immutable command definition.

    All aliases in names resolve to this same definition. The regex, when
    present, is compiled once here and exposed as pattern for the matcher.
    """

    __introspectable__ = (
        "names",
        "description",
        "regex",
        "required",
        "optional",
        "required_list",
        "optional_list",
    )

    def __init__(
            self,
            names,
            /,
            description=None,
            regex=None,
            required=(),
            optional=(),
            required_list=None,
            optional_list=None,
    ):
        if not names:
            raise ValueError("a command definition needs at least one name")
        if required_list and optional_list:
            raise ValueError("a command definition holds at most one list")
        self._names = tuple(names)
        self._description = description
        self._regex = regex
        self._required = tuple(required)
        self._optional = tuple(optional)
        self._required_list = required_list
        self._optional_list = optional_list
        self._pattern = re.compile(regex) if regex else None

    @property
    def name(self):
        """The canonical (first declared) name."""
        return self._names[0]

    @property
    def pattern(self):
        return self._pattern

    @property
    def variables(self):
        """Every declared variable name, in consumption order."""
        return tuple(
            name for name in (
                *self._required,
                self._required_list,
                *self._optional,
                self._optional_list,
            ) if name
        )

    def __eq__(self, other):
        if not isinstance(other, CommandDefinition):
            return NotImplemented
        return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash(self._names)


def _check_name(token):
    if not token.value:
        raise MissingError(
            "a %s clause is missing its name" % token.kind.value,
            title="missing name",
            code=FaultCode.MISSING_NAME,
            input=token.value,
            hint="write the name right after the sigil (for example: !fileName)",
        )
    if any(char.isspace() for char in token.value):
        raise UnsupportedError(
            "%s %r contains whitespace" % (token.kind.value, token.value),
            title="whitespace in name",
            code=FaultCode.WHITESPACE_NAME,
            input=token.value,
            suggestions=[],
            hint="the definition may need a comma between the names",
        )


def compile(tokens, variables=frozenset(), /):
    """
    Fold a Token sequence into a CommandDefinition.

    Parameters
    - tokens: Iterable[Token], in source order.
    - variables: variable names already claimed by other definitions.

    Raises the first DuplicateError / MissingError / UnsupportedError met while
    walking the tokens left to right. Nothing outside the returned object is
    mutated, so a failure leaves the caller's registry untouched.
    """
    names = []
    description = None
    regex = None
    required = []
    optional = []
    required_list = None
    optional_list = None

    claimed = set()
    has_description = False
    has_regex = False
    has_list = False
    has_optional = False

    def claim(token):
        _check_name(token)
        if token.value in variables or token.value in claimed:
            raise DuplicateError(
                "variable %r has already been defined" % token.value,
                title="duplicate variable",
                code=FaultCode.DUPLICATE_VARIABLE,
                input=token.value,
                hint="variable names are unique across all commands; choose another name",
            )
        claimed.add(token.value)

    def forbid_optional_before(token):
        if has_optional:
            raise UnsupportedError(
                "required %r is declared after an optional variable" % token.value,
                title="required after optional",
                code=FaultCode.REQUIRED_AFTER_OPTIONAL,
                input=token.value,
                suggestions=[],
                hint="declare every !required value before any ?optional value",
            )

    def forbid_second_list(token):
        if has_list:
            raise UnsupportedError(
                "list %r is a second list for this command" % token.value,
                title="second list",
                code=FaultCode.SECOND_LIST,
                input=token.value,
                suggestions=[],
                hint="a command can declare only one list variable (name...)",
            )

    for token in tokens:
        match token.kind:
            case TokenKind.COMMAND:
                _check_name(token)
                if token.value in names:
                    raise DuplicateError(
                        "command %r is repeated in its own definition" % token.value,
                        title="duplicate command",
                        code=FaultCode.DUPLICATE_NAME,
                        input=token.value,
                        hint="list every alias once",
                    )
                names.append(token.value)
            case TokenKind.DESCRIPTION:
                if has_description:
                    raise DuplicateError(
                        "description %r has already been defined" % token.value,
                        title="duplicate description",
                        code=FaultCode.DUPLICATE_DESCRIPTION,
                        input=token.value,
                        hint="keep a single #description clause",
                    )
                description = token.value or None
                has_description = True
            case TokenKind.REGEX_VALUE:
                if has_regex:
                    raise DuplicateError(
                        "regex %r has already been defined" % token.value,
                        title="duplicate regex",
                        code=FaultCode.DUPLICATE_REGEX,
                        input=token.value,
                        hint="keep a single :regex clause",
                    )
                try:
                    re.compile(token.value)
                except re.error as error:
                    raise UnsupportedError(
                        "regex %r does not compile: %s" % (token.value, error),
                        title="invalid regex",
                        code=FaultCode.INVALID_REGEX,
                        input=token.value,
                        pattern=token.value,
                        suggestions=[],
                        hint="fix the pattern after ':'",
                    ) from None
                regex = token.value or None
                has_regex = True
            case TokenKind.REQUIRED_VALUE:
                forbid_optional_before(token)
                claim(token)
                required.append(token.value)
            case TokenKind.REQUIRED_LIST_VALUE:
                forbid_optional_before(token)
                forbid_second_list(token)
                claim(token)
                required_list = token.value
                has_list = True
            case TokenKind.OPTIONAL_VALUE:
                claim(token)
                optional.append(token.value)
                has_optional = True
            case TokenKind.OPTIONAL_LIST_VALUE:
                forbid_second_list(token)
                claim(token)
                optional_list = token.value
                has_list = True
                has_optional = True
            case _:
                raise UnsupportedError(
                    "token %r has an unknown kind %r" % (token.value, token.kind),
                    title="unknown token",
                    code=FaultCode.UNKNOWN_TOKEN_KIND,
                    input=token.value,
                    suggestions=[],
                    hint="use one of the sigils '#', ':', '!', '?' or a plain name",
                )

    if not names:
        raise MissingError(
            "the definition declares no command name",
            title="missing command name",
            code=FaultCode.MISSING_NAME,
            hint="start the definition with a name (for example: \"file, !fileName\")",
        )

    return CommandDefinition(
        names,
        description=description,
        regex=regex,
        required=required,
        optional=optional,
        required_list=required_list,
        optional_list=optional_list,
    )


__all__ = (
    "TokenKind",
    "Token",
    "CommandDefinition",
    "clauses",
    "classify",
    "tokenize",
    "compile",
)
