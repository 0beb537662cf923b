"""
Argument vector normalization.

Shells disagree on whether '=' and ',' end an argument, so the same command
line may reach the program as ["-f=a.txt,b.txt"] or as
["-f", "=", "a.txt", ",", "b.txt"]. tokenize() folds both shapes into the same
flat token list, ["-f", "a.txt", "b.txt"], by splitting every element on '='
first and on ',' second, trimming the pieces and dropping the empty ones.
"""
import shlex

from .logs import get_logger
from .utils import validate_all

logger = get_logger(__name__)

EQUALS = "="
COMMA = ","


def split(argument, /):
    """Yield the trimmed, non-empty pieces of a single argument."""
    for piece in argument.split(EQUALS):
        for fragment in piece.split(COMMA):
            if fragment := fragment.strip():
                yield fragment


def tokenize(arguments, /):
    """
    Normalize an argument vector into atomic tokens.

    Parameters
    - arguments: Sequence[str] exactly as delivered to the process, or a
      single shell-like string, which is split with shlex.split first.

    Returns
    - list[str]: tokens in order of appearance.

    Raises
    - ValidationError: when arguments is empty, too long, or holds a
      non-string element.
    """
    if isinstance(arguments, str):
        arguments = shlex.split(arguments)
    tokens = []
    for argument in validate_all(arguments, "argument", empty=True):
        tokens.extend(split(argument))
    logger.debug("arguments %r tokenized into %r", arguments, tokens)
    return tokens


__all__ = (
    "split",
    "tokenize",
)
